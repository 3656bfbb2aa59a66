"""Tests for the JSON file roster store."""

from __future__ import annotations

import asyncio
import json

import pytest
from pydantic import ValidationError

from reply_advisor.core.models.client import Client, ClientStatus, ConversationMessage, Sender
from reply_advisor.core.repositories.implementations.json_file.client_repository import (
    JsonFileClientRepository,
)


def test_missing_file_is_empty_roster(tmp_path):
    repo = JsonFileClientRepository(tmp_path / "roster.json")

    assert asyncio.run(repo.get_all()) == []


def test_blank_file_is_empty_roster(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text("  \n", encoding="utf-8")

    assert asyncio.run(JsonFileClientRepository(path).get_all()) == []


def test_save_then_load_preserves_order_and_messages(tmp_path):
    repo = JsonFileClientRepository(tmp_path / "nested" / "roster.json")
    first = Client(
        name="Yuki",
        status=ClientStatus.VIP,
        memo="likes cats",
        messages=[
            ConversationMessage(content="hi", sender=Sender.USER),
            ConversationMessage(content="[Selected reply]\nhello", sender=Sender.ASSISTANT),
        ],
    )
    second = Client(name="Mai")

    asyncio.run(repo.save_all([first, second]))
    loaded = asyncio.run(repo.get_all())

    assert loaded == [first, second]


def test_file_holds_single_json_array(tmp_path):
    path = tmp_path / "roster.json"
    repo = JsonFileClientRepository(path)

    asyncio.run(repo.save_all([Client(name="Yuki")]))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert isinstance(data, list)
    assert data[0]["name"] == "Yuki"
    assert data[0]["status"] == "new"
    assert data[0]["messages"] == []
    assert [p.name for p in tmp_path.iterdir()] == ["roster.json"]


def test_last_save_wins(tmp_path):
    path = tmp_path / "roster.json"
    repo_a = JsonFileClientRepository(path)
    repo_b = JsonFileClientRepository(path)

    asyncio.run(repo_a.save_all([Client(name="A")]))
    asyncio.run(repo_b.save_all([Client(name="B")]))

    assert [c.name for c in asyncio.run(repo_a.get_all())] == ["B"]


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValidationError):
        asyncio.run(JsonFileClientRepository(path).get_all())
