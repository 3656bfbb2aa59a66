"""Shared pytest fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from reply_advisor.config import settings
from reply_advisor.main import app
from reply_advisor.utils.openai_client import get_openai_client
from tests.fakes import AUTH_PASSWORD, AUTH_USER, FakeOpenAI, InMemoryClientRepository


@pytest.fixture
def corpus_dir(tmp_path):
    path = tmp_path / "learning"
    path.mkdir()
    return path


@pytest.fixture
def configured_settings(monkeypatch, tmp_path, corpus_dir):
    """Settings with auth and model credentials pointing at temp storage."""
    monkeypatch.setattr(settings, "basic_auth_user", AUTH_USER)
    monkeypatch.setattr(settings, "basic_auth_password", AUTH_PASSWORD)
    monkeypatch.setattr(settings, "openai_api_key", "sk-test-key")
    monkeypatch.setattr(settings, "corpus_dir", corpus_dir)
    monkeypatch.setattr(settings, "roster_path", tmp_path / "roster.json")
    get_openai_client.cache_clear()
    yield settings
    get_openai_client.cache_clear()


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def api(configured_settings, fake_openai):
    """TestClient with the OpenAI client replaced by a fake."""
    app.dependency_overrides[get_openai_client] = lambda: fake_openai
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def memory_repo():
    return InMemoryClientRepository()
