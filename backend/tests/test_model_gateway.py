"""Tests for the OpenAI-backed model gateway and client factory."""

from __future__ import annotations

import asyncio

import pytest

from reply_advisor.config import settings
from reply_advisor.core.errors import ModelConfigurationError, ModelGatewayError
from reply_advisor.core.schemas.image import ImageInput
from reply_advisor.core.services.model_gateway import ModelGateway
from reply_advisor.utils.openai_client import get_openai_client

from tests.fakes import FakeOpenAI


def test_text_only_request():
    fake = FakeOpenAI(output_text="[candidate 1]\nhi")
    gateway = ModelGateway(fake, "gpt-test")

    result = asyncio.run(gateway.generate("PROMPT"))

    assert result == "[candidate 1]\nhi"
    call = fake.responses.calls[0]
    assert call["model"] == "gpt-test"
    assert call["input"] == [
        {"role": "user", "content": [{"type": "input_text", "text": "PROMPT"}]}
    ]


def test_image_request_attaches_data_url():
    fake = FakeOpenAI(output_text="ok")
    gateway = ModelGateway(fake, "gpt-test")
    image = ImageInput(mime_type="image/png", data="aGVsbG8=")

    asyncio.run(gateway.generate("PROMPT", image=image))

    content = fake.responses.calls[0]["input"][0]["content"]
    assert content[1] == {"type": "input_image", "image_url": "data:image/png;base64,aGVsbG8="}


def test_none_output_text_becomes_empty_string():
    gateway = ModelGateway(FakeOpenAI(output_text=None), "gpt-test")

    assert asyncio.run(gateway.generate("PROMPT")) == ""


def test_api_failure_wrapped_with_original_message():
    fake = FakeOpenAI(error=RuntimeError("quota exceeded"))
    gateway = ModelGateway(fake, "gpt-test")

    with pytest.raises(ModelGatewayError, match="Failed to generate replies: quota exceeded"):
        asyncio.run(gateway.generate("PROMPT"))
    assert len(fake.responses.calls) == 1


def test_openai_client_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", None)
    get_openai_client.cache_clear()

    with pytest.raises(ModelConfigurationError, match="APP_OPENAI_API_KEY"):
        get_openai_client()


def test_openai_client_disables_retries(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test-key")
    get_openai_client.cache_clear()
    try:
        client = get_openai_client()
        assert client.max_retries == 0
        assert get_openai_client() is client
    finally:
        get_openai_client.cache_clear()
