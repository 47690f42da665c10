"""
Tests for the JSON chat completion helper.
"""

import httpx
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
from openai import APIConnectionError

from shared import llm
from shared.errors import ConfigError, TransientExternalError, ValidationError


def completion(content, prompt_tokens=120, completion_tokens=40):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    with patch("shared.llm.get_openai_client", return_value=client):
        yield client


@pytest.mark.asyncio
async def test_complete_json_success(openai_client):
    openai_client.chat.completions.create.return_value = completion('{"title": "Engineer"}')

    payload, usage = await llm.complete_json("system", "user", model="gpt-4o-mini", temperature=0.3)

    assert payload == {"title": "Engineer"}
    assert usage == {"input_tokens": 120, "output_tokens": 40}
    kwargs = openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0] == {"role": "system", "content": "system"}
    assert kwargs["temperature"] == 0.3


@pytest.mark.asyncio
@pytest.mark.parametrize("content,message", [
    ("", "No content"),
    ("not json", "Invalid JSON"),
    ("[1, 2]", "not a JSON object"),
])
async def test_complete_json_bad_content(openai_client, content, message):
    openai_client.chat.completions.create.return_value = completion(content)

    with pytest.raises(ValidationError, match=message):
        await llm.complete_json("system", "user", model="gpt-4o", temperature=0.8)


@pytest.mark.asyncio
async def test_complete_json_connection_error(openai_client):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    openai_client.chat.completions.create.side_effect = APIConnectionError(request=request)

    with pytest.raises(TransientExternalError, match="API connection error"):
        await llm.complete_json("system", "user", model="gpt-4o", temperature=0.8, job_id="r_abc")


def test_client_requires_api_key(monkeypatch):
    monkeypatch.setattr(llm, "_openai_client", None)
    monkeypatch.setattr(llm.settings, "openai_api_key", None)

    with pytest.raises(ConfigError, match="OPENAI_API_KEY"):
        llm.get_openai_client()
