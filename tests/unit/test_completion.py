"""Unit tests for the shared chat completion client."""

from types import SimpleNamespace

import pytest

from app.services.completion import CompletionClient
from tests.fakes import make_settings


class _FakeCompletions:
    def __init__(self, choices):
        self.choices = choices
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(choices=self.choices)


class _FakeSDK:
    def __init__(self, choices):
        self.completions = _FakeCompletions(choices)
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    async def close(self):
        self.closed = True


def _choice(content):
    return SimpleNamespace(message=SimpleNamespace(content=content))


@pytest.mark.asyncio
async def test_complete_json_sends_json_mode_request():
    sdk = _FakeSDK([_choice('{"plan": "x"}')])
    client = CompletionClient(api_key="sk-test", model="gpt-4o-mini", client=sdk)

    text = await client.complete_json("system prompt", "user prompt", 0.4)

    assert text == '{"plan": "x"}'
    assert sdk.completions.kwargs == {
        "model": "gpt-4o-mini",
        "messages": [
            {"role": "system", "content": "system prompt"},
            {"role": "user", "content": "user prompt"},
        ],
        "temperature": 0.4,
        "response_format": {"type": "json_object"},
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("choices", [[], [_choice(None)], [_choice("")]])
async def test_empty_reply_becomes_empty_object(choices):
    client = CompletionClient(api_key="sk-test", model="m", client=_FakeSDK(choices))
    assert await client.complete_json("s", "u", 0.3) == "{}"


@pytest.mark.asyncio
async def test_close_releases_sdk_client():
    sdk = _FakeSDK([])
    client = CompletionClient(api_key="sk-test", model="m", client=sdk)
    await client.close()
    assert sdk.closed


def test_from_settings_without_key_builds_nothing():
    assert CompletionClient.from_settings(make_settings(openai_api_key="")) is None


def test_from_settings_with_key_uses_configured_model():
    client = CompletionClient.from_settings(make_settings(openai_model="gpt-4o"))
    assert client is not None
    assert client.model == "gpt-4o"
