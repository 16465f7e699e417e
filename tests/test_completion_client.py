"""
Completion client tests. The remote API is replaced by httpx.MockTransport,
so every failure mode can be produced without a network.
"""
import json

import httpx
import pytest
from pydantic import ValidationError

from app.core.config import CompletionSettings
from app.services.completion_client import (
    DEGRADED_OUTPUT,
    Completed,
    CompletionClient,
    Degraded,
)
from conftest import LLM_URL, TEST_COMPLETION_SETTINGS, completion_body, make_completion_client


async def test_success_returns_first_choice_content():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"choices": [
                {"message": {"content": "first"}},
                {"message": {"content": "second"}},
            ]},
        )

    result = await make_completion_client(handler).complete("Explain this clearly:\nhi")

    assert result == Completed(text="first")
    assert result.text == "first"
    assert seen["url"] == LLM_URL
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"] == {
        "model": "test-model",
        "messages": [{"role": "user", "content": "Explain this clearly:\nhi"}],
    }


async def test_content_is_returned_verbatim():
    client = make_completion_client(
        lambda request: httpx.Response(200, json=completion_body("  padded\n"))
    )
    assert (await client.complete("p")).text == "  padded\n"


async def test_network_error_is_degraded():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await make_completion_client(handler).complete("p")

    assert isinstance(result, Degraded)
    assert result.text == DEGRADED_OUTPUT


async def test_timeout_is_degraded():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    assert isinstance(await make_completion_client(handler).complete("p"), Degraded)


@pytest.mark.parametrize("status_code", [400, 401, 429, 500, 503])
async def test_non_2xx_is_degraded(status_code):
    client = make_completion_client(
        lambda request: httpx.Response(status_code, json=completion_body("ignored"))
    )
    result = await client.complete("p")

    assert isinstance(result, Degraded)
    assert result.reason == f"status {status_code}"


async def test_only_one_attempt_is_made():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(429, json={"error": "rate limited"})

    await make_completion_client(handler).complete("p")
    assert len(calls) == 1


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"not json",
        b"[]",
        b"null",
        b"{}",
        b'{"choices": []}',
        b'{"choices": null}',
        b'{"choices": ["text"]}',
        b'{"choices": [{}]}',
        b'{"choices": [{"message": null}]}',
        b'{"choices": [{"message": {"role": "assistant"}}]}',
        b'{"choices": [{"message": {"content": null}}]}',
    ],
)
async def test_malformed_body_is_degraded(body):
    client = make_completion_client(lambda request: httpx.Response(200, content=body))
    result = await client.complete("p")

    assert isinstance(result, Degraded)
    assert result.text == DEGRADED_OUTPUT


async def test_missing_api_key_is_degraded_without_calling_out():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=completion_body("x"))

    config = CompletionSettings(url=LLM_URL, api_key=None, model="m")
    client = CompletionClient(config, transport=httpx.MockTransport(handler))

    assert isinstance(await client.complete("p"), Degraded)
    assert calls == []


async def test_unsendable_api_key_is_degraded():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=completion_body("x"))

    # header values must be ASCII, so the request is never built
    config = CompletionSettings(url=LLM_URL, api_key="ключ", model="m")
    client = CompletionClient(config, transport=httpx.MockTransport(handler))

    result = await client.complete("p")

    assert isinstance(result, Degraded)
    assert result.reason == "unexpected error: UnicodeEncodeError"
    assert result.text == DEGRADED_OUTPUT
    assert calls == []


def test_completion_settings_are_immutable():
    with pytest.raises(Exception):
        TEST_COMPLETION_SETTINGS.api_key = "other"


def test_results_are_immutable():
    completed = Completed(text="done")
    degraded = Degraded(reason="status 503")

    with pytest.raises(ValidationError):
        completed.text = "changed"
    with pytest.raises(ValidationError):
        degraded.text = "changed"
    assert degraded == Degraded(reason="status 503", text=DEGRADED_OUTPUT)
