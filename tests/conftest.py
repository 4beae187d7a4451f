"""
Shared fixtures: a clean environment and OpenAI clients backed by httpx mocks.
"""

import json

import httpx
import pytest

from genaiprobe.core.ai_client import create_client
from genaiprobe.core.config import reset_settings

_ENV_PREFIXES = ("OPENAI_", "OTEL_", "LOG_", "MOCK_OPENAI_", "APP_")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip probe-related variables and drop cached settings around each test."""
    import os

    for key in list(os.environ):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


def completion_payload(choices, **extra):
    payload = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1677652281,
        "model": "gpt-4o-mini",
        "choices": choices,
    }
    payload.update(extra)
    return payload


class RecordingTransport:
    """httpx handler that records request bodies and replies with a fixed response."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(
            {
                "method": request.method,
                "path": request.url.path,
                "json": json.loads(request.content or b"{}"),
            }
        )
        return httpx.Response(self.status_code, json=self.body)


def client_for(handler, base_url="http://testserver/v1"):
    """AsyncOpenAI client whose HTTP traffic goes to `handler` (no retries)."""
    return create_client(
        api_key="sk-test",
        base_url=base_url,
        max_retries=0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def poem_transport():
    return RecordingTransport(
        body=completion_payload(
            [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": "Roses are red"},
                    "finish_reason": "stop",
                }
            ],
            usage={"prompt_tokens": 5, "completion_tokens": 7, "total_tokens": 12},
        )
    )
