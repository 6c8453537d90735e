from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from config.settings import Settings


SUCCESS_BODY = {
    "id": "msg_01",
    "type": "message",
    "role": "assistant",
    "content": [{"type": "text", "text": "Searching within 10 miles of Miami, FL..."}],
    "usage": {
        "input_tokens": 12,
        "cache_read_input_tokens": 1800,
        "cache_creation_input_tokens": 0,
        "output_tokens": 240,
    },
}


class FakeUpstream:
    """Records outbound calls and answers them with a configurable handler."""

    def __init__(self) -> None:
        self.calls: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json=SUCCESS_BODY
        )

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._dispatch)

    def respond(self, status_code: int, body: Any) -> None:
        self.handler = lambda request: httpx.Response(status_code, json=body)

    def fail(self, exc: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self.handler = handler

    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.calls[-1].content)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    s = Settings()
    s.app_env = "test"
    s.anthropic_api_key = "sk-test-key"
    s.anthropic_api_url = "https://api.anthropic.com/v1/messages"
    s.upstream_timeout = 5.0
    return s


@pytest.fixture
def chat_payload() -> Dict[str, Any]:
    return {
        "messages": [
            {"role": "user", "content": "What benefits are available for seniors in Miami, FL?"},
        ],
        "system": "S",
        "model": "claude-sonnet-4-20250514",
        "max_tokens": 1500,
    }
