from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from agent.core.memory import Transcript
from agent.core.prompt import build_system_prompt
from agent.schemas import ChatRequest, ChatTurn
from config.settings import get_settings


logger = logging.getLogger("benefits.agent")

VETERAN_CONTEXT = (
    "\n\n[Context: This person is a US military veteran. Please include all applicable "
    "veteran-specific benefits and VA resources within 10 miles.]"
)
RADIUS_NOTE = "\n[Please search within a 10-mile radius of the provided location.]"

EMPTY_REPLY = "I'm sorry, I couldn't retrieve information at this time. Please try again."
CONNECTION_ERROR_REPLY = "I encountered an error. Please check your connection and try again."


def to_api_content(text: str, is_veteran: bool = False) -> str:
    return text + (VETERAN_CONTEXT if is_veteran else "") + RADIUS_NOTE


def extract_assistant_text(body: Any) -> str:
    blocks = body.get("content") if isinstance(body, dict) else None
    if not isinstance(blocks, list):
        return EMPTY_REPLY
    text = "".join(
        block.get("text") or "" for block in blocks if isinstance(block, dict)
    )
    return text or EMPTY_REPLY


class BenefitsAgent:
    """Talks to the chat proxy and keeps the running transcript.

    Each ``send`` posts the full history plus the new user turn; nothing is
    remembered server-side.
    """

    def __init__(
        self,
        proxy_url: Optional[str] = None,
        *,
        is_veteran: bool = False,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.proxy_url = proxy_url or settings.proxy_url
        self.is_veteran = is_veteran
        self.model = model or settings.anthropic_model
        self.max_tokens = max_tokens or settings.max_tokens
        self.timeout = timeout if timeout is not None else settings.upstream_timeout
        self.transport = transport
        self.transcript = Transcript()

    def build_request(self, text: str) -> ChatRequest:
        messages = self.transcript.turns + [
            ChatTurn(role="user", content=to_api_content(text, self.is_veteran))
        ]
        return ChatRequest(
            messages=messages,
            system=build_system_prompt(self.is_veteran),
            model=self.model,
            max_tokens=self.max_tokens,
        )

    def send(self, text: str) -> str:
        text = (text or "").strip()
        if not text:
            raise ValueError("Message text must not be empty")

        request = self.build_request(text)
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.proxy_url, json=request.model_dump())
                body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Proxy call failed: %s", exc)
            return CONNECTION_ERROR_REPLY

        if response.status_code >= 400:
            logger.warning(
                "Proxy returned %s: %s",
                response.status_code,
                body.get("error") if isinstance(body, dict) else body,
            )
            return CONNECTION_ERROR_REPLY

        reply = extract_assistant_text(body)
        self.transcript.add_user(text)
        self.transcript.add_assistant(reply)
        return reply
