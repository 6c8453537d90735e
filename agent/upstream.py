from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

import httpx
from pydantic import ValidationError

from agent.core.prompt import SYSTEM_PROMPT
from agent.schemas import CachedSystemBlock, Usage


logger = logging.getLogger("benefits.upstream")

ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
PROMPT_CACHING_BETA = "prompt-caching-2024-07-31"


class UpstreamUnavailable(RuntimeError):
    """The upstream API could not be reached or returned an undecodable body."""


class UpstreamResult(NamedTuple):
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return self.status_code < 400


def wrap_system(system: Optional[str]) -> List[Dict[str, Any]]:
    if system is None:
        system = SYSTEM_PROMPT
    # model_construct keeps whatever the caller sent; no local validation.
    block = CachedSystemBlock.model_construct(text=system)
    return [block.model_dump(warnings=False)]


def build_headers(
    api_key: str,
    *,
    version: str = ANTHROPIC_VERSION,
    extra_headers: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "x-api-key": api_key,
        "anthropic-version": version,
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_upstream_body(payload: Mapping[str, Any], *, cache_system: bool) -> Dict[str, Any]:
    if not cache_system:
        return dict(payload)
    return {
        "model": payload.get("model"),
        "max_tokens": payload.get("max_tokens"),
        "system": wrap_system(payload.get("system")),
        "messages": payload.get("messages"),
    }


def log_usage(body: Any) -> None:
    if not isinstance(body, dict) or body.get("usage") is None:
        return
    try:
        usage = Usage.model_validate(body["usage"])
    except ValidationError as exc:
        logger.debug("Ignoring malformed usage record: %s", exc)
        return
    logger.info(
        "[cache] input=%s | cache_read=%s | cache_write=%s | output=%s",
        usage.input_tokens,
        usage.cache_read,
        usage.cache_write,
        usage.output_tokens,
    )


def forward_chat(
    payload: Mapping[str, Any],
    *,
    api_key: str,
    url: str = ANTHROPIC_MESSAGES_URL,
    cache_system: bool = True,
    version: str = ANTHROPIC_VERSION,
    extra_headers: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = 60.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> UpstreamResult:
    """Send one chat request upstream and return its status and parsed body.

    With ``cache_system`` the system prompt is wrapped in an ephemeral
    cache-control block and only ``model``, ``max_tokens``, ``system`` and
    ``messages`` are forwarded; without it the payload goes out unchanged.
    Upstream error statuses are returned, not raised. Anything that keeps us
    from getting a JSON answer raises :class:`UpstreamUnavailable`.
    """
    body = build_upstream_body(payload, cache_system=cache_system)
    headers = build_headers(api_key, version=version, extra_headers=extra_headers)

    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.post(url, json=body, headers=headers)
            data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise UpstreamUnavailable(f"Upstream call to {url} failed: {exc}") from exc

    result = UpstreamResult(response.status_code, data)
    if result.ok:
        log_usage(data)
    return result
