from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx
from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agent.upstream import UpstreamUnavailable, forward_chat
from config.settings import Settings, get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("benefits")

CHAT_PATH = "/api/chat"
MISSING_KEY_MESSAGE = "ANTHROPIC_API_KEY is not configured on the server."
UNREACHABLE_MESSAGE = "Failed to reach Anthropic API."
INVALID_BODY_MESSAGE = "Request body must be a JSON object."


def create_app(
    settings: Optional[Settings] = None,
    *,
    cache_system: bool = True,
    extra_headers: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
    missing_key_message: str = MISSING_KEY_MESSAGE,
    unreachable_message: str = UNREACHABLE_MESSAGE,
    title: str = "Senior Benefits Chat Proxy",
) -> FastAPI:
    """Build the chat proxy app.

    ``cache_system`` and ``extra_headers`` select between the deployed
    handler (cache-annotated system prompt plus the prompt-caching beta
    header) and the bare pass-through used in local development.
    """
    settings = settings or get_settings()
    if extra_headers is None and cache_system:
        extra_headers = {"anthropic-beta": settings.prompt_caching_beta}

    app = FastAPI(title=title, version="1.0.0")

    # CORS: allow local frontend during development
    if settings.app_env.lower() in {"dev", "development", "local"}:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected chat body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})

    @app.post(CHAT_PATH)
    def chat(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
        api_key = settings.anthropic_api_key
        if not api_key:
            raise HTTPException(status_code=500, detail=missing_key_message)

        messages = payload.get("messages")
        logger.info(
            "Incoming chat: model=%s max_tokens=%s turns=%s cached=%s",
            payload.get("model"),
            payload.get("max_tokens"),
            len(messages) if isinstance(messages, list) else None,
            cache_system,
        )
        try:
            result = forward_chat(
                payload,
                api_key=api_key,
                url=settings.anthropic_api_url,
                cache_system=cache_system,
                version=settings.anthropic_version,
                extra_headers=extra_headers,
                timeout=settings.upstream_timeout,
                transport=transport,
            )
        except UpstreamUnavailable as exc:
            logger.exception("Proxy error: %s", exc)
            raise HTTPException(status_code=500, detail=unreachable_message)

        if not result.ok:
            logger.warning("Upstream returned %s; relaying as-is", result.status_code)
        return JSONResponse(status_code=result.status_code, content=result.body)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
