"""Local development proxy.

Run it next to the frontend dev server so ``/api`` calls work without a
deploy. Reads the key from ``.env.local`` and forwards request bodies
unchanged (no cache annotation, no beta header).

Usage: python -m app.dev_server
"""

from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

load_dotenv(".env.local")

from app.main import CHAT_PATH, create_app  # noqa: E402
from config.settings import Settings  # noqa: E402


logger = logging.getLogger("benefits.dev")


def create_dev_app(settings: Settings | None = None, **kwargs):
    return create_app(
        settings or Settings(),
        cache_system=False,
        missing_key_message="ANTHROPIC_API_KEY not set in .env.local",
        unreachable_message="Proxy failed",
        title="Senior Benefits Chat Proxy (dev)",
        **kwargs,
    )


def main() -> None:
    settings = Settings()
    logger.info("Dev API proxy running on http://localhost:%s%s", settings.dev_port, CHAT_PATH)
    logger.info("Start the frontend dev server in another terminal.")
    uvicorn.run(create_dev_app(settings), host="127.0.0.1", port=settings.dev_port)


if __name__ == "__main__":
    main()
