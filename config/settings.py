from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. The API key is only
    read by the app factory and handed to the upstream call explicitly.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    anthropic_api_key: Optional[str] = os.getenv("ANTHROPIC_API_KEY") or None
    anthropic_api_url: str = os.getenv(
        "ANTHROPIC_API_URL", "https://api.anthropic.com/v1/messages"
    )
    anthropic_version: str = os.getenv("ANTHROPIC_VERSION", "2023-06-01")
    prompt_caching_beta: str = os.getenv(
        "ANTHROPIC_PROMPT_CACHING_BETA", "prompt-caching-2024-07-31"
    )
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "60"))
    anthropic_model: str = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")
    max_tokens: int = int(os.getenv("MAX_TOKENS", "1500"))
    proxy_url: str = os.getenv("PROXY_URL", "http://localhost:3001/api/chat")
    dev_port: int = int(os.getenv("DEV_PORT", "3001"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
