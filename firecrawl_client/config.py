"""Configuration utilities for the Firecrawl job client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.firecrawl.dev"

API_KEY_ENV = "FIRECRAWL_API_KEY"
API_URL_ENV = "FIRECRAWL_API_URL"
TIMEOUT_ENV = "FIRECRAWL_TIMEOUT"
POLL_INTERVAL_ENV = "FIRECRAWL_POLL_INTERVAL"


@dataclass(frozen=True)
class Config:
    """Resolved client settings. Built once, never mutated."""

    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    timeout: float = 60.0
    poll_interval: float = 2.0

    def masked_key(self) -> str:
        if not self.api_key:
            return ""
        return f"{self.api_key[:4]}...{self.api_key[-2:]}" if len(self.api_key) > 8 else "***"


def parse_float(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def load_config(env_file: Optional[str] = ".env") -> Config:
    """Load configuration from environment variables and optional .env file.

    Empty variables count as unset, so ``FIRECRAWL_API_URL=""`` falls back to
    the default host and ``FIRECRAWL_API_KEY=""`` yields no key at all.
    """

    if env_file:
        load_dotenv(env_file, override=False)

    timeout = os.getenv(TIMEOUT_ENV)
    poll_interval = os.getenv(POLL_INTERVAL_ENV)

    return Config(
        api_key=os.getenv(API_KEY_ENV) or None,
        api_url=os.getenv(API_URL_ENV) or DEFAULT_API_URL,
        timeout=parse_float(timeout, TIMEOUT_ENV) if timeout else Config.timeout,
        poll_interval=(
            parse_float(poll_interval, POLL_INTERVAL_ENV) if poll_interval else Config.poll_interval
        ),
    )


__all__ = [
    "Config",
    "DEFAULT_API_URL",
    "API_KEY_ENV",
    "API_URL_ENV",
    "load_config",
    "parse_float",
]
