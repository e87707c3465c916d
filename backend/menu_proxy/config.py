"""
Runtime configuration for the proxy.

Values come from environment variables (optionally via a local .env file)
and are read on every request, so a missing API key fails that request only
instead of preventing the app from starting.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5"
DEFAULT_MAX_TOKENS = 16384
DEFAULT_VARIANT = "menu"


@dataclass(frozen=True)
class ProxySettings:
    anthropic_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    variant: str = DEFAULT_VARIANT

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        key_state = "set" if self.anthropic_api_key else "missing"
        return (
            f"ProxySettings(anthropic_api_key=<{key_state}>, model={self.model!r}, "
            f"max_tokens={self.max_tokens}, variant={self.variant!r})"
        )


def get_settings() -> ProxySettings:
    """
    Build settings from the current environment.

    Used as a FastAPI dependency; tests replace it through
    ``app.dependency_overrides``.
    """
    return ProxySettings(
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
        model=os.getenv("ANTHROPIC_MODEL", "").strip() or DEFAULT_MODEL,
        max_tokens=_read_max_tokens(),
        variant=os.getenv("MENU_PROXY_VARIANT", "").strip() or DEFAULT_VARIANT,
    )


def _read_max_tokens() -> int:
    raw = os.getenv("ANTHROPIC_MAX_TOKENS", "").strip()
    if not raw:
        return DEFAULT_MAX_TOKENS
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        logger.warning(
            f"Ignoring invalid ANTHROPIC_MAX_TOKENS={raw!r}; using {DEFAULT_MAX_TOKENS}"
        )
        return DEFAULT_MAX_TOKENS
    return value
