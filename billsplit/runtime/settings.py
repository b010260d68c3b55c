"""Centralized runtime settings for the billsplit project.

Settings come from environment variables and are resolved once per process:

    GEMINI_API_KEY: API key for the OCR provider (required for scanning)
    GEMINI_MODEL: Provider model name. Default: gemini-2.0-flash-exp
    GEMINI_API_BASE: Provider API base URL
    BILLSPLIT_OCR_TIMEOUT: OCR request timeout in seconds. Default: 60
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_MODEL = "gemini-2.0-flash-exp"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_OCR_TIMEOUT = 60.0


def _env_timeout() -> float:
    raw = os.environ.get("BILLSPLIT_OCR_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_OCR_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        return DEFAULT_OCR_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_OCR_TIMEOUT


@dataclass
class RuntimeSettings:
    """Container for OCR provider settings."""

    api_key: str | None = field(default_factory=lambda: os.environ.get("GEMINI_API_KEY") or None)
    model: str = field(default_factory=lambda: os.environ.get("GEMINI_MODEL") or DEFAULT_MODEL)
    api_base: str = field(default_factory=lambda: os.environ.get("GEMINI_API_BASE") or DEFAULT_API_BASE)
    timeout: float = field(default_factory=_env_timeout)

    def __post_init__(self) -> None:
        self.api_base = self.api_base.rstrip("/")

    @property
    def generate_content_url(self) -> str:
        """Provider endpoint for a single generateContent call."""
        return f"{self.api_base}/models/{self.model}:generateContent"


# Module-level singleton
_settings: RuntimeSettings | None = None


def get_settings() -> RuntimeSettings:
    """Get the singleton RuntimeSettings instance.

    Returns:
        The global RuntimeSettings instance.
    """
    global _settings
    if _settings is None:
        _settings = RuntimeSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
