"""Client configuration.

Values come from keyword arguments or, via `ClientConfig.from_env()`, from
IPQS_* environment variables (a .env file is loaded first if present).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .cache import parse_ttl
from .errors import ConfigurationError

DEFAULT_CACHE_TTL = 3600
DEFAULT_TIMEOUT = 15

ENV_FILES = (Path(".env"), Path.home() / ".env", Path.home() / ".ipqs.env")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def clamp_strictness(value: int) -> int:
    return max(0, min(3, int(value)))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def load_env_file() -> Optional[Path]:
    """Load the first .env file found (current dir, then home dir)."""
    for env_path in ENV_FILES:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    cache_enabled: bool = True
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL
    # SQLite file for the cache; None keeps it in process memory.
    cache_path: Optional[str] = None
    strictness: int = 0
    allow_public_access_points: bool = False
    lighter_penalties: bool = False
    user_agent: str = ""
    user_language: str = ""
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "strictness", clamp_strictness(self.strictness))
        if self.cache_ttl_seconds < 0:
            raise ConfigurationError("cache_ttl_seconds must be >= 0")

    def with_overrides(self, **changes) -> ClientConfig:
        return replace(self, **changes)

    @classmethod
    def from_env(cls, *, load_dotenv_file: bool = True) -> ClientConfig:
        if load_dotenv_file:
            load_env_file()

        api_key = (os.getenv("IPQS_API_KEY") or "").strip()
        if not api_key:
            raise ConfigurationError("IPQS_API_KEY not set")

        try:
            ttl = parse_ttl(os.getenv("IPQS_CACHE_TTL") or str(DEFAULT_CACHE_TTL))
            strictness = int(os.getenv("IPQS_STRICTNESS") or 0)
            timeout = float(os.getenv("IPQS_TIMEOUT") or DEFAULT_TIMEOUT)
        except ValueError as e:
            raise ConfigurationError(f"Invalid IPQS_* setting: {e}") from e

        return cls(
            api_key=api_key,
            cache_enabled=_env_bool("IPQS_CACHE", True),
            cache_ttl_seconds=ttl,
            cache_path=os.getenv("IPQS_CACHE_PATH") or None,
            strictness=strictness,
            allow_public_access_points=_env_bool("IPQS_ALLOW_PUBLIC_ACCESS_POINTS", False),
            lighter_penalties=_env_bool("IPQS_LIGHTER_PENALTIES", False),
            user_agent=os.getenv("IPQS_USER_AGENT", ""),
            user_language=os.getenv("IPQS_USER_LANGUAGE", ""),
            timeout=timeout,
        )
