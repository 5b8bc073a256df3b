"""
Configuration helpers for the provider client and tool dispatcher.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_ENV_LOADED = False

_TRUTHY = {"1", "true", "yes", "on"}


def _ensure_env_loaded() -> None:
    """
    Load environment variables from a .env file if present.
    """
    global _ENV_LOADED  # noqa: PLW0603 - intentional module level state
    if _ENV_LOADED:
        return

    candidates = []
    explicit = os.getenv("PITCHSIDE_ENV_FILE")
    if explicit:
        candidates.append(Path(explicit))
    cwd_env = Path.cwd() / ".env"
    candidates.append(cwd_env)
    repo_env = Path(__file__).resolve().parents[1] / ".env"
    if repo_env != cwd_env:
        candidates.append(repo_env)

    for path in candidates:
        if not path or not path.exists():
            continue
        try:
            for line in path.read_text().splitlines():
                stripped = line.strip()
                if not stripped or stripped.startswith("#") or "=" not in stripped:
                    continue
                key, value = stripped.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value
        except OSError:
            continue

    _ENV_LOADED = True


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class APISettings:
    """
    Runtime configuration for the statistics provider and the tool loop.

    ``enable_mocks`` selects the in-memory fixture provider instead of the
    live API; it is read once here and handed to the gateway explicitly.
    """

    besoccer_base_url: str
    besoccer_token: Optional[str]
    enable_mocks: bool
    max_tool_rounds: int
    cache_dir: str
    cache_ttl: Optional[int] = 3600
    http_timeout: int = 30

    @classmethod
    def from_env(cls) -> "APISettings":
        """
        Construct settings using environment variables with sensible defaults.
        """
        _ensure_env_loaded()
        cache_ttl = _env_int("PITCHSIDE_CACHE_TTL", 3600)
        return cls(
            besoccer_base_url=os.getenv(
                "BESOCCER_BASE_URL", "https://api.besoccer.com/v1"
            ),
            besoccer_token=os.getenv("BESOC_API_KEY")
            or os.getenv("BESOCCER_API_KEY"),
            enable_mocks=_env_flag("PITCHSIDE_ENABLE_MOCKS", True),
            max_tool_rounds=max(1, _env_int("PITCHSIDE_MAX_TOOL_ROUNDS", 6)),
            cache_dir=os.getenv("PITCHSIDE_CACHE_DIR", ".cache"),
            cache_ttl=cache_ttl if cache_ttl > 0 else None,
            http_timeout=_env_int("PITCHSIDE_HTTP_TIMEOUT", 30),
        )
