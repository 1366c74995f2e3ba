from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from ._version import __version__


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, "") or default)
    except ValueError:
        return default


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    probe_timeout: float = 5.0
    user_agent: str = f"vcsurl/{__version__}"
    # only GitHub repo roots fall back to this branch; "" disables it
    fallback_branch: str = "master"
    negative_ttl: float = 0.0
    resolve_branches: bool = False
    max_workers: Optional[int] = None
    github_token: Optional[str] = None


def load_settings() -> Settings:
    return Settings(
        probe_timeout=_float_env("VCSURL_PROBE_TIMEOUT", 5.0),
        user_agent=os.getenv("VCSURL_USER_AGENT") or f"vcsurl/{__version__}",
        fallback_branch=os.getenv("VCSURL_FALLBACK_BRANCH", "master").strip(),
        negative_ttl=_float_env("VCSURL_NEGATIVE_TTL", 0.0),
        resolve_branches=os.getenv("VCSURL_RESOLVE_BRANCHES", "0") == "1",
        max_workers=_int_env("VCSURL_MAX_WORKERS", None),
        github_token=os.getenv("GITHUB_TOKEN") or None,
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
