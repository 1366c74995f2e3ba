from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Protocol

import requests

from .errors import ProbeFailed

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeResponse:
    status: int
    cookies: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 299


class Probe(Protocol):
    def get(self, url: str) -> ProbeResponse: ...

    def head(self, url: str) -> int: ...


class HttpProbe:
    """requests-backed probe. Transport failures raise ProbeFailed."""

    def __init__(self, timeout: float = 5.0, user_agent: Optional[str] = None) -> None:
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent} if user_agent else {}

    def get(self, url: str) -> ProbeResponse:
        log.debug("probe GET %s", url)
        try:
            resp = requests.get(url, headers=self.headers, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise ProbeFailed(f"GET {url}: {e.__class__.__name__}: {e}") from e
        # cookies set on a redirect hop only show up in the history
        names = set()
        for r in list(resp.history) + [resp]:
            names.update(r.cookies.keys())
        return ProbeResponse(status=resp.status_code, cookies=frozenset(names))

    def head(self, url: str) -> int:
        log.debug("probe HEAD %s", url)
        try:
            resp = requests.head(url, headers=self.headers, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise ProbeFailed(f"HEAD {url}: {e.__class__.__name__}: {e}") from e
        return resp.status_code
