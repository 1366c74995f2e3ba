from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Set


class GitLabDomainCache:
    """Hosts confirmed to run GitLab.

    Confirmed hosts are never evicted. Hosts that failed the probe are only
    remembered when ``negative_ttl`` is positive; with the default of 0 every
    lookup of a non-GitLab host probes again.
    """

    def __init__(self, negative_ttl: float = 0.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._lock = threading.Lock()
        self._hosts: Set[str] = set()
        self._negative: Dict[str, float] = {}
        self._negative_ttl = max(0.0, float(negative_ttl))
        self._clock = clock

    def is_known_gitlab_host(self, host: str) -> bool:
        with self._lock:
            return host.lower() in self._hosts

    def record_gitlab_host(self, host: str) -> None:
        h = host.lower()
        with self._lock:
            self._hosts.add(h)
            self._negative.pop(h, None)

    def is_known_negative(self, host: str) -> bool:
        if not self._negative_ttl:
            return False
        h = host.lower()
        with self._lock:
            expires = self._negative.get(h)
            if expires is None:
                return False
            if self._clock() >= expires:
                del self._negative[h]
                return False
            return True

    def record_negative(self, host: str) -> None:
        if not self._negative_ttl:
            return
        with self._lock:
            self._negative[host.lower()] = self._clock() + self._negative_ttl

    def __contains__(self, host: object) -> bool:
        return isinstance(host, str) and self.is_known_gitlab_host(host)

    def __len__(self) -> int:
        with self._lock:
            return len(self._hosts)
