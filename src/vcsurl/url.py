from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from .errors import NotAVcsResource


@dataclass(frozen=True)
class VcsUrl:
    scheme: str
    host: str
    path: str
    query: str = ""
    fragment: str = ""

    def __str__(self) -> str:
        return urlunsplit((self.scheme, self.host, self.path, self.query, self.fragment))

    def with_(self, **changes: Any) -> "VcsUrl":
        """Return a copy with some components replaced; the original is untouched."""
        return replace(self, **changes)

    @property
    def segments(self) -> list[str]:
        return [x for x in self.path.split("/") if x]


def parse_url(u: "str | VcsUrl") -> VcsUrl:
    if isinstance(u, VcsUrl):
        return u
    try:
        p = urlsplit(u.strip())
        # scheme-less input such as "github.com/acme/widgets"
        if not p.netloc and not p.scheme and p.path and not p.path.startswith("/"):
            p = urlsplit("https://" + u.strip())
    except ValueError as e:
        raise NotAVcsResource(u, str(e)) from e
    return VcsUrl(
        scheme=(p.scheme or "https").lower(),
        host=p.netloc.lower(),
        path=p.path,
        query=p.query,
        fragment=p.fragment,
    )
