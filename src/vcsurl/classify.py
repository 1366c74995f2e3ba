from __future__ import annotations

from typing import Optional

from .grammar import GrammarMatch, match_path
from .kinds import Provider, UrlKind
from .url import VcsUrl


def match_kind(url: VcsUrl, provider: Provider) -> Optional[GrammarMatch]:
    if provider is Provider.UNKNOWN:
        return None
    return match_path(provider, url)


def classify_kind(url: VcsUrl, provider: Provider) -> UrlKind:
    m = match_kind(url, provider)
    return m.kind if m else UrlKind.UNKNOWN
