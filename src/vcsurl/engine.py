from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Tuple, Union

from . import transform
from .branches import BranchResolver, resolve_branch
from .classify import match_kind
from .config import Settings, get_settings
from .domain_cache import GitLabDomainCache
from .errors import NotAVcsResource, VcsUrlError
from .grammar import GrammarMatch
from .kinds import Provider, UrlKind
from .probe import HttpProbe, Probe
from .provider import ProviderClassifier
from .url import VcsUrl, parse_url

UrlLike = Union[str, VcsUrl]


class VcsUrlEngine:
    """Classification and conversion of VCS URLs.

    Each engine owns its GitLab domain cache, so separate instances never share
    probe results. Inputs may be strings or VcsUrl values and are never
    modified.
    """

    def __init__(
        self,
        probe: Optional[Probe] = None,
        cache: Optional[GitLabDomainCache] = None,
        branch_resolver: Optional[BranchResolver] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.probe = probe or HttpProbe(timeout=self.settings.probe_timeout, user_agent=self.settings.user_agent)
        self.cache = cache if cache is not None else GitLabDomainCache(negative_ttl=self.settings.negative_ttl)
        self.branch_resolver = branch_resolver
        self._providers = ProviderClassifier(self.probe, self.cache)

    def _match(self, url: UrlLike) -> Tuple[VcsUrl, Provider, Optional[GrammarMatch]]:
        u = parse_url(url)
        provider = self._providers.classify(u)
        return u, provider, match_kind(u, provider)

    def classify_provider(self, url: UrlLike) -> Provider:
        try:
            return self._providers.classify(parse_url(url))
        except NotAVcsResource:
            return Provider.UNKNOWN

    def classify_kind(self, url: UrlLike, provider: Optional[Provider] = None) -> UrlKind:
        try:
            u = parse_url(url)
        except NotAVcsResource:
            return UrlKind.UNKNOWN
        m = match_kind(u, provider if provider is not None else self._providers.classify(u))
        return m.kind if m else UrlKind.UNKNOWN

    def _is(self, url: UrlLike, kind: UrlKind) -> bool:
        return self.classify_kind(url) is kind

    def is_account(self, url: UrlLike) -> bool:
        return self._is(url, UrlKind.ACCOUNT)

    def is_repo(self, url: UrlLike) -> bool:
        return self._is(url, UrlKind.REPO)

    def is_file(self, url: UrlLike) -> bool:
        return self._is(url, UrlKind.FILE)

    def is_raw_file(self, url: UrlLike) -> bool:
        return self._is(url, UrlKind.RAW_FILE)

    def is_raw_root(self, url: UrlLike) -> bool:
        return self._is(url, UrlKind.RAW_ROOT)

    def to_raw_file(self, url: UrlLike) -> VcsUrl:
        u, provider, m = self._match(url)
        return transform.to_raw_file(u, provider, m)

    def _branch_for(self, provider: Provider, hint: Optional[str]) -> Callable[[VcsUrl], str]:
        def branch_for(repo: VcsUrl) -> str:
            return resolve_branch(
                repo,
                provider,
                hint=hint,
                resolver=self.branch_resolver,
                fallback=self.settings.fallback_branch,
            )

        return branch_for

    def to_raw_root(self, url: UrlLike, branch_hint: Optional[str] = None) -> VcsUrl:
        u, provider, m = self._match(url)
        return transform.to_raw_root(u, provider, m, self._branch_for(provider, branch_hint))

    def to_repo(self, url: UrlLike) -> VcsUrl:
        u, provider, m = self._match(url)
        return transform.to_repo(u, provider, m)

    def describe(self, url: UrlLike, branch_hint: Optional[str] = None) -> Dict[str, Any]:
        """Classify once and attempt every conversion that applies."""
        row: Dict[str, Any] = {
            "url": str(url),
            "provider": Provider.UNKNOWN.value,
            "kind": UrlKind.UNKNOWN.value,
            "repo": None,
            "raw_file": None,
            "raw_root": None,
            "error": None,
        }
        try:
            u, provider, m = self._match(url)
        except NotAVcsResource as e:
            row["error"] = f"{e.__class__.__name__}: {e}"
            return row
        row["provider"] = provider.value
        if m is None:
            return row
        row["kind"] = m.kind.value
        try:
            if m.kind in (UrlKind.FILE, UrlKind.RAW_FILE):
                row["raw_file"] = str(transform.to_raw_file(u, provider, m))
            if m.kind is not UrlKind.ACCOUNT:
                row["repo"] = str(transform.to_repo(u, provider, m))
            if m.kind is not UrlKind.ACCOUNT and provider is not Provider.GENERIC_GIT:
                row["raw_root"] = str(transform.to_raw_root(u, provider, m, self._branch_for(provider, branch_hint)))
        except VcsUrlError as e:
            row["error"] = f"{e.__class__.__name__}: {e}"
        return row


_default: Optional[VcsUrlEngine] = None
_default_lock = threading.Lock()


def default_engine() -> VcsUrlEngine:
    """The process-wide engine; its cache lives as long as the process."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = VcsUrlEngine()
    return _default


def set_default_engine(engine: Optional[VcsUrlEngine]) -> None:
    global _default
    with _default_lock:
        _default = engine
