from typing import Optional

from ._version import __version__
from .domain_cache import GitLabDomainCache
from .engine import UrlLike, VcsUrlEngine, default_engine, set_default_engine
from .errors import BranchUnresolved, NotAVcsResource, VcsUrlError
from .kinds import Provider, UrlKind
from .url import VcsUrl, parse_url

__all__ = [
    "__version__",
    "BranchUnresolved",
    "GitLabDomainCache",
    "NotAVcsResource",
    "Provider",
    "UrlKind",
    "VcsUrl",
    "VcsUrlEngine",
    "VcsUrlError",
    "classify_kind",
    "classify_provider",
    "default_engine",
    "is_account",
    "is_file",
    "is_raw_file",
    "is_raw_root",
    "is_repo",
    "parse_url",
    "set_default_engine",
    "to_raw_file",
    "to_raw_root",
    "to_repo",
]


def classify_provider(url: UrlLike) -> Provider:
    return default_engine().classify_provider(url)


def classify_kind(url: UrlLike, provider: Optional[Provider] = None) -> UrlKind:
    return default_engine().classify_kind(url, provider)


def is_account(url: UrlLike) -> bool:
    return default_engine().is_account(url)


def is_repo(url: UrlLike) -> bool:
    return default_engine().is_repo(url)


def is_file(url: UrlLike) -> bool:
    return default_engine().is_file(url)


def is_raw_file(url: UrlLike) -> bool:
    return default_engine().is_raw_file(url)


def is_raw_root(url: UrlLike) -> bool:
    return default_engine().is_raw_root(url)


def to_raw_file(url: UrlLike) -> VcsUrl:
    return default_engine().to_raw_file(url)


def to_raw_root(url: UrlLike, branch_hint: Optional[str] = None) -> VcsUrl:
    return default_engine().to_raw_root(url, branch_hint)


def to_repo(url: UrlLike) -> VcsUrl:
    return default_engine().to_repo(url)
