"""
Conversions between URL kinds.

Every function takes the grammar match produced by the classifier and builds a
brand new VcsUrl from its captured groups; the input value is never modified.
Raw roots always end with a slash, repo roots never do.
"""

from __future__ import annotations

from typing import Callable, Optional

from .errors import NotAVcsResource
from .grammar import GrammarMatch
from .kinds import GITHUB_RAW_HOST, Provider, UrlKind
from .url import VcsUrl

# current GitLab routes, used when a raw root is built from a bare repo root
GITLAB_MARKER = "-/"

_RAW_SOURCES = (UrlKind.FILE, UrlKind.RAW_FILE)
_REPO_SOURCES = (UrlKind.FILE, UrlKind.RAW_FILE, UrlKind.RAW_ROOT, UrlKind.REPO)


def _repo_path(m: GrammarMatch) -> str:
    return m.repo.rstrip("/").removesuffix(".git")


def _raw_path(provider: Provider, repo: str, ref: str, marker: str = "") -> str:
    if provider is Provider.GITHUB:
        return f"{repo}/{ref}/"
    if provider is Provider.BITBUCKET:
        return f"{repo}/raw/{ref}/"
    return f"{repo}/{marker}raw/{ref}/"


def to_raw_file(url: VcsUrl, provider: Provider, m: Optional[GrammarMatch]) -> VcsUrl:
    if m is None or m.kind not in _RAW_SOURCES:
        raise NotAVcsResource(url, "expected a file or raw file URL")
    if m.kind is UrlKind.RAW_FILE:
        return url

    path = _raw_path(provider, m.repo, m.groups["ref"], m.rule.marker) + m.groups["file"]
    if provider is Provider.GITHUB:
        return VcsUrl(scheme="https", host=GITHUB_RAW_HOST, path=path, query=url.query)
    return url.with_(path=path, fragment="")


def to_raw_root(
    url: VcsUrl,
    provider: Provider,
    m: Optional[GrammarMatch],
    branch_for: Callable[[VcsUrl], str],
) -> VcsUrl:
    """Build the raw-content root.

    ``branch_for`` is only called for repo roots, which carry no ref; file and
    raw file URLs reuse the ref already present in their path.
    """
    if m is None:
        raise NotAVcsResource(url, "unrecognised path")
    if m.kind is UrlKind.RAW_ROOT:
        return url
    if m.kind in _RAW_SOURCES:
        ref, marker, repo = m.groups["ref"], m.rule.marker, m.repo
    elif m.kind is UrlKind.REPO and provider in (Provider.GITHUB, Provider.BITBUCKET, Provider.GITLAB):
        repo = _repo_path(m)
        ref, marker = branch_for(to_repo(url, provider, m)), GITLAB_MARKER
    else:
        raise NotAVcsResource(url, f"no raw root for a {provider.value} {m.kind.value} URL")

    path = _raw_path(provider, repo, ref, marker)
    if provider is Provider.GITHUB:
        return VcsUrl(scheme="https", host=GITHUB_RAW_HOST, path=path)
    return url.with_(path=path, query="", fragment="")


def to_repo(url: VcsUrl, provider: Provider, m: Optional[GrammarMatch]) -> VcsUrl:
    if m is None or m.kind not in _REPO_SOURCES:
        raise NotAVcsResource(url, "not inside a repository")
    if provider is Provider.GITHUB:
        scheme = "https" if url.host == GITHUB_RAW_HOST else url.scheme
        return VcsUrl(scheme=scheme, host="github.com", path=_repo_path(m))
    return VcsUrl(scheme=url.scheme, host=url.host, path=_repo_path(m))
