from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol

import requests
from github import Auth, Github, GithubException

from .config import Settings
from .errors import BranchUnresolved
from .kinds import Provider
from .url import VcsUrl

log = logging.getLogger(__name__)


class BranchResolver(Protocol):
    def resolve_default_branch(self, repo_url: VcsUrl) -> Optional[str]: ...


class GitHubBranchResolver:
    """Ask the GitHub REST API for the repository's default branch."""

    def __init__(self, token: Optional[str] = None, client: Optional[Github] = None) -> None:
        self._token = token
        self._gh = client

    def _client(self) -> Github:
        if self._gh is None:
            self._gh = Github(auth=Auth.Token(self._token)) if self._token else Github()
        return self._gh

    def resolve_default_branch(self, repo_url: VcsUrl) -> Optional[str]:
        if repo_url.host != "github.com":
            return None
        parts = repo_url.segments[:2]
        if len(parts) != 2:
            return None
        owner, name = parts[0], parts[1].removesuffix(".git")
        try:
            return self._client().get_repo(f"{owner}/{name}").default_branch or None
        except (GithubException, requests.RequestException) as e:
            log.debug("github default branch lookup failed for %s/%s: %s", owner, name, e)
            return None


class GitRemoteBranchResolver:
    """Read the remote HEAD symref with ``git ls-remote --symref``."""

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    def resolve_default_branch(self, repo_url: VcsUrl) -> Optional[str]:
        try:
            import git
        except ImportError as e:
            # GitPython refuses to import when no git executable is found
            log.debug("git unavailable, cannot resolve %s: %s", repo_url, e)
            return None

        try:
            out = git.Git().ls_remote(
                "--symref",
                str(repo_url),
                "HEAD",
                env={"GIT_TERMINAL_PROMPT": "0"},
                kill_after_timeout=self.timeout,
            )
        except git.exc.CommandError as e:
            log.debug("ls-remote failed for %s: %s", repo_url, e)
            return None
        return parse_symref(out)


def parse_symref(output: str) -> Optional[str]:
    # "ref: refs/heads/main\tHEAD"
    for line in output.splitlines():
        if line.startswith("ref:") and line.rstrip().endswith("HEAD"):
            ref = line[4:].split("\t", 1)[0].strip()
            return ref.removeprefix("refs/heads/") or None
    return None


class ChainBranchResolver:
    def __init__(self, resolvers: Iterable[BranchResolver]) -> None:
        self.resolvers: List[BranchResolver] = list(resolvers)

    def resolve_default_branch(self, repo_url: VcsUrl) -> Optional[str]:
        for r in self.resolvers:
            branch = r.resolve_default_branch(repo_url)
            if branch:
                return branch
        return None


def default_branch_resolver(settings: Settings) -> BranchResolver:
    return ChainBranchResolver(
        [
            GitHubBranchResolver(token=settings.github_token),
            GitRemoteBranchResolver(timeout=max(settings.probe_timeout, 10.0)),
        ]
    )


def resolve_branch(
    repo_url: VcsUrl,
    provider: Provider,
    hint: Optional[str] = None,
    resolver: Optional[BranchResolver] = None,
    fallback: str = "",
) -> str:
    """Pick the branch for a raw root built from a repo root.

    Order: explicit hint, then the injected resolver, then the configured
    fallback which only applies to GitHub. Nothing else is guessed.
    """
    if hint:
        return hint
    if resolver is not None:
        branch = resolver.resolve_default_branch(repo_url)
        if branch:
            return branch
    if fallback and provider is Provider.GITHUB:
        return fallback
    raise BranchUnresolved(repo_url)
