from __future__ import annotations

from typing import Dict, Iterable, List, Optional
from urllib.parse import urlsplit

import pytest

import vcsurl.config as cfg
import vcsurl.engine as engine_mod
from vcsurl.config import Settings
from vcsurl.engine import VcsUrlEngine
from vcsurl.errors import ProbeFailed
from vcsurl.probe import ProbeResponse


class FakeProbe:
    """Answers probes from tables instead of the network and records every call."""

    def __init__(
        self,
        gitlab_hosts: Iterable[str] = (),
        git_repos: Iterable[str] = (),
        status: int = 404,
        fail: bool = False,
    ) -> None:
        self.gitlab_hosts = set(gitlab_hosts)
        self.git_repos = set(git_repos)
        self.status = status
        self.fail = fail
        self.calls: List[tuple] = []

    def get(self, url: str) -> ProbeResponse:
        self.calls.append(("GET", url))
        if self.fail:
            raise ProbeFailed(f"GET {url}: ConnectTimeout")
        host = urlsplit(url).netloc
        if host in self.gitlab_hosts:
            return ProbeResponse(status=401, cookies=frozenset({"_gitlab_session"}))
        return ProbeResponse(status=self.status)

    def head(self, url: str) -> int:
        self.calls.append(("HEAD", url))
        if self.fail:
            raise ProbeFailed(f"HEAD {url}: ConnectTimeout")
        p = urlsplit(url)
        repo = f"{p.scheme}://{p.netloc}{p.path.removesuffix('/info/refs')}"
        return 200 if repo in self.git_repos else self.status

    def count(self, method: Optional[str] = None) -> int:
        return sum(1 for m, _ in self.calls if method is None or m == method)


class FakeResolver:
    def __init__(self, answers: Optional[Dict[str, str]] = None) -> None:
        self.answers = answers or {}
        self.asked: List[str] = []

    def resolve_default_branch(self, repo_url):
        self.asked.append(str(repo_url))
        return self.answers.get(str(repo_url))


@pytest.fixture(autouse=True)
def _isolate_globals(monkeypatch):
    for name in ("VCSURL_RESOLVE_BRANCHES", "VCSURL_FALLBACK_BRANCH", "VCSURL_NEGATIVE_TTL", "GITHUB_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    cfg.get_settings.cache_clear()
    engine_mod.set_default_engine(None)
    yield
    engine_mod.set_default_engine(None)
    cfg.get_settings.cache_clear()


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe(gitlab_hosts={"gitlab.example.org"}, git_repos={"https://git.example.net/widgets.git"})


@pytest.fixture
def engine(probe) -> VcsUrlEngine:
    return VcsUrlEngine(probe=probe, settings=Settings())
