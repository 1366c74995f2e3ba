"""
Per-provider path grammars.

Each provider owns an ordered tuple of rules. The first rule whose host
constraint and pattern both match decides the kind, so the order inside a
table is the precedence order: raw root, raw file, file, repo, account.

GitLab namespaces may be arbitrarily deep, which is why its segments refuse
the reserved route names (``-``, ``blob``, ``raw``): a namespace can never
swallow a file or raw route, and a repo root can never contain one. The
current (``/-/raw/``) and legacy (``/raw/``) route styles are separate rules
so each can be tested on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from .kinds import GITHUB_RAW_HOST, Provider, UrlKind
from .url import VcsUrl

_GITHUB_WEB = frozenset({"github.com"})
_GITHUB_RAW = frozenset({GITHUB_RAW_HOST})

SEG = r"/[^/]+"
_GL_SEG = r"/(?!(?:-|blob|raw)(?:/|$))[^/]+"
_GL_NS = rf"{_GL_SEG}(?:{_GL_SEG})+"


@dataclass(frozen=True)
class Rule:
    name: str
    kind: UrlKind
    pattern: "re.Pattern[str]"
    hosts: Optional[FrozenSet[str]] = None
    # GitLab route marker carried by this rule ("-/" for current routes)
    marker: str = ""

    def match(self, url: VcsUrl) -> Optional["re.Match[str]"]:
        if self.hosts is not None and url.host not in self.hosts:
            return None
        return self.pattern.match(url.path)


@dataclass(frozen=True)
class GrammarMatch:
    rule: Rule
    groups: Dict[str, str]

    @property
    def kind(self) -> UrlKind:
        return self.rule.kind

    @property
    def repo(self) -> str:
        return self.groups.get("repo", "")

    @property
    def ref(self) -> Optional[str]:
        return self.groups.get("ref")

    @property
    def file(self) -> Optional[str]:
        return self.groups.get("file")


def _rule(name: str, kind: UrlKind, pattern: str, hosts: Optional[FrozenSet[str]] = None, marker: str = "") -> Rule:
    return Rule(name=name, kind=kind, pattern=re.compile(pattern), hosts=hosts, marker=marker)


GITHUB_RULES: Tuple[Rule, ...] = (
    _rule("github.raw_root", UrlKind.RAW_ROOT, rf"^(?P<repo>{SEG}{SEG})/(?P<ref>[^/]+)/$", _GITHUB_RAW),
    _rule("github.raw_file", UrlKind.RAW_FILE, rf"^(?P<repo>{SEG}{SEG})/(?P<ref>[^/]+)/(?P<file>.+)$", _GITHUB_RAW),
    _rule("github.file", UrlKind.FILE, rf"^(?P<repo>{SEG}{SEG})/blob/(?P<ref>[^/]+)/(?P<file>.+)$", _GITHUB_WEB),
    _rule("github.repo", UrlKind.REPO, rf"^(?P<repo>{SEG}{SEG})/?$", _GITHUB_WEB),
    _rule("github.account", UrlKind.ACCOUNT, rf"^(?P<repo>{SEG})/?$", _GITHUB_WEB),
)

BITBUCKET_RULES: Tuple[Rule, ...] = (
    _rule("bitbucket.raw_root", UrlKind.RAW_ROOT, rf"^(?P<repo>{SEG}{SEG})/raw/(?P<ref>[^/]+)/$"),
    _rule("bitbucket.raw_file", UrlKind.RAW_FILE, rf"^(?P<repo>{SEG}{SEG})/raw/(?P<ref>[^/]+)/(?P<file>.+)$"),
    _rule("bitbucket.file", UrlKind.FILE, rf"^(?P<repo>{SEG}{SEG})/src/(?P<ref>[^/]+)/(?P<file>.+)$"),
    _rule("bitbucket.repo", UrlKind.REPO, rf"^(?P<repo>{SEG}{SEG})/?$"),
    _rule("bitbucket.account", UrlKind.ACCOUNT, rf"^(?P<repo>{SEG})/?$"),
)

GITLAB_RULES: Tuple[Rule, ...] = (
    _rule("gitlab.raw_root", UrlKind.RAW_ROOT, rf"^(?P<repo>{_GL_NS})/-/raw/(?P<ref>[^/]+)/$", marker="-/"),
    _rule("gitlab.raw_root.legacy", UrlKind.RAW_ROOT, rf"^(?P<repo>{_GL_NS})/raw/(?P<ref>[^/]+)/$"),
    _rule("gitlab.raw_file", UrlKind.RAW_FILE, rf"^(?P<repo>{_GL_NS})/-/raw/(?P<ref>[^/]+)/(?P<file>.+)$", marker="-/"),
    _rule("gitlab.raw_file.legacy", UrlKind.RAW_FILE, rf"^(?P<repo>{_GL_NS})/raw/(?P<ref>[^/]+)/(?P<file>.+)$"),
    _rule("gitlab.file", UrlKind.FILE, rf"^(?P<repo>{_GL_NS})/-/blob/(?P<ref>[^/]+)/(?P<file>.+)$", marker="-/"),
    _rule("gitlab.file.legacy", UrlKind.FILE, rf"^(?P<repo>{_GL_NS})/blob/(?P<ref>[^/]+)/(?P<file>.+)$"),
    _rule("gitlab.repo", UrlKind.REPO, rf"^(?P<repo>{_GL_NS})/?$"),
    _rule("gitlab.account", UrlKind.ACCOUNT, rf"^(?P<repo>{_GL_SEG})/?$"),
)

# the smart-HTTP probe already confirmed the URL is a repository
GENERIC_GIT_RULES: Tuple[Rule, ...] = (
    _rule("git.repo", UrlKind.REPO, r"^(?P<repo>.*?)/?$"),
)

GRAMMARS: Dict[Provider, Tuple[Rule, ...]] = {
    Provider.GITHUB: GITHUB_RULES,
    Provider.BITBUCKET: BITBUCKET_RULES,
    Provider.GITLAB: GITLAB_RULES,
    Provider.GENERIC_GIT: GENERIC_GIT_RULES,
}


def match_path(provider: Provider, url: VcsUrl) -> Optional[GrammarMatch]:
    for rule in GRAMMARS.get(provider, ()):
        m = rule.match(url)
        if m:
            return GrammarMatch(rule=rule, groups={k: v for k, v in m.groupdict().items() if v is not None})
    return None


def looks_like_file_route(url: VcsUrl) -> bool:
    """True when the path carries a GitLab-style blob/raw route segment."""
    return bool(re.search(r"/(?:-/)?(?:blob|raw)/", url.path))
