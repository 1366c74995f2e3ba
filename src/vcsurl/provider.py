from __future__ import annotations

import logging

from .domain_cache import GitLabDomainCache
from .errors import ProbeFailed
from .grammar import looks_like_file_route
from .kinds import BITBUCKET_HOST, GITHUB_HOSTS, GITLAB_HOST, Provider
from .probe import Probe
from .url import VcsUrl

log = logging.getLogger(__name__)

GITLAB_SESSION_COOKIE = "_gitlab_session"
GIT_UPLOAD_PACK_QUERY = "service=git-upload-pack"


class ProviderClassifier:
    """Decide which provider dialect governs a URL.

    Host comparison comes first; the network is only touched for hosts that
    are neither well known nor already confirmed as GitLab.
    """

    def __init__(self, probe: Probe, cache: GitLabDomainCache) -> None:
        self.probe = probe
        self.cache = cache

    def classify(self, url: VcsUrl) -> Provider:
        host = url.host
        if host in GITHUB_HOSTS:
            return Provider.GITHUB
        if host == BITBUCKET_HOST:
            return Provider.BITBUCKET
        if host == GITLAB_HOST:
            return Provider.GITLAB
        if not host:
            return Provider.UNKNOWN
        if self.is_gitlab(url):
            return Provider.GITLAB
        if self.is_http_repo(url):
            return Provider.GENERIC_GIT
        return Provider.UNKNOWN

    def is_gitlab(self, url: VcsUrl) -> bool:
        if url.host == GITLAB_HOST or self.cache.is_known_gitlab_host(url.host):
            return True
        if self.cache.is_known_negative(url.host):
            return False

        api = url.with_(path="/api", query="", fragment="")
        try:
            resp = self.probe.get(str(api))
        except ProbeFailed as e:
            log.debug("gitlab probe failed for %s: %s", url.host, e)
            self.cache.record_negative(url.host)
            return False

        if GITLAB_SESSION_COOKIE in resp.cookies:
            log.info("%s confirmed as a GitLab instance", url.host)
            self.cache.record_gitlab_host(url.host)
            return True
        self.cache.record_negative(url.host)
        return False

    def is_http_repo(self, url: VcsUrl) -> bool:
        """HEAD {path}/info/refs?service=git-upload-pack and accept any 2xx."""
        if looks_like_file_route(url):
            return False
        refs = url.with_(path=url.path.rstrip("/") + "/info/refs", query=GIT_UPLOAD_PACK_QUERY, fragment="")
        try:
            status = self.probe.head(str(refs))
        except ProbeFailed as e:
            log.debug("smart-http probe failed for %s: %s", url, e)
            return False
        return 200 <= status <= 299
