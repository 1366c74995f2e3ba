from __future__ import annotations

from enum import Enum


class Provider(str, Enum):
    GITHUB = "github"
    BITBUCKET = "bitbucket"
    GITLAB = "gitlab"
    GENERIC_GIT = "git"
    UNKNOWN = "unknown"


class UrlKind(str, Enum):
    ACCOUNT = "account"
    REPO = "repo"
    FILE = "file"
    RAW_FILE = "raw_file"
    RAW_ROOT = "raw_root"
    UNKNOWN = "unknown"


GITHUB_HOSTS = frozenset({"github.com", "raw.githubusercontent.com"})
GITHUB_RAW_HOST = "raw.githubusercontent.com"
BITBUCKET_HOST = "bitbucket.org"
GITLAB_HOST = "gitlab.com"
