from __future__ import annotations


class VcsUrlError(ValueError):
    pass


class NotAVcsResource(VcsUrlError):
    """The URL matches no known (provider, kind) combination for the operation."""

    def __init__(self, url: object, reason: str = "") -> None:
        self.url = str(url)
        msg = f"not a VCS resource: {self.url}"
        super().__init__(f"{msg} ({reason})" if reason else msg)


class BranchUnresolved(VcsUrlError):
    """A raw root was requested for a repo root and no branch could be determined."""

    def __init__(self, url: object) -> None:
        self.url = str(url)
        super().__init__(f"cannot resolve a branch for {self.url}; pass branch_hint or configure a resolver")


class ProbeFailed(RuntimeError):
    # internal: always turned into a negative classification
    pass
