from __future__ import annotations

import logging
import sys
import time
from typing import Any, Callable, Dict, Iterable, List

from .branches import default_branch_resolver
from .config import get_settings
from .engine import VcsUrlEngine, default_engine
from .io_ndjson import write_rows
from .logging_cfg import setup_logging
from .parallel import run_parallel

log = logging.getLogger(__name__)


def _iter_urls(path: str) -> Iterable[str]:
    """One URL per line; blank lines and ``#`` comments are skipped."""
    with open(path, "r", encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if line and not line.startswith("#"):
                yield line


def _engine() -> VcsUrlEngine:
    settings = get_settings()
    engine = default_engine()
    if settings.resolve_branches and engine.branch_resolver is None:
        # same process-wide GitLab cache, plus remote default-branch lookups
        return VcsUrlEngine(
            probe=engine.probe,
            cache=engine.cache,
            branch_resolver=default_branch_resolver(settings),
            settings=settings,
        )
    return engine


def describe_all(urls: Iterable[str], engine: VcsUrlEngine, max_workers: int | None = None) -> List[Dict[str, Any]]:
    def _make_thunk(u: str) -> Callable[[], Dict[str, Any]]:
        def thunk() -> Dict[str, Any]:
            t0 = time.perf_counter()
            try:
                row = engine.describe(u)
            except Exception as e:  # one bad URL must not sink the batch
                log.warning("failed to describe %s: %s", u, e)
                row = {"url": u, "provider": None, "kind": None, "error": f"{e.__class__.__name__}: {e}"}
            row["latency_ms"] = (time.perf_counter() - t0) * 1000
            return row

        return thunk

    return run_parallel([_make_thunk(u) for u in urls], max_workers=max_workers)


def main(argv=None) -> int:
    setup_logging()
    argv = sys.argv if argv is None else argv
    if len(argv) != 2:
        print("Usage: vcsurl URL_FILE", file=sys.stderr)
        return 1
    try:
        urls = list(_iter_urls(argv[1]))
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not urls:
        return 0
    rows = describe_all(urls, _engine(), max_workers=get_settings().max_workers)
    write_rows(rows)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
