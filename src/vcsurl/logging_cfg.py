from __future__ import annotations

import logging
import os
from typing import List, Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_env() -> int:
    # 0 = silent (default), 1 = INFO, 2 = DEBUG; level names are accepted too
    raw = os.getenv("LOG_LEVEL", "0").strip()
    level_map = {"0": logging.CRITICAL, "1": logging.INFO, "2": logging.DEBUG}
    if raw in level_map:
        return level_map[raw]
    named = logging.getLevelName(raw.upper())
    return named if isinstance(named, int) else logging.CRITICAL


def setup_logging() -> None:
    lvl = _level_from_env()
    log_file: Optional[str] = os.getenv("LOG_FILE")
    handlers: List[logging.Handler] = []
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    if handlers:
        logging.basicConfig(level=lvl, format=_FORMAT, handlers=handlers, force=True)
    else:
        # stdout carries NDJSON rows; never attach the default stream handler
        for h in list(root.handlers):
            root.removeHandler(h)
        root.setLevel(lvl)
    # probe chatter from urllib3 only at DEBUG
    logging.getLogger("urllib3").setLevel(lvl if lvl <= logging.DEBUG else logging.WARNING)
