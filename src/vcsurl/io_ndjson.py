from __future__ import annotations

import json
import sys
from typing import Any, Dict, Iterable, TextIO


def _coerce_ms(v: Any) -> int:
    try:
        return int(round(float(v)))
    except (TypeError, ValueError):
        return 0


def write_rows(rows: Iterable[Dict[str, Any]], out: TextIO | None = None) -> int:
    out = out or sys.stdout
    n = 0
    for r in rows:
        r = dict(r)
        for k in list(r.keys()):
            if k.endswith("_ms"):
                r[k] = _coerce_ms(r[k])
        out.write(json.dumps(r, ensure_ascii=False) + "\n")
        out.flush()
        n += 1
    return n
