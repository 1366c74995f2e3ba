import io
import json

from vcsurl.io_ndjson import _coerce_ms, write_rows


def test_coerce_ms_various():
    assert _coerce_ms("12") == 12
    assert _coerce_ms(12.7) == 13
    assert _coerce_ms(None) == 0
    assert _coerce_ms("bad") == 0


def test_write_rows_coerces_latency_and_keeps_input():
    buf = io.StringIO()
    rows = [
        {"url": "https://github.com/a/b", "latency_ms": 1.6, "error": None},
        {"url": "https://bitbucket.org/a/b", "latency_ms": "9"},
    ]
    assert write_rows(rows, out=buf) == 2
    a, b = [json.loads(line) for line in buf.getvalue().strip().splitlines()]
    assert a == {"url": "https://github.com/a/b", "latency_ms": 2, "error": None}
    assert b["latency_ms"] == 9
    assert rows[0]["latency_ms"] == 1.6
