from types import SimpleNamespace

import pytest
import requests

import vcsurl.probe as probe_mod
from vcsurl.config import Settings
from vcsurl.engine import VcsUrlEngine
from vcsurl.errors import ProbeFailed
from vcsurl.kinds import Provider
from vcsurl.probe import HttpProbe


def _resp(status, cookies=None, history=()):
    return SimpleNamespace(status_code=status, cookies=dict(cookies or {}), history=list(history))


def test_get_collects_cookies_across_redirects(monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None, allow_redirects=None):
        seen.update(url=url, headers=headers, timeout=timeout)
        hop = _resp(302, {"_gitlab_session": "abc"})
        return _resp(200, {"other": "1"}, history=[hop])

    monkeypatch.setattr(probe_mod.requests, "get", fake_get)
    r = HttpProbe(timeout=2.5, user_agent="vcsurl-test").get("https://code.example.com/api")
    assert r.status == 200 and r.ok
    assert r.cookies == frozenset({"_gitlab_session", "other"})
    assert seen == {"url": "https://code.example.com/api", "headers": {"User-Agent": "vcsurl-test"}, "timeout": 2.5}


def test_transport_errors_become_probe_failed(monkeypatch):
    def boom(*a, **k):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(probe_mod.requests, "get", boom)
    monkeypatch.setattr(probe_mod.requests, "head", boom)
    p = HttpProbe()
    with pytest.raises(ProbeFailed):
        p.get("https://down.example.com/api")
    with pytest.raises(ProbeFailed):
        p.head("https://down.example.com/x/info/refs")


def test_head_returns_status(monkeypatch):
    monkeypatch.setattr(probe_mod.requests, "head", lambda url, **k: _resp(204))
    assert HttpProbe().head("https://git.example.net/w.git/info/refs?service=git-upload-pack") == 204


def test_engine_over_http_probe_with_500s(monkeypatch):
    monkeypatch.setattr(probe_mod.requests, "get", lambda url, **k: _resp(500))
    monkeypatch.setattr(probe_mod.requests, "head", lambda url, **k: _resp(500))
    engine = VcsUrlEngine(settings=Settings())
    assert isinstance(engine.probe, HttpProbe)
    assert engine.classify_provider("https://broken.example.com/acme/widgets") is Provider.UNKNOWN
    assert not engine.is_repo("https://broken.example.com/acme/widgets")


def test_engine_over_http_probe_with_timeouts(monkeypatch):
    def slow(*a, **k):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(probe_mod.requests, "get", slow)
    monkeypatch.setattr(probe_mod.requests, "head", slow)
    engine = VcsUrlEngine(settings=Settings(probe_timeout=0.1))
    assert engine.probe.timeout == 0.1
    assert engine.classify_provider("https://slow.example.com/a/b") is Provider.UNKNOWN
