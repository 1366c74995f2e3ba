import threading

from conftest import FakeProbe

import vcsurl
from vcsurl.config import Settings
from vcsurl.engine import VcsUrlEngine, default_engine, set_default_engine


def test_module_functions_on_well_known_hosts():
    url = "https://github.com/acme/widgets/blob/main/README.md"
    assert vcsurl.classify_provider(url) is vcsurl.Provider.GITHUB
    assert vcsurl.classify_kind(url) is vcsurl.UrlKind.FILE
    assert vcsurl.is_file(url)
    assert not vcsurl.is_repo(url)
    assert vcsurl.is_account("https://github.com/alranel")
    assert vcsurl.is_repo("https://github.com/alranel/go-vcsurl")
    assert vcsurl.is_raw_file(vcsurl.to_raw_file(url))
    assert vcsurl.is_raw_root(vcsurl.to_raw_root(url))
    assert str(vcsurl.to_repo(url)) == "https://github.com/acme/widgets"
    assert str(vcsurl.to_raw_root("https://github.com/acme/widgets", branch_hint="main")).endswith("/main/")


def test_classify_kind_with_explicit_provider_skips_probes():
    probe = FakeProbe()
    set_default_engine(VcsUrlEngine(probe=probe, settings=Settings()))
    kind = vcsurl.classify_kind("https://code.example.com/g/s/r/-/raw/main/", vcsurl.Provider.GITLAB)
    assert kind is vcsurl.UrlKind.RAW_ROOT
    assert probe.calls == []


def test_default_engine_is_shared_process_wide():
    seen = []
    barrier = threading.Barrier(6)

    def grab():
        barrier.wait()
        seen.append(default_engine())

    threads = [threading.Thread(target=grab) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len({id(e) for e in seen}) == 1


def test_default_engine_cache_survives_between_calls():
    probe = FakeProbe(gitlab_hosts={"gitlab.example.org"})
    set_default_engine(VcsUrlEngine(probe=probe, settings=Settings()))
    assert vcsurl.is_repo("https://gitlab.example.org/group/widgets")
    assert vcsurl.is_file("https://gitlab.example.org/group/widgets/-/blob/main/x.yml")
    assert probe.count("GET") == 1
