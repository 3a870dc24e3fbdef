import os

import pytest

import textguard.normalizers as normalizers
from textguard import CharacterLimitError, MemoCache, normalize_path
from textguard.normalizers import MAX_PATH_LENGTH

pytestmark = pytest.mark.skipif(os.sep != "/", reason="expectations use POSIX separators")

MISSING = "/textguard-missing-root"


@pytest.mark.parametrize("value, expected", [
    ("./assets\\/scripts///example.js", "./assets/scripts/example.js"),
    (MISSING + "//a/ b /c/", MISSING + "/a/b/c"),
    ([MISSING, "app", "x.py"], MISSING + "/app/x.py"),
    ([MISSING + "/", "/app/", "x.py"], MISSING + "/app/x.py"),
    ("relative\\win\\path", "relative/win/path"),
    (["a", "", "b"], "a/b"),
])
def test_normalize_path_collapses_separators(value, expected):
    assert normalize_path(value) == expected


def test_normalize_path_trailing_slash():
    assert normalize_path(MISSING + "/a", trailing_slash=True) == MISSING + "/a/"


def test_normalize_path_is_idempotent():
    once = normalize_path(MISSING + "\\x//y/")
    assert normalize_path(once) == once


def test_normalize_path_resolves_existing_paths(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    link.symlink_to(real)

    expected = os.path.realpath(real)
    assert normalize_path(str(link)) == expected
    assert normalize_path([str(tmp_path), "real", "..", "real"]) == expected
    assert normalize_path(str(link), trailing_slash=True) == expected + "/"


def test_normalize_path_keeps_missing_paths_unresolved(tmp_path):
    missing = str(tmp_path / "nope" / ".." / "x")
    assert normalize_path(missing) == missing


def test_normalize_path_keeps_path_when_resolution_fails(monkeypatch):
    def broken_exists(path):
        raise OSError("boom")

    monkeypatch.setattr(os.path, "exists", broken_exists)
    assert normalize_path(MISSING + "//z") == MISSING + "/z"


def test_normalize_path_length_limit():
    with pytest.raises(CharacterLimitError) as exc_info:
        normalize_path("a" * MAX_PATH_LENGTH)
    assert exc_info.value.limit == MAX_PATH_LENGTH - 2
    assert "normalize_path" in str(exc_info.value)


def test_normalize_path_decodes_bytes():
    assert normalize_path(MISSING.encode() + b"//a") == MISSING + "/a"
    assert normalize_path([MISSING.encode(), b"b"]) == MISSING + "/b"


def test_normalize_path_rejects_mappings():
    with pytest.raises(TypeError):
        normalize_path({"a": "b"})


class TestNormalizePathCaching:

    @pytest.fixture
    def calls(self, monkeypatch):
        counted = []
        original = normalizers._normalize_path

        def counting(value, trailing_slash):
            counted.append((value, trailing_slash))
            return original(value, trailing_slash)

        monkeypatch.setattr(normalizers, "_normalize_path", counting)
        return counted

    def test_repeated_calls_compute_once(self, calls):
        assert normalize_path(MISSING + "/a") == normalize_path(MISSING + "/a")
        assert len(calls) == 1

    def test_arguments_are_part_of_the_key(self, calls):
        normalize_path(MISSING + "/a")
        normalize_path(MISSING + "/a", trailing_slash=True)
        normalize_path([MISSING, "a"])
        assert len(calls) == 3

    def test_clearing_the_default_cache_recomputes(self, calls):
        normalize_path(MISSING + "/a")
        normalizers.resolve_cache(None).clear()
        normalize_path(MISSING + "/a")
        assert len(calls) == 2

    def test_explicit_cache(self, calls):
        cache = MemoCache()
        normalize_path(MISSING + "/a", cache=cache)
        normalize_path(MISSING + "/a", cache=cache)
        assert len(cache) == 1
        assert len(calls) == 1

    def test_disabled_cache_always_computes(self, calls):
        cache = MemoCache(enabled=False)
        normalize_path(MISSING + "/a", cache=cache)
        normalize_path(MISSING + "/a", cache=cache)
        assert len(cache) == 0
        assert len(calls) == 2

    def test_errors_are_not_cached(self, calls):
        for _ in range(2):
            with pytest.raises(CharacterLimitError):
                normalize_path("b" * MAX_PATH_LENGTH)
        assert len(calls) == 2
