import pytest

from textguard import MemoCache, normalize_url


@pytest.mark.parametrize("value, expected", [
    ("EXAMPLE.com/Foo//Bar?B=2#frag", "example.com/foo/bar?B=2#frag"),
    ("HTTPS://Example.com//Foo/?B=2#Top", "https://example.com/foo?B=2#Top"),
    ("site.com/Page#Sec?x=1", "site.com/page?x=1#Sec"),
    (["HTTP://Host", "Path", "To"], "http://host/path/to"),
    (["/A/", "/B/"], "a/b"),
    ("?q=1", "?q=1"),
    ("#Top", "#Top"),
    ("Some/Path?", "some/path?"),
    ("", ""),
])
def test_normalize_url(value, expected):
    assert normalize_url(value) == expected


def test_normalize_url_trailing_slash():
    assert normalize_url("a.com/X/", trailing_slash=True) == "a.com/x/"
    assert normalize_url("a.com/x?y=1", trailing_slash=True) == "a.com/x/?y=1"


def test_normalize_url_leaves_query_and_fragment_case_alone():
    assert normalize_url("a.com/?Q=ABC#Frag") == "a.com?Q=ABC#Frag"


def test_normalize_url_is_idempotent():
    once = normalize_url("HTTP://Host//A#F?q")
    assert once == "http://host/a?q#F"
    assert normalize_url(once) == once


def test_normalize_url_memoizes_per_input_shape():
    cache = MemoCache()
    assert normalize_url("a/b", cache=cache) == normalize_url(["a", "b"], cache=cache)
    normalize_url("a/b", cache=cache)
    assert len(cache) == 2


def test_normalize_url_decodes_bytes():
    assert normalize_url(b"A/B") == "a/b"
    assert normalize_url([b"HTTP://Host", b"Path"]) == "http://host/path"


def test_normalize_url_rejects_bad_cache():
    with pytest.raises(TypeError):
        normalize_url("a", cache={})
