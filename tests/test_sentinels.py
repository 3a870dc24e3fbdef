from textguard.sentinels import NOT_CACHED, NotCachedFlag, Sentinel


def test_not_cached_is_singleton():
    """Test if NotCachedFlag is a singleton."""
    assert NOT_CACHED is NotCachedFlag()
    NOT_CACHED_1 = NotCachedFlag()
    assert NOT_CACHED is NOT_CACHED_1
    assert isinstance(NOT_CACHED, Sentinel)


def test_not_cached_repr():
    assert repr(NOT_CACHED) == "NotCachedFlag()"


def test_not_cached_is_distinct_from_falsy_values():
    for value in ("", None, 0, False, [], {}):
        assert value is not NOT_CACHED
