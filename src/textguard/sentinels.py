"""Singleton markers used by textguard internals.

- NOT_CACHED: returned by a cache lookup when no entry exists, so that
  legitimately cached falsy values (such as the empty string) can be told
  apart from a miss.

Examples:
    >>> from textguard.sentinels import NOT_CACHED
    >>> if cache.lookup(key) is NOT_CACHED:
    ...     compute()
"""
from mixinforge import SingletonMixin


class Sentinel(SingletonMixin):
    """Base class for value-less marker objects.

    Note:
        This is a singleton class; constructing a subclass repeatedly
        returns the same instance.
    """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NotCachedFlag(Sentinel):
    """Flag returned by a cache lookup that found no entry."""
    pass


NOT_CACHED = NotCachedFlag()
