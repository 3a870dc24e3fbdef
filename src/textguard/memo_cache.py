"""Explicit memoization cache for deterministic string transforms.

MemoCache maps a digest of ``(function name, arguments)`` to a previously
computed result. Normalizers and the URL filter consult it before doing
any work.

Lifecycle of the default cache: a single MemoCache is created when this
module is imported and lives for the rest of the process. Entries are never
evicted and never persisted. Callers that need isolation pass their own
instance through the ``cache=`` keyword of the memoized functions; tests
call clear_default_cache().

Thread safety: reads and writes of the mapping are serialized with a lock.
The computation itself runs outside the lock, so two threads may compute
the same entry concurrently; both produce the same value and the last
write wins.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

import joblib.hashing
from parameterizable import ParameterizableClass, sort_dict_by_keys

from .sentinels import NOT_CACHED, NotCachedFlag

logger = logging.getLogger(__name__)

T = TypeVar("T")


def make_cache_key(func_name: str, args: tuple[Any, ...]) -> str:
    """Compute a deterministic MD5 digest for a function call.

    Uses joblib's Hasher, which relies on Pickle for serialization, so
    lists and tuples, strings and bytes, True and 1 all produce distinct
    keys.

    Args:
        func_name: Name of the memoized function.
        args: Every argument that affects the result.

    Returns:
        str: The base16 MD5 hash of ``(func_name, args)``.
    """
    hasher = joblib.hashing.Hasher(hash_name="md5")
    return str(hasher.hash((func_name, args)))


class MemoCache(ParameterizableClass):
    """In-memory, never-evicting memoization store.

    Attributes:
        enabled (bool): If False, get_or_compute always computes and
            nothing is stored.
    """

    _enabled: bool
    _entries: dict[str, Any]

    def __init__(self, enabled: bool = True):
        """Create an empty cache.

        Args:
            enabled (bool): Store and reuse results. Defaults to True.
        """
        self._enabled = bool(enabled)
        self._entries = {}
        self._lock = threading.Lock()
        ParameterizableClass.__init__(self)

    def get_params(self) -> dict[str, Any]:
        """Return configuration parameters of this cache.

        Returns:
            dict: A sorted dictionary of parameters used to reconstruct
                the instance.
        """
        params = dict(enabled=self.enabled)
        sorted_params = sort_dict_by_keys(params)
        return sorted_params

    @property
    def enabled(self) -> bool:
        """Whether results are stored and reused."""
        return self._enabled

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __repr__(self) -> str:
        return f"{type(self).__name__}(enabled={self.enabled!r})"

    def lookup(self, key: str) -> Any | NotCachedFlag:
        """Return the cached value for key, or NOT_CACHED."""
        with self._lock:
            return self._entries.get(key, NOT_CACHED)

    def store(self, key: str, value: Any) -> None:
        """Store value under key; a no-op when the cache is disabled."""
        if not self._enabled:
            return
        with self._lock:
            self._entries[key] = value

    def get_or_compute(self,
                       func_name: str,
                       args: tuple[Any, ...],
                       compute: Callable[[], T]) -> T:
        """Return the memoized result of a call, computing it on a miss.

        Args:
            func_name: Name of the memoized function, part of the key.
            args: Every argument that affects the result, part of the key.
            compute: Zero-argument callable producing the result.

        Returns:
            The cached or freshly computed result. Exceptions raised by
            compute propagate and nothing is stored.
        """
        if not self._enabled:
            return compute()
        key = make_cache_key(func_name, args)
        cached = self.lookup(key)
        if cached is not NOT_CACHED:
            return cached
        result = compute()
        self.store(key, result)
        return result

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.debug("Cleared %d entries from %r", removed, self)


_DEFAULT_CACHE = MemoCache()


def get_default_cache() -> MemoCache:
    """Return the process-wide default cache."""
    return _DEFAULT_CACHE


def clear_default_cache() -> None:
    """Empty the process-wide default cache."""
    _DEFAULT_CACHE.clear()


def resolve_cache(cache: MemoCache | None) -> MemoCache:
    """Return cache, or the default cache when cache is None.

    Raises:
        TypeError: If cache is neither None nor a MemoCache.
    """
    if cache is None:
        return _DEFAULT_CACHE
    if not isinstance(cache, MemoCache):
        raise TypeError(f"cache must be a MemoCache or None, got {type(cache)!r}")
    return cache
