"""Key, path and URL normalizers.

All three functions canonicalize a string (or an ordered sequence of
strings) into one standard representation. normalize_path and
normalize_url are memoized through a MemoCache (see memo_cache.py);
normalize_key is cheap and is not.
"""
from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping, Sequence

from .exceptions import CharacterLimitError, IllegalCharactersError
from .memo_cache import MemoCache, resolve_cache
from .strings import ascii_lower, enforce_character_limit
from .textual import as_text


logger = logging.getLogger(__name__)


def _max_path_length() -> int:
    """Return the host's maximum path length, or 4096 when unknown."""
    try:
        return os.pathconf("/", "PC_PATH_MAX")
    except (AttributeError, OSError, ValueError):
        return 260 if os.name == "nt" else 4096


# Longest path normalize_path will produce, as reported by the host.
MAX_PATH_LENGTH = _max_path_length()

# Characters stripped from both ends of every path segment.
PATH_SEGMENT_STRIP_CHARS = " \n\r\t\v\0\\/"

NormalizerInput = str | Sequence[str]


def _as_parts(value: NormalizerInput, argument: str = "value") -> str | list[str]:
    """Validate normalizer input: a string, or a sequence of strings.

    Bytes are decoded as UTF-8 text, both as a whole and as sequence items.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return as_text(value)
    if isinstance(value, Mapping) or not isinstance(value, Sequence):
        raise TypeError(
            f"{argument} must be a string or a sequence of strings, "
            f"got {type(value)!r}")
    return [as_text(part) for part in value]


def normalize_key(value: NormalizerInput,
                  separator: str = "-",
                  character_limit: int = 0,
                  throw_on_illegal: bool = False) -> str:
    """Normalize a string, or a sequence of strings, into a key.

    - Joins a sequence with separator.
    - Converts ASCII letters to lowercase.
    - Replaces every run of characters other than ``a-z``, ``0-9`` and
      separator with a single separator.
    - Removes leading and trailing separators.

    Already normalized keys are returned unchanged.

    Examples:
        >>> normalize_key("./assets/scripts/example.js")
        'assets-scripts-example-js'

    Args:
        value: A string or a sequence of strings.
        separator: Replacement for illegal runs; commonly "-", "_" or "".
        character_limit: If non-zero, the key (before trimming) must be
            shorter than this.
        throw_on_illegal: Raise instead of replacing when value contains
            anything but ASCII letters, digits, hyphens, underscores and
            separator.

    Returns:
        str: The normalized key.

    Raises:
        IllegalCharactersError: If throw_on_illegal is set and value
            contains illegal characters.
        CharacterLimitError: If character_limit is set and reached.
    """
    parts = _as_parts(value)
    key = ascii_lower(parts if isinstance(parts, str) else separator.join(parts))
    escaped_separator = re.escape(separator)

    if throw_on_illegal and not re.fullmatch(
            f"[a-zA-Z0-9_\\-{escaped_separator}]+", key):
        raise IllegalCharactersError(
            key, "ASCII letters, numbers, hyphens, and underscores")

    key = re.sub(f"[^a-z0-9{escaped_separator}]+", separator, key)

    if character_limit and len(key) >= character_limit:
        raise CharacterLimitError(len(key), character_limit, "normalize_key")

    return key.strip(separator) if separator else key


def _normalize_path(value: str | list[str], trailing_slash: bool) -> str:
    """Uncached implementation of normalize_path."""
    raw = value if isinstance(value, str) else os.sep.join(value)
    is_absolute = raw.lstrip(" \n\r\t\v\0")[:1] in ("/", "\\")

    segments = re.split(r"[\\/]", raw)
    segments = [s.strip(PATH_SEGMENT_STRIP_CHARS) for s in segments]
    path = os.sep.join(s for s in segments if s)
    if is_absolute:
        path = os.sep + path

    enforce_character_limit(path, MAX_PATH_LENGTH - 2, "normalize_path")

    try:
        if os.path.exists(path):
            path = os.path.realpath(path)
    except OSError as exc:
        logger.debug("Could not resolve %r, keeping it unresolved: %s", path, exc)

    return path + os.sep if trailing_slash else path


def normalize_path(value: NormalizerInput,
                   trailing_slash: bool = False,
                   cache: MemoCache | None = None) -> str:
    """Normalize a string, or a sequence of strings, assuming it is a path.

    - A sequence is joined using the system separator.
    - Both slashes and backslashes are normalized to the system separator.
    - Repeated separators are collapsed; stray whitespace and separators
      are trimmed from every segment. A leading root separator is kept.
    - Paths that exist are resolved to their canonical form; paths that
      don't are returned as assembled.
    - The result is cached (see memo_cache.py).

    Examples:
        >>> normalize_path("./assets\\\\/scripts///example.js")  # on POSIX
        './assets/scripts/example.js'

    Args:
        value: A string or a sequence of path segments.
        trailing_slash: Append a trailing separator.
        cache: MemoCache to use; the default cache when None.

    Returns:
        str: The normalized path.

    Raises:
        CharacterLimitError: If the assembled path is longer than
            ``MAX_PATH_LENGTH - 2``.
    """
    parts = _as_parts(value)
    trailing_slash = bool(trailing_slash)
    return resolve_cache(cache).get_or_compute(
        "normalize_path", (parts, trailing_slash),
        lambda: _normalize_path(parts, trailing_slash))


def _split_once(text: str, delimiter: str) -> tuple[str, str]:
    head, _, tail = text.partition(delimiter)
    return head, tail


def _normalize_url(value: str | list[str], trailing_slash: bool) -> str:
    """Uncached implementation of normalize_url."""
    text = value if isinstance(value, str) else "/".join(value)
    scheme = query = fragment = ""

    if "://" in text:
        scheme, text = text.split("://", 1)
        scheme = ascii_lower(scheme) + "://"

    query_at = text.find("?")
    fragment_at = text.find("#")

    # Whichever delimiter comes first ends the path; the other one is
    # inside the remainder.
    if query_at != -1 and fragment_at != -1:
        if query_at < fragment_at:
            text, query = _split_once(text, "?")
            query, fragment = _split_once(query, "#")
        else:
            text, fragment = _split_once(text, "#")
            fragment, query = _split_once(fragment, "?")
        query = "?" + query
        fragment = "#" + fragment
    elif query_at != -1:
        text, query = _split_once(text, "?")
        query = "?" + query
    elif fragment_at != -1:
        text, fragment = _split_once(text, "#")
        fragment = "#" + fragment

    path = ascii_lower("/".join(s for s in text.split("/") if s))
    if trailing_slash:
        path += "/"

    return scheme + path + query + fragment


def normalize_url(value: NormalizerInput,
                  trailing_slash: bool = False,
                  cache: MemoCache | None = None) -> str:
    """Normalize a string, or a sequence of strings, assuming it is a URL.

    - A sequence is joined with "/".
    - The ``scheme://`` prefix, if any, is lower-cased.
    - ``?query`` and ``#fragment`` are split off in either order and
      reattached unchanged, query first.
    - The path is lower-cased and empty segments are removed.
    - The result is cached (see memo_cache.py).

    This does not validate the URL.

    Examples:
        >>> normalize_url("HTTPS://Example.com//Foo/?B=2#Top")
        'https://example.com/foo?B=2#Top'

    Args:
        value: A string or a sequence of URL parts.
        trailing_slash: Append "/" to the path.
        cache: MemoCache to use; the default cache when None.

    Returns:
        str: The normalized URL.
    """
    parts = _as_parts(value)
    trailing_slash = bool(trailing_slash)
    return resolve_cache(cache).get_or_compute(
        "normalize_url", (parts, trailing_slash),
        lambda: _normalize_url(parts, trailing_slash))
