"""Safe character handling utilities for URLs and keys.

This module defines the allow-listed character sets that URL filtering and
key handling rely on, and a single operation that strips every character
outside such a set.

Two variants exist. The ASCII set is enumerable and is exposed as a
frozenset. The Unicode-aware set adds every Unicode word character, so it
is exposed as a regular-expression character class instead.
"""
import re
import string

# Punctuation permitted in URLs by both the ASCII and the Unicode set.
URL_SAFE_PUNCTUATION = ".,_~:;@!$&*?#=%()+-[]'/"

# Characters that are let through only when tag-like content must survive
# filtering so that it can be escaped later instead of silently dropped.
URL_TAG_CHARS = "{}|^`\"><@"

# ASCII letters (a-z, A-Z), digits (0-9) and URL_SAFE_PUNCTUATION.
URL_SAFE_CHARS_SET = frozenset(
    string.ascii_letters + string.digits + URL_SAFE_PUNCTUATION)

# Regex class body for the Unicode set; \w is Unicode-aware for str patterns.
URL_SAFE_CLASS_UNICODE = r"\w" + re.escape(URL_SAFE_PUNCTUATION)

# Regex class body equivalent to URL_SAFE_CHARS_SET.
URL_SAFE_CLASS_ASCII = "A-Za-z0-9" + re.escape(URL_SAFE_PUNCTUATION)

_UNSAFE_PATTERNS: dict[tuple[bool, bool], re.Pattern[str]] = {}


def get_url_safe_chars() -> frozenset[str]:
    """Get the ASCII URL-safe character set.

    Returns:
        frozenset[str]: ASCII letters, digits and the characters
            ``.,_~:;@!$&*?#=%()+-[]'/``.
    """
    return URL_SAFE_CHARS_SET


def _unsafe_pattern(unicode: bool, preserve_tags: bool) -> re.Pattern[str]:
    """Return the compiled "anything not allowed" pattern for a variant."""
    pattern = _UNSAFE_PATTERNS.get((unicode, preserve_tags))
    if pattern is None:
        allowed = URL_SAFE_CLASS_UNICODE if unicode else URL_SAFE_CLASS_ASCII
        if preserve_tags:
            allowed += re.escape(URL_TAG_CHARS)
        pattern = re.compile(f"[^{allowed}]")
        _UNSAFE_PATTERNS[(unicode, preserve_tags)] = pattern
    return pattern


def strip_unsafe_chars(a_str: str,
                       unicode: bool = True,
                       preserve_tags: bool = False) -> str:
    """Remove every character that is not URL-safe.

    Args:
        a_str (str): Input string that may contain disallowed characters.
        unicode (bool): If True, Unicode word characters are allowed in
            addition to the ASCII set.
        preserve_tags (bool): If True, the characters ``{}|^`"><@`` are
            allowed as well.

    Returns:
        str: The input with all disallowed characters removed.
    """
    return _unsafe_pattern(unicode, preserve_tags).sub("", a_str)


def contains_unsafe_chars(a_str: str,
                          unicode: bool = True,
                          preserve_tags: bool = False) -> bool:
    """Check if a string contains characters outside the URL-safe set.

    Args:
        a_str (str): Input string to check.
        unicode (bool): Use the Unicode-aware set instead of the ASCII one.
        preserve_tags (bool): Treat ``{}|^`"><@`` as safe.

    Returns:
        bool: True if any character would be removed by
            strip_unsafe_chars, False otherwise.
    """
    return _unsafe_pattern(unicode, preserve_tags).search(a_str) is not None
