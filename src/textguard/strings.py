"""String utilities shared by the escapers and exposed for general use.

Functions:
    to_string(): Best-effort conversion of any value (including iterables)
        into a string.
    squish(): Collapse whitespace runs into single spaces.
    string_explode(): Split a value into parts, dropping empty ones.
    string_contains(): Count or report occurrences of one or more needles.
    replace_each(): Apply a search-to-replacement map.
    extract_first_match(), regex_named_groups(): Regex extraction helpers.
    strip_tags(): Remove tag-like markup.
    enforce_character_limit(): Raise CharacterLimitError on long strings.
    add_c_slashes(): C-style backslash escaping of selected characters.
    ascii_lower(): Lower-case ASCII letters only.
    encode_numeric_entities(): Encode non-ASCII code points as ``&#N;``.
"""
from __future__ import annotations

import re
import string
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .exceptions import CharacterLimitError
from .textual import DEFAULT_ENCODING, TextualInput, as_text, drop_empty

WHITESPACE = " "

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_C_ESCAPES = {
    "\a": "a",
    "\b": "b",
    "\t": "t",
    "\n": "n",
    "\v": "v",
    "\f": "f",
    "\r": "r",
}

_TAG = re.compile(r"<!--.*?(?:-->|$)|<[^>]*(?:>|$)", re.DOTALL)


def ascii_lower(text: str) -> str:
    """Lower-case ``A-Z`` and leave every other character untouched."""
    return text.translate(_ASCII_LOWER)


def to_string(value: Any, separator: str = "", filter_empty: bool = True) -> str:
    """Return a string from any given value, trying very hard.

    Args:
        value: ``None``, a scalar, bytes, an iterable or any object.
        separator: Joins the items when value is an iterable.
        filter_empty: Drop empty items (``None``, ``""``, empty containers)
            from iterables before joining. ``0`` and ``False`` are kept.

    Returns:
        str: The text form of value.
    """
    if value is None or isinstance(value, (str, bytes, bytearray, int, float)):
        return as_text(value)
    if isinstance(value, Iterable):
        items = list(value.values()) if isinstance(value, Mapping) else list(value)
        if filter_empty:
            items = drop_empty(items)
        return separator.join(as_text(item) for item in items)
    return as_text(value)


def squish(text: str, whitespace_only: bool = False) -> str:
    """Compress a string by collapsing consecutive whitespace.

    Args:
        text: String to compress.
        whitespace_only: If True, only runs of spaces are collapsed, leaving
            tabs and newlines intact.

    Returns:
        str: The string with each run replaced by a single space.
    """
    pattern = r" +" if whitespace_only else r"\s+"
    return re.sub(pattern, WHITESPACE, text)


def string_explode(value: TextualInput | Iterable[Any],
                   separator: str = ",",
                   limit: int | None = None,
                   filter_empty: bool = True) -> list[str]:
    """Split a value into a list of strings.

    Args:
        value: Anything to_string accepts.
        separator: Non-empty separator to split on.
        limit: Maximum number of parts; the last part holds the remainder.
            None means no limit.
        filter_empty: Drop empty parts.

    Returns:
        list[str]: The parts, in order.

    Raises:
        ValueError: If separator is empty or limit is not positive.
    """
    if not separator:
        raise ValueError("separator must be a non-empty string")
    if limit is not None and limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    max_split = -1 if limit is None else limit - 1
    parts = to_string(value).split(separator, max_split)
    return drop_empty(parts) if filter_empty else parts


def string_contains(text: str,
                    needle: str | Sequence[str],
                    return_needles: bool = False,
                    contains_only_one: bool = False,
                    contains_all: bool = False,
                    case_sensitive: bool = False,
                    ) -> bool | int | str | list[str]:
    """Search text for one or several needles.

    By default returns the total number of occurrences of all needles.

    Args:
        text: The haystack.
        needle: A single needle or a sequence of needles. Empty needles
            never match.
        return_needles: Return the needles that were found instead of a
            count: a single string when exactly one matched, else a list.
        contains_only_one: Return False unless exactly one of the needles
            was found.
        contains_all: Return a bool telling whether every needle was found.
        case_sensitive: Compare case-sensitively.

    Returns:
        bool | int | str | list[str]: See the flags above.
    """
    def fold(s: str) -> str:
        return s if case_sensitive else s.lower()

    haystack = fold(text)
    needles = [needle] if isinstance(needle, str) else list(needle)

    count = 0
    found: list[str] = []
    for candidate in needles:
        if not candidate:
            continue
        matches = haystack.count(fold(candidate))
        if matches:
            found.append(candidate)
            count += matches

    if contains_only_one and len(found) != 1:
        return False

    if contains_all:
        return len(found) == len(needles)

    if return_needles:
        return found[0] if len(found) == 1 else found

    return count


def replace_each(mapping: Mapping[str, Any],
                 content: str | list[str],
                 case_sensitive: bool = True) -> str | list[str]:
    """Replace each key of mapping with its value wherever it occurs.

    Pairs are applied in mapping order; later pairs see the output of
    earlier ones. A list of strings is processed element-wise.

    Args:
        mapping: Search string to replacement (converted with as_text).
        content: A string or a list of strings.
        case_sensitive: Match keys case-sensitively.

    Returns:
        str | list[str]: The processed content; empty content is returned
        unchanged.
    """
    if not content:
        return content
    if not isinstance(content, str):
        return [replace_each(mapping, item, case_sensitive) for item in content]

    for search, replacement in mapping.items():
        if not search:
            continue
        replacement = as_text(replacement)
        if case_sensitive:
            content = content.replace(search, replacement)
        else:
            content = re.sub(re.escape(search), lambda _m: replacement,
                             content, flags=re.IGNORECASE)
    return content


def extract_first_match(pattern: str, text: str) -> str | None:
    """Return the first full match of pattern in text, or None."""
    match = re.search(pattern, text)
    return match.group(0) if match else None


def regex_named_groups(pattern: str, text: str, offset: int = 0) -> list[dict[str, str]]:
    """Collect the non-empty named groups of every match.

    Matches that capture no named group are left out.

    Args:
        pattern: Regular expression with named groups.
        text: Subject string.
        offset: Position in text to start searching from.

    Returns:
        list[dict[str, str]]: One mapping of group name to value per match.
    """
    result = []
    for match in re.compile(pattern).finditer(text, offset):
        groups = {k: v for k, v in match.groupdict().items() if v}
        if groups:
            result.append(groups)
    return result


def strip_tags(text: str, replacement: str = WHITESPACE) -> str:
    """Remove tag-like markup and HTML comments.

    replacement is inserted where each tag started, so that text from
    adjacent elements does not run together; double spaces are then
    collapsed.
    """
    stripped = _TAG.sub(lambda _m: replacement, text)
    return stripped.replace("  ", " ")


def enforce_character_limit(text: str, limit: int, caller: str | None = None) -> None:
    """Raise when text is longer than limit.

    Args:
        text: The string to check.
        limit: Maximum permitted length.
        caller: Name of the function that produced text, used in the message.

    Raises:
        CharacterLimitError: If ``len(text) > limit``.
    """
    length = len(text)
    if length > limit:
        raise CharacterLimitError(length, limit, caller)


def add_c_slashes(text: str, characters: str | frozenset[str]) -> str:
    """Backslash-escape every character of text that is in characters.

    Escaped characters with a C escape (``\\n``, ``\\t`` and friends) use it;
    other non-printable characters become three-digit octal escapes; all the
    rest are simply prefixed with a backslash.
    """
    escaped = []
    for char in text:
        if char not in characters:
            escaped.append(char)
        elif char in _C_ESCAPES:
            escaped.append("\\" + _C_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) > 0x7E:
            escaped.append(f"\\{ord(char):03o}")
        else:
            escaped.append("\\" + char)
    return "".join(escaped)


def encode_numeric_entities(value: TextualInput, encoding: str = DEFAULT_ENCODING) -> str:
    """Ensure valid text and encode every code point >= 0x80 as ``&#N;``.

    The result is pure ASCII, so it survives any downstream encoding.
    """
    text = as_text(value, encoding)
    return "".join(c if ord(c) < 0x80 else f"&#{ord(c)};" for c in text)
