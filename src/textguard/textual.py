"""The single "textual" input capability shared by every escaper.

Escapers accept ``None``, ``str``, ``bytes`` or any object that can be
converted to text. The conversion is resolved here, once, at the call
boundary; the transforms themselves only ever see a valid ``str``.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sized
from typing import Any, Protocol, runtime_checkable

DEFAULT_ENCODING = "utf-8"

REPLACEMENT_CHARACTER = "\ufffd"

_SURROGATES = re.compile(r"[\ud800-\udfff]")


@runtime_checkable
class Textual(Protocol):
    """Anything that can deterministically produce its text form."""

    def __str__(self) -> str: ...


TextualInput = Textual | bytes | None


def substitute_invalid(text: str) -> str:
    """Replace code points that cannot be encoded (lone surrogates) with U+FFFD."""
    return _SURROGATES.sub(REPLACEMENT_CHARACTER, text)


def as_text(value: TextualInput, encoding: str = DEFAULT_ENCODING) -> str:
    """Resolve a textual input into a valid ``str``.

    Args:
        value: ``None``, a string, raw bytes, or any object with ``__str__``.
        encoding: Encoding used to decode ``bytes`` input. Malformed byte
            sequences are replaced by U+FFFD instead of raising.

    Returns:
        str: ``""`` for ``None``; otherwise the text with invalid sequences
        substituted.
    """
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode(encoding, "replace")
    if isinstance(value, str):
        return substitute_invalid(value)
    return substitute_invalid(str(value))


def is_empty(value: Any) -> bool:
    """Return True for ``None``, empty strings and empty containers.

    ``0`` and ``False`` are not considered empty.
    """
    if value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return False
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def drop_empty(values: Iterable[Any]) -> list[Any]:
    """Return the values that are not empty, preserving order.

    Mappings are filtered by value and returned as a list of values.
    """
    if isinstance(values, Mapping):
        values = values.values()
    return [v for v in values if not is_empty(v)]
