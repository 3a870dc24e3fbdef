"""Custom exception types for the textguard error-handling taxonomy.

Defines three exception classes:

- ``EncodingError`` for when a value can't be serialized for a script
  context.
- ``IllegalCharactersError`` for when input contains characters outside an
  allow-list.
- ``CharacterLimitError`` for when a produced string exceeds a length limit.

All three subclass ``ValueError``, so callers that only care about
"bad input" can catch the builtin.
"""

from __future__ import annotations

from typing import Any


class EncodingError(ValueError):
    """A value could not be encoded as a JSON literal.

    Must be raised with exception chaining
    (``raise EncodingError(...) from exc``); the message is the
    serializer's own diagnostic.

    Args:
        message: The serializer's diagnostic message.
        value_type: Type of the value that failed to encode.

    Attributes:
        value_type: Type of the value that failed to encode.
    """

    def __init__(self, message: str, *, value_type: type | None = None) -> None:
        super().__init__(message)
        self.value_type = value_type


class IllegalCharactersError(ValueError):
    """Input contains characters outside the declared allow-list.

    Args:
        value: The offending (already lower-cased) input.
        allowed: Human-readable description of the allowed characters.

    Attributes:
        value: The offending input.
        allowed: Description of the allowed characters.
    """

    def __init__(self, value: str, allowed: str) -> None:
        super().__init__(
            f"The provided string contains illegal characters: {value!r}. "
            f"It must only contain {allowed}.")
        self.value = value
        self.allowed = allowed


class CharacterLimitError(ValueError):
    """A produced string is longer than permitted.

    Messages name the function that produced the string and the limit.

    Args:
        length: Length of the offending string.
        limit: The limit that was exceeded.
        caller: Name of the function that produced the string, or ``None``.

    Attributes:
        length: Length of the offending string.
        limit: The limit that was exceeded.
        caller: Name of the producing function, or ``None``.
    """

    def __init__(self, length: int, limit: int, caller: Any = None) -> None:
        if caller:
            message = (f"{caller} resulted in a {length} character string, "
                       f"exceeding the {limit} limit.")
        else:
            message = (f"The provided string is {length} characters long, "
                       f"exceeding the {limit} limit.")
        super().__init__(message)
        self.length = length
        self.limit = limit
        self.caller = caller
