"""Context escapers: one transform per output context.

Each function takes a raw value and returns a string that is safe to embed
directly into one kind of output:

    escape_html(): HTML element content and quoted attributes.
    escape_html_text(): HTML element content inside templates.
    escape_html_attr(): HTML attribute values (with mXSS mitigation).
    escape_css(): CSS strings and tokens.
    escape_js(): JavaScript / JSON literals inside ``<script>``.
    escape_url(): ``href`` and ``src`` attribute values.
    escape_ical(): iCalendar (RFC 5545) text values.
    escape_characters(): every character backslash-escaped.

None and empty input always produce "". escape_js is the only escaper
that can fail (EncodingError).
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from .exceptions import EncodingError
from .filters import (QUOTES_HTML5, QUOTES_LEGACY, QUOTES_NONE,
                      filter_url, html_special_chars)
from .strings import add_c_slashes
from .textual import (DEFAULT_ENCODING, REPLACEMENT_CHARACTER, TextualInput,
                      as_text, substitute_invalid)

logger = logging.getLogger(__name__)

# http://www.w3.org/TR/2006/WD-CSS21-20060411/syndata.html#q6
CSS_SPECIAL_CHARS = frozenset(
    "".join(chr(i) for i in range(0x20)) + "!\"#$%&'()*+,./:;<=>?@[\\]^`{|}~")

# https://www.ietf.org/rfc/rfc5545.txt
ICAL_SPECIAL_CHARS = frozenset("\";\\,:\n")

_ICAL_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B-\x1F]")

# Sequences that would end an enclosing <script> element or CDATA section.
_SCRIPT_BREAKERS = {
    "]]>": "]]\\u003E",
    "<!": "\\u003C!",
    "</": "<\\/",
}
_SCRIPT_BREAKER_PATTERN = re.compile("|".join(
    re.escape(s) for s in _SCRIPT_BREAKERS))

# Characters whose presence makes a backtick harmless in attribute values.
_MXSS_DISARMING_CHARS = frozenset(" <>\"'")


def escape_html(value: TextualInput, encoding: str = DEFAULT_ENCODING) -> str:
    """Escape a string for use anywhere inside HTML, except comments.

    ``& < > " '`` become ``&amp; &lt; &gt; &quot; &apos;``.

    Args:
        value: Text to escape; None yields "".
        encoding: Encoding used when value is bytes. Malformed sequences
            are replaced with U+FFFD.

    Returns:
        str: The escaped text.
    """
    text = as_text(value, encoding)
    if not text:
        return ""
    return html_special_chars(text, QUOTES_HTML5)


def escape_html_text(value: TextualInput, encoding: str = DEFAULT_ENCODING) -> str:
    """Escape a string for use as HTML element text produced by a template.

    Quotes are left alone. Curly braces are neutralized so that the output
    can't be picked up as interpolation by a client-side template engine:
    ``{{`` becomes ``{<!-- -->{`` and any other ``{`` becomes ``&#123;``.
    """
    text = as_text(value, encoding)
    if not text:
        return ""
    text = html_special_chars(text, QUOTES_NONE)
    return re.sub(r"\{\{|\{",
                  lambda m: "{<!-- -->{" if m.group(0) == "{{" else "&#123;",
                  text)


def escape_html_attr(value: TextualInput,
                     double_encode: bool = True,
                     encoding: str = DEFAULT_ENCODING) -> str:
    """Escape a string for use inside an HTML attribute value.

    Both quote characters are escaped, so the result is safe between
    double quotes and between single quotes alike.

    If the text contains a backtick but none of space, ``<``, ``>``, ``"``
    and ``'``, a trailing space is appended first: browsers serializing
    innerHTML may otherwise emit the value unquoted, and a backtick-quoted
    value can then smuggle markup (innerHTML mXSS, nette/nette#1496).

    Args:
        value: Text to escape; None yields "".
        double_encode: If False, existing character references are not
            encoded again.
        encoding: Encoding used when value is bytes.

    Returns:
        str: The escaped attribute value, with ``{`` as ``&#123;``.
    """
    text = as_text(value, encoding)
    if "`" in text and not (_MXSS_DISARMING_CHARS & set(text)):
        text += " "
    text = html_special_chars(text, QUOTES_HTML5, double_encode=double_encode)
    return text.replace("{", "&#123;")


def escape_css(value: TextualInput) -> str:
    """Escape a string for use inside a CSS string or as a CSS token.

    Control characters and ``!"#$%&'()*+,./:;<=>?@[\\]^`{|}~`` are
    backslash-escaped (CSS 2.1, section 4.3.7).
    """
    text = as_text(value)
    if not text:
        return ""
    return add_c_slashes(text, CSS_SPECIAL_CHARS)


def _to_json_default(obj: Any) -> Any:
    """JSON fallback for bytes and for objects that marshal themselves."""
    if isinstance(obj, (bytes, bytearray)):
        return as_text(obj)
    to_json = getattr(obj, "to_json", None)
    if callable(to_json):
        return to_json()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def escape_js(value: Any) -> str:
    """Encode a value as a JSON literal safe to embed inside ``<script>``.

    Unicode characters and ``/`` are left unescaped, lone surrogates are
    replaced with U+FFFD, and objects with a ``to_json()`` method are
    encoded through it. ``]]>``, ``<!`` and ``</`` are then rewritten so
    the literal can close neither the script element nor a CDATA section.

    Args:
        value: Any JSON-serializable value. Bytes are decoded as UTF-8
            with malformed sequences replaced by U+FFFD.

    Returns:
        str: The JSON text.

    Raises:
        EncodingError: If the value can't be represented as JSON (cycles,
            NaN or infinities, unsupported types).
    """
    try:
        encoded = json.dumps(value,
                             ensure_ascii=False,
                             allow_nan=False,
                             separators=(",", ":"),
                             default=_to_json_default)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.debug("Failed to encode %s for a script context: %s",
                     type(value).__name__, exc)
        raise EncodingError(str(exc), value_type=type(value)) from exc

    encoded = substitute_invalid(encoded)
    return _SCRIPT_BREAKER_PATTERN.sub(
        lambda m: _SCRIPT_BREAKERS[m.group(0)], encoded)


def escape_url(value: TextualInput) -> str:
    """Sanitize a string for use inside an ``href`` or ``src`` attribute.

    The value is filtered with filter_url(preserve_tags=True), so that
    tag-like characters survive, and then HTML-escaped (``& < > " '``) so
    that they are rendered inert. This does not validate the URL.
    """
    text = filter_url(as_text(value), preserve_tags=True)
    return html_special_chars(text, QUOTES_LEGACY)


def escape_ical(value: TextualInput) -> str:
    """Escape a string for use as an iCalendar text value (RFC 5545).

    Carriage returns are dropped, other control characters except tab and
    newline become U+FFFD, and ``" ; \\ , :`` and newline are
    backslash-escaped (newline as ``\\n``).
    """
    text = as_text(value).replace("\r", "")
    text = _ICAL_CONTROL_CHARS.sub(REPLACEMENT_CHARACTER, text)
    return add_c_slashes(text, ICAL_SPECIAL_CHARS)


def escape_characters(value: TextualInput) -> str:
    """Escape each and every character in the provided string.

    Examples:
        >>> escape_characters("Hello!")
        '\\\\H\\\\e\\\\l\\\\l\\\\o\\\\!'
    """
    return "".join("\\" + char for char in as_text(value))
