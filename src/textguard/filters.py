"""Filters: safe strings that may still carry inert markup.

A filter removes or substitutes disallowed content, where an escaper
(see escapes.py) encodes it. filter_html escapes HTML special characters
but converts template comments into real HTML comments; filter_url drops
every character that is not URL-safe.

The HTML special-character encoder used by all HTML-facing functions of
the package, html_special_chars(), lives here as well.
"""
from __future__ import annotations

import re
from html.entities import html5

from .memo_cache import MemoCache, resolve_cache
from .safe_chars import strip_unsafe_chars
from .textual import DEFAULT_ENCODING, TextualInput, as_text

# Quote handling styles for html_special_chars.
QUOTES_HTML5 = "html5"    # " -> &quot;   ' -> &apos;
QUOTES_LEGACY = "legacy"  # " -> &quot;   ' -> &#039;
QUOTES_NONE = "none"      # quotes are left as they are

_QUOTE_ENTITIES = {
    QUOTES_HTML5: {'"': "&quot;", "'": "&apos;"},
    QUOTES_LEGACY: {'"': "&quot;", "'": "&#039;"},
    QUOTES_NONE: {},
}

_BASE_ENTITIES = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}

# A candidate character reference, or a single character that may need encoding.
_REFERENCE_OR_CHAR = re.compile(
    r"&(?:([A-Za-z][A-Za-z0-9]*)|#[0-9]+|#[xX][0-9A-Fa-f]+);|[&<>\"']")

# Template comment delimiter pairs (Latte, Twig, Blade).
TEMPLATE_COMMENT_DELIMITERS = (
    ("{* ", " *}"),
    ("{# ", " #}"),
    ("{{-- ", " --}}"),
)

HTML_COMMENT_OPEN = "<!-- "
HTML_COMMENT_CLOSE = " -->"

_TEMPLATE_COMMENT_PATTERN = re.compile(
    "|".join(f"{re.escape(opening)}(.*?){re.escape(closing)}"
             for opening, closing in TEMPLATE_COMMENT_DELIMITERS),
    re.DOTALL)


def _keep_reference(match: re.Match[str], entities: dict[str, str]) -> str:
    token = match.group(0)
    if len(token) == 1:
        return entities.get(token, token)
    name = match.group(1)
    if name is not None and name + ";" not in html5:
        return "&amp;" + token[1:]
    return token


def html_special_chars(text: str,
                       quote_style: str = QUOTES_HTML5,
                       double_encode: bool = True) -> str:
    """Convert ``& < >`` and, depending on quote_style, quotes to entities.

    Args:
        text: Valid text (see textual.as_text).
        quote_style: QUOTES_HTML5, QUOTES_LEGACY or QUOTES_NONE.
        double_encode: If False, ampersands that already start a character
            reference (``&amp;``, ``&#123;``, ``&#x7B;``) are kept as is.
            Named references must be known HTML5 entities.

    Returns:
        str: The encoded text.

    Raises:
        ValueError: If quote_style is unknown.
    """
    if quote_style not in _QUOTE_ENTITIES:
        raise ValueError(f"Unknown quote_style {quote_style!r}")
    entities = {**_BASE_ENTITIES, **_QUOTE_ENTITIES[quote_style]}
    if double_encode:
        return "".join(entities.get(c, c) for c in text)
    return _REFERENCE_OR_CHAR.sub(lambda m: _keep_reference(m, entities), text)


def replace_template_comments(text: str) -> str:
    """Rewrite complete template comments into HTML comments.

    Only an opening delimiter followed by its own closing delimiter is
    rewritten, so a stray ``{* `` never opens an HTML comment. The text
    between them is kept as is.
    """
    def to_html_comment(match: re.Match[str]) -> str:
        body = next(group for group in match.groups() if group is not None)
        return HTML_COMMENT_OPEN + body + HTML_COMMENT_CLOSE

    return _TEMPLATE_COMMENT_PATTERN.sub(to_html_comment, text)


def filter_html(value: TextualInput, encoding: str = DEFAULT_ENCODING) -> str:
    """Escape HTML special characters and turn template comments into HTML ones.

    ``{* note *}`` (and the Twig and Blade equivalents) left in rendered
    output become ``<!-- note -->`` instead of visible text.

    Args:
        value: Text to filter; None yields "".
        encoding: Encoding used when value is bytes.

    Returns:
        str: The filtered text.
    """
    text = as_text(value, encoding)
    if not text:
        return ""
    return replace_template_comments(html_special_chars(text))


def filter_url(value: TextualInput,
               preserve_tags: bool = False,
               cache: MemoCache | None = None) -> str:
    """Filter a string assuming it is a URL.

    - Preserves Unicode word characters.
    - Removes tag characters unless preserve_tags is True, in which case
      ``{}|^`"><@`` survive so that they can be escaped downstream.

    This is a sanitizer, not a validator: the result is not checked for
    being a well-formed URL.

    Args:
        value: The URL-ish text.
        preserve_tags: Keep tag characters.
        cache: MemoCache to use; the default cache when None.

    Returns:
        str: value with every disallowed character removed.
    """
    text = as_text(value)
    return resolve_cache(cache).get_or_compute(
        "filter_url", (text, bool(preserve_tags)),
        lambda: strip_unsafe_chars(text, unicode=True,
                                   preserve_tags=bool(preserve_tags)))
