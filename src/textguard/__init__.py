"""Context-aware escaping, filtering and normalization of strings.

This package provides pure, deterministic text transforms for safely
embedding untrusted values into HTML, CSS, JavaScript, URL and iCalendar
output, plus key, path and URL normalizers backed by an explicit
memoization cache.

Escapers (escapes.py):
    escape_html(), escape_html_text(), escape_html_attr(), escape_css(),
    escape_js(), escape_url(), escape_ical(), escape_characters().

Filters (filters.py):
    filter_html(): HTML-escape and turn template comments into HTML ones.
    filter_url(): Strip characters that are not URL-safe.

Normalizers (normalizers.py):
    normalize_key(), normalize_path(), normalize_url().

Caching (memo_cache.py):
    MemoCache, get_default_cache(), clear_default_cache().

Errors (exceptions.py):
    EncodingError, IllegalCharactersError, CharacterLimitError.

Note:
    Every escaper treats None and empty input as "" and never raises,
    except escape_js, which raises EncodingError for values JSON can't
    represent.
"""
from .safe_chars import *
from .textual import Textual, TextualInput, as_text, is_empty, drop_empty
from .exceptions import EncodingError, IllegalCharactersError, CharacterLimitError
from .memo_cache import MemoCache, get_default_cache, clear_default_cache
from .filters import filter_html, filter_url, html_special_chars
from .escapes import (escape_html, escape_html_text, escape_html_attr,
                      escape_css, escape_js, escape_url, escape_ical,
                      escape_characters)
from .normalizers import normalize_key, normalize_path, normalize_url
from .keys import encode_key, hash_key, source_key
from .strings import (to_string, squish, string_explode, string_contains,
                      replace_each, extract_first_match, regex_named_groups,
                      strip_tags, enforce_character_limit, encode_numeric_entities)
from ._version_info import __version__
