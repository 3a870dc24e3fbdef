"""Deterministic keys derived from arbitrary values.

Functions:
    encode_key(*values): Compact JSON of the argument list.
    hash_key(value, encoder): Short, non-reversible hex digest of a value.
    source_key(source, project_root): Key for a filesystem path, relative
        to an explicitly given project root.
"""
from __future__ import annotations

import hashlib
import json
from typing import Any

import joblib.hashing

from .normalizers import normalize_key
from .textual import TextualInput, as_text

# Length of the digests returned by hash_key.
HASH_KEY_LENGTH = 16

KEY_ENCODERS = ("json", "pickle", "join")


def encode_key(*values: Any) -> str:
    """Generate a deterministic key from one or more values.

    Values are encoded as a compact JSON array with Unicode characters and
    slashes left unescaped.

    Raises:
        TypeError: If a value is not JSON-serializable.
    """
    return json.dumps(list(values), ensure_ascii=False, separators=(",", ":"))


def _pickle_digest(value: Any) -> str:
    hasher = joblib.hashing.Hasher(hash_name="md5")
    return str(hasher.hash(value))


def hash_key(value: Any, encoder: str = "json") -> str:
    """Generate a deterministic hash key from a value.

    The value is stringified by one of the encoders, then hashed. The hash
    is not reversible.

    - ``json``: the default. Falls back to ``pickle`` when the value is not
      JSON-serializable.
    - ``pickle``: joblib's pickle-based hashing; works for most objects.
    - ``join``: ``":".join`` of a flat sequence of scalars; the fastest for
      simple lists of strings.

    Examples:
        >>> len(hash_key(["example", True]))
        16

    Args:
        value: The value to hash.
        encoder: One of KEY_ENCODERS.

    Returns:
        str: HASH_KEY_LENGTH lowercase hex characters.

    Raises:
        ValueError: If encoder is unknown.
    """
    if encoder not in KEY_ENCODERS:
        raise ValueError(f"encoder must be one of {KEY_ENCODERS}, got {encoder!r}")

    if encoder == "join" and isinstance(value, (list, tuple)):
        payload = ":".join(as_text(v) for v in value)
    elif encoder == "pickle":
        return _pickle_digest(value)[:HASH_KEY_LENGTH]
    else:
        try:
            payload = json.dumps(value, ensure_ascii=False, sort_keys=True,
                                 separators=(",", ":"))
        except (TypeError, ValueError):
            return _pickle_digest(value)[:HASH_KEY_LENGTH]

    digest = hashlib.md5(payload.encode("utf-8", "surrogatepass")).hexdigest()
    return digest[:HASH_KEY_LENGTH]


def source_key(source: TextualInput,
               project_root: str,
               separator: str = "-",
               from_root: str | None = None) -> str:
    """Generate a deterministic key from a filesystem path.

    The source is passed through normalize_key. If the result starts with
    the normalized project root (optionally extended with from_root), that
    prefix is removed.

    Examples:
        >>> source_key("/var/www/project/vendor/package/example.file",
        ...            project_root="/var/www/project")
        'vendor-package-example-file'

    Args:
        source: Path of the source.
        project_root: Path the returned key should be relative to.
        separator: Key separator, see normalize_key.
        from_root: Optional subdirectory of project_root to strip as well.

    Returns:
        str: The key.
    """
    root_parts = [project_root] if from_root is None else [project_root, from_root]
    root_key = normalize_key(root_parts, separator)
    key = normalize_key(as_text(source), separator)

    if root_key and key.startswith(root_key):
        key = key[len(root_key):]
        return key.strip(separator) if separator else key
    return key
