"""Installed version of textguard, or "unknown" when running from a checkout."""

from importlib import metadata as _md

DISTRIBUTION_NAME = "textguard"

try:
    __version__ = _md.version(DISTRIBUTION_NAME)
except _md.PackageNotFoundError:
    __version__ = "unknown"
