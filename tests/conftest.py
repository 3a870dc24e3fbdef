from __future__ import annotations

from pathlib import Path

import pytest

from textguard import clear_default_cache

TESTS_DIR = Path(__file__).resolve().parent

PROPERTY_FILES = (
    TESTS_DIR / "test_properties.py",
)

_FILE_MARKER_CACHE: dict[Path, dict[str, bool]] = {}


@pytest.fixture(autouse=True)
def fresh_default_cache():
    clear_default_cache()
    yield
    clear_default_cache()


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    for item in items:
        path = Path(str(item.fspath)).resolve()
        file_flags = _FILE_MARKER_CACHE.get(path)
        if file_flags is None:
            try:
                contents = path.read_text(encoding="utf-8", errors="ignore")
            except OSError:
                contents = ""
            file_flags = {
                "filesystem": "tmp_path" in contents,
            }
            _FILE_MARKER_CACHE[path] = file_flags

        if path in PROPERTY_FILES:
            item.add_marker(pytest.mark.property)
        if file_flags.get("filesystem"):
            item.add_marker(pytest.mark.filesystem)
