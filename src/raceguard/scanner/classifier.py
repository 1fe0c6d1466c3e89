"""Map filenames to the content category that selects a rule family."""

from __future__ import annotations

from typing import Optional

from raceguard.config.schema import Category

_EXTENSION_CATEGORIES: dict[str, Category] = {
    ".java": "java",
    ".sql": "sql-like",
    ".yml": "sql-like",
    ".yaml": "sql-like",
    ".ts": "script",
    ".tsx": "script",
    ".js": "script",
    ".jsx": "script",
}


def classify(filename: str) -> Optional[Category]:
    """Return the category for *filename*, or None if it is not tracked.

    Only the final extension counts and matching ignores case, so
    ``Cache.JAVA`` is Java and ``bundle.js.zip`` is untracked.
    """
    dot = filename.rfind(".")
    if dot == -1:
        return None
    return _EXTENSION_CATEGORIES.get(filename[dot:].lower())
