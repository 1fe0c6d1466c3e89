"""Data models for scan inputs."""

from __future__ import annotations

from dataclasses import dataclass

# Extensions the upload, archive and GitHub collaborators keep.
TRACKED_EXTENSIONS: tuple[str, ...] = (
    ".java",
    ".sql",
    ".yml",
    ".yaml",
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
)


@dataclass(frozen=True, slots=True)
class InputFile:
    """A named text blob submitted for analysis."""

    filename: str
    content: str


class SourceError(Exception):
    """Raised when an input location cannot be read at all."""


def is_tracked(name: str) -> bool:
    """True if *name* ends with one of the tracked extensions (any case)."""
    return name.lower().endswith(TRACKED_EXTENSIONS)
