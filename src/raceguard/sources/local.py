"""Collect InputFiles from local files, directories and zip archives."""

from __future__ import annotations

import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from raceguard.sources.archive import extract_zip
from raceguard.sources.models import InputFile, SourceError, is_tracked

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _is_ignored(path: Path, ignore_globs: Sequence[str]) -> bool:
    posix = path.as_posix()
    return any(fnmatch(posix, g) or fnmatch(path.name, g) for g in ignore_globs)


def _walk(root: Path) -> Iterator[Path]:
    """Yield regular files under *root* in sorted, depth-first order."""
    for child in sorted(root.iterdir()):
        if child.is_dir():
            yield from _walk(child)
        elif child.is_file():
            yield child


def _read_text(path: Path, display_name: str) -> Optional[InputFile]:
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.warning("Skipping %s: not valid UTF-8", display_name)
        return None
    except OSError as exc:
        logger.warning("Skipping %s: %s", display_name, exc)
        return None
    return InputFile(filename=display_name, content=content)


def _load(
    path: Path,
    display_name: str,
    max_bytes: int,
) -> List[InputFile]:
    if path.suffix.lower() == ".zip":
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("Skipping %s: %s", display_name, exc)
            return []
        return extract_zip(data, name=display_name)

    if not is_tracked(path.name):
        logger.debug("Skipping %s (untracked extension)", display_name)
        return []

    size = path.stat().st_size
    if max_bytes and size > max_bytes:
        logger.info("Skipping %s: %d bytes exceeds size cap", display_name, size)
        return []

    loaded = _read_text(path, display_name)
    return [loaded] if loaded is not None else []


def collect_paths(
    paths: Iterable[PathLike],
    *,
    ignore_globs: Sequence[str] = (),
    max_file_size_kb: int = 1024,
) -> List[InputFile]:
    """Gather InputFiles from *paths*.

    Files inside a directory are named relative to that directory; files
    given directly keep the path as passed. Raises SourceError if a path
    does not exist.
    """
    max_bytes = max_file_size_kb * 1024
    collected: List[InputFile] = []

    for raw in paths:
        root = Path(raw)
        if not root.exists():
            raise SourceError(f"Path not found: {raw}")

        if root.is_dir():
            for path in _walk(root):
                rel = path.relative_to(root)
                if _is_ignored(rel, ignore_globs):
                    logger.debug("Skipping %s (ignored)", rel.as_posix())
                    continue
                collected.extend(_load(path, rel.as_posix(), max_bytes))
        else:
            if _is_ignored(root, ignore_globs):
                logger.debug("Skipping %s (ignored)", raw)
                continue
            collected.extend(_load(root, str(raw), max_bytes))

    return collected
