"""Input collaborators — local paths, zip archives, GitHub repositories."""

from raceguard.sources.archive import extract_zip
from raceguard.sources.github import fetch_repo_files, parse_repo_url
from raceguard.sources.local import collect_paths
from raceguard.sources.models import TRACKED_EXTENSIONS, InputFile, SourceError, is_tracked

__all__ = [
    "InputFile",
    "SourceError",
    "TRACKED_EXTENSIONS",
    "collect_paths",
    "extract_zip",
    "fetch_repo_files",
    "is_tracked",
    "parse_repo_url",
]
