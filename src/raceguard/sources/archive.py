"""Zip archive extraction — tracked, UTF-8 decodable members only."""

from __future__ import annotations

import io
import logging
import zipfile
from typing import List

from raceguard.sources.models import InputFile, is_tracked

logger = logging.getLogger(__name__)


def extract_zip(data: bytes, *, name: str = "<archive>") -> List[InputFile]:
    """Return tracked members of the zip in *data* as InputFiles.

    Member order follows the archive's central directory. A corrupt archive
    yields an empty list; a member that is not valid UTF-8 is skipped.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile:
        logger.warning("Skipping %s: not a readable zip archive", name)
        return []

    files: List[InputFile] = []
    with archive:
        for info in archive.infolist():
            if info.is_dir() or not is_tracked(info.filename):
                continue
            try:
                raw = archive.read(info)
                content = raw.decode("utf-8")
            except (zipfile.BadZipFile, UnicodeDecodeError, OSError) as exc:
                logger.warning("Skipping %s in %s: %s", info.filename, name, exc)
                continue
            files.append(InputFile(filename=info.filename, content=content))

    logger.info("Extracted %d tracked file(s) from %s", len(files), name)
    return files
