"""FastAPI application for RaceGuard.

``POST /analyze`` accepts multipart form data: repeated ``files`` uploads
(plain sources or ``.zip`` archives) and an optional ``repoUrl`` pointing at
a public GitHub repository. The response is always a complete Report; an
undecodable upload or archive member is skipped, while a body that cannot be
read at all is a 400.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.datastructures import FormData

from raceguard import __version__
from raceguard.config.loader import load_config
from raceguard.config.schema import RaceGuardConfig
from raceguard.output import json_report
from raceguard.rules.registry import build_registry
from raceguard.scanner.engine import analyze
from raceguard.service.schemas import HealthSchema, ReportSchema
from raceguard.sources.archive import extract_zip
from raceguard.sources.github import fetch_repo_files
from raceguard.sources.models import InputFile, is_tracked

logger = logging.getLogger(__name__)


async def _collect_upload(upload: UploadFile) -> List[InputFile]:
    name = upload.filename or "unknown"
    if not name.lower().endswith(".zip") and not is_tracked(name):
        logger.debug("Ignoring upload %s (untracked extension)", name)
        return []

    try:
        data = await upload.read()
    except OSError as exc:
        logger.error("Failed to read upload %s: %s", name, exc)
        raise HTTPException(status_code=400, detail="Could not read uploaded files") from exc

    if name.lower().endswith(".zip"):
        return extract_zip(data, name=name)

    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Skipping upload %s: not valid UTF-8", name)
        return []
    return [InputFile(filename=name, content=content)]


async def _read_form(request: Request) -> FormData:
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        logger.error("Rejecting /analyze body with content type %r", content_type)
        raise HTTPException(status_code=400, detail="Expected multipart/form-data")
    try:
        return await request.form()
    except ValueError as exc:
        # python-multipart parse errors are ValueErrors.
        logger.error("Failed to parse multipart body: %s", exc)
        raise HTTPException(status_code=400, detail="Could not read uploaded files") from exc


def create_app(
    config: Optional[RaceGuardConfig] = None,
    root: Optional[Path] = None,
) -> FastAPI:
    """Build the service. Rules are loaded once here and shared read-only."""
    root = root or Path.cwd()
    config = config or load_config(root)
    registry = build_registry(config, root)

    app = FastAPI(
        title="RaceGuard",
        description="Heuristic race-condition scanner for Java, SQL/YAML and JS/TS sources",
        version=__version__,
    )

    @app.get("/health", response_model=HealthSchema)
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post("/analyze", response_model=ReportSchema)
    async def analyze_upload(request: Request):
        """
        Analyze uploaded sources and/or a GitHub repository.

        Expects ``multipart/form-data`` with:

        - **files**: source files or zip archives (repeatable)
        - **repoUrl**: optional public github.com repository URL
        """
        form = await _read_form(request)

        collected: List[InputFile] = []
        for item in form.getlist("files"):
            if isinstance(item, str):
                logger.warning("Skipping 'files' entry without a file body")
                continue
            collected.extend(await _collect_upload(item))

        repo_url = form.get("repoUrl")
        if isinstance(repo_url, str) and repo_url.strip():
            collected.extend(
                await fetch_repo_files(repo_url.strip(), settings=config.github)
            )

        logger.info("Analyzing %d file(s)", len(collected))
        report = await run_in_threadpool(
            analyze, collected, registry, workers=config.scan.workers
        )
        return json_report.to_dict(report)

    return app
