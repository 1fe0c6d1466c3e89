"""Resolve a public GitHub repository URL into InputFiles.

Uses the git trees API to list the first existing default branch, keeps
tracked blobs, then downloads each from the raw content host. Every failure
below the URL level is contained: an unusable reference yields ``[]`` and a
file whose download fails is skipped.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote, urlparse

import httpx

from raceguard import __version__
from raceguard.config.schema import GitHubConfig
from raceguard.sources.models import InputFile, is_tracked

logger = logging.getLogger(__name__)

TOKEN_ENV = "RACEGUARD_GITHUB_TOKEN"


def parse_repo_url(url: str) -> Optional[Tuple[str, str]]:
    """Return ``(owner, repo)`` for a github.com URL, else None."""
    cleaned = url.strip()
    if cleaned.endswith(".git"):
        cleaned = cleaned[: -len(".git")]
    try:
        parsed = urlparse(cleaned)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or parsed.hostname != "github.com":
        return None
    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 2:
        return None
    return parts[0], parts[1]


def _headers() -> Dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": f"raceguard/{__version__}",
    }
    if token := os.environ.get(TOKEN_ENV):
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def _fetch_tree(
    client: httpx.AsyncClient,
    settings: GitHubConfig,
    owner: str,
    repo: str,
    branch: str,
) -> Optional[List[Dict[str, Any]]]:
    url = (
        f"{settings.api_url}/repos/{owner}/{repo}"
        f"/git/trees/{quote(branch, safe='')}"
    )
    try:
        response = await client.get(url, params={"recursive": "1"})
    except httpx.HTTPError as exc:
        logger.warning("Tree request for %s/%s@%s failed: %s", owner, repo, branch, exc)
        return None
    if not response.is_success:
        logger.debug(
            "No tree for %s/%s@%s (HTTP %d)", owner, repo, branch, response.status_code
        )
        return None
    try:
        payload = response.json()
    except ValueError:
        logger.warning("Tree for %s/%s@%s is not valid JSON", owner, repo, branch)
        return None
    tree = payload.get("tree") if isinstance(payload, dict) else None
    return tree if isinstance(tree, list) else None


async def _fetch_raw(
    client: httpx.AsyncClient,
    settings: GitHubConfig,
    owner: str,
    repo: str,
    branch: str,
    path: str,
) -> Optional[str]:
    url = f"{settings.raw_url}/{owner}/{repo}/{quote(branch, safe='')}/{quote(path)}"
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        logger.warning("Skipping %s: %s", path, exc)
        return None
    if not response.is_success:
        logger.warning("Skipping %s: HTTP %d", path, response.status_code)
        return None
    return response.text


async def fetch_repo_files(
    repo_url: str,
    *,
    settings: Optional[GitHubConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[InputFile]:
    """Download every tracked file of the repository behind *repo_url*.

    A caller-supplied *client* is used as-is and left open.
    """
    settings = settings or GitHubConfig()
    info = parse_repo_url(repo_url)
    if info is None:
        logger.warning("Ignoring repository reference %r: not a github.com URL", repo_url)
        return []
    owner, repo = info

    if client is None:
        async with httpx.AsyncClient(
            headers=_headers(), timeout=settings.timeout, follow_redirects=True
        ) as own_client:
            return await _fetch_repo(own_client, settings, owner, repo)
    return await _fetch_repo(client, settings, owner, repo)


async def _fetch_repo(
    client: httpx.AsyncClient,
    settings: GitHubConfig,
    owner: str,
    repo: str,
) -> List[InputFile]:
    tree: Optional[List[Dict[str, Any]]] = None
    used_branch: Optional[str] = None
    for branch in settings.branches:
        tree = await _fetch_tree(client, settings, owner, repo, branch)
        if tree is not None:
            used_branch = branch
            break

    if tree is None or used_branch is None:
        logger.warning(
            "No usable branch for %s/%s (tried %s)",
            owner, repo, ", ".join(settings.branches),
        )
        return []

    paths = [
        entry["path"]
        for entry in tree
        if isinstance(entry, dict)
        and entry.get("type") == "blob"
        and isinstance(entry.get("path"), str)
        and is_tracked(entry["path"])
    ]
    logger.info(
        "Fetching %d tracked file(s) from %s/%s@%s", len(paths), owner, repo, used_branch
    )

    files: List[InputFile] = []
    for path in paths:
        content = await _fetch_raw(client, settings, owner, repo, used_branch, path)
        if content is None:
            continue
        files.append(InputFile(filename=path, content=content))
    return files
