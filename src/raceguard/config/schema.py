"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

Severity = Literal["low", "medium", "high"]
Category = Literal["java", "sql-like", "script"]
OutputFormat = Literal["terminal", "json", "sarif", "document"]

SEVERITIES: tuple[str, ...] = ("low", "medium", "high")
CATEGORIES: tuple[str, ...] = ("java", "sql-like", "script")
OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "sarif", "document")

SEVERITY_ORDER: dict[str, int] = {
    "low": 0,
    "medium": 1,
    "high": 2,
}


def severity_at_or_above(finding_sev: str, threshold: str) -> bool:
    """Return True if *finding_sev* is at or above *threshold*."""
    return SEVERITY_ORDER.get(finding_sev, 0) >= SEVERITY_ORDER.get(threshold, 0)


@dataclass
class ScanConfig:
    fail_on: Severity = "high"  # exit 1 on findings at or above this level
    workers: int = 1  # >1 fans files out over a thread pool
    max_file_size_kb: int = 1024


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class RulesConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)
    custom_dir: str = ".raceguard-rules"


@dataclass
class IgnoreConfig:
    paths: List[str] = field(default_factory=list)


@dataclass
class GitHubConfig:
    branches: List[str] = field(default_factory=lambda: ["main", "master"])
    api_url: str = "https://api.github.com"
    raw_url: str = "https://raw.githubusercontent.com"
    timeout: float = 30.0


@dataclass
class RaceGuardConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
