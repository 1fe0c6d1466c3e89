"""Finding and report data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from raceguard.config.schema import Severity, severity_at_or_above


@dataclass(frozen=True)
class Finding:
    """One reported hazard, produced by exactly one rule for one file."""

    filename: str
    kind: str
    problem: str
    suggestion: str
    severity: Severity
    rule_id: str = ""


@dataclass
class SeverityTotals:
    low: int = 0
    medium: int = 0
    high: int = 0

    def add(self, severity: str) -> None:
        setattr(self, severity, getattr(self, severity) + 1)

    @property
    def total(self) -> int:
        return self.low + self.medium + self.high


@dataclass
class Report:
    """Complete result of one analysis run."""

    issues: List[Finding] = field(default_factory=list)
    summary: str = ""
    suggestions: List[str] = field(default_factory=list)
    severity_totals: SeverityTotals = field(default_factory=SeverityTotals)
    scanned_files: int = 0

    @property
    def total_findings(self) -> int:
        return len(self.issues)

    def blocking_findings(self, fail_on: str) -> List[Finding]:
        """Findings at or above the *fail_on* threshold."""
        return [f for f in self.issues if severity_at_or_above(f.severity, fail_on)]

    def is_blocked(self, fail_on: str) -> bool:
        return bool(self.blocking_findings(fail_on))
