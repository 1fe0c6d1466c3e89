"""Merge raw findings into a Report: totals, suggestion set, summary."""

from __future__ import annotations

from typing import Iterable, List

from raceguard.findings.models import Finding, Report, SeverityTotals

# Always closes the suggestion list, with or without findings.
GENERAL_SUGGESTIONS: tuple[str, ...] = (
    "Consider using MERGE/UPSERT patterns for shared writes.",
    "Add request-level locking or queueing for high-contention code paths.",
)

NO_ISSUES_SUMMARY = "No obvious race conditions detected."


def collect_suggestions(findings: Iterable[Finding]) -> List[str]:
    """Unique suggestions in first-seen order, general advice appended last."""
    ordered: List[str] = []
    seen: set[str] = set()
    for text in [*(f.suggestion for f in findings), *GENERAL_SUGGESTIONS]:
        if text in seen:
            continue
        seen.add(text)
        ordered.append(text)
    return ordered


def summarize(totals: SeverityTotals) -> str:
    total = totals.total
    if total == 0:
        return NO_ISSUES_SUMMARY
    plural = "" if total == 1 else "s"
    return (
        f"Detected {total} potential issue{plural} "
        f"({totals.high} high, {totals.medium} medium, {totals.low} low)."
    )


def aggregate(findings: List[Finding], file_count: int) -> Report:
    """Build the Report for one run.

    *findings* must already be in final order (input file order, then rule
    order within the family); it is copied, never reordered.
    """
    totals = SeverityTotals()
    for finding in findings:
        totals.add(finding.severity)

    return Report(
        issues=list(findings),
        summary=summarize(totals),
        suggestions=collect_suggestions(findings),
        severity_totals=totals,
        scanned_files=file_count,
    )
