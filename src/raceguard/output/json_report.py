"""JSON reporter — the Report record consumed by UIs and the HTTP service."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from raceguard.findings.models import Report


def to_dict(report: Report) -> Dict[str, Any]:
    """Convert a Report to a JSON-serialisable dict with camelCase keys."""
    issues: List[Dict[str, Any]] = []
    for f in report.issues:
        issues.append({
            "filename": f.filename,
            "kind": f.kind,
            "problem": f.problem,
            "suggestion": f.suggestion,
            "severity": f.severity,
        })

    totals = report.severity_totals
    return {
        "issues": issues,
        "summary": report.summary,
        "suggestions": list(report.suggestions),
        "severityTotals": {
            "low": totals.low,
            "medium": totals.medium,
            "high": totals.high,
        },
        "scannedFiles": report.scanned_files,
    }


def render(report: Report) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
