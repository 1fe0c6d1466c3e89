"""SARIF v2.1.0 reporter — GitHub Code Scanning and other SARIF consumers."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from raceguard import __version__
from raceguard.findings.models import Report

_SEVERITY_MAP = {
    "high": "error",
    "medium": "warning",
    "low": "note",
}


def to_dict(report: Report) -> Dict[str, Any]:
    """Convert a Report to a SARIF v2.1.0 dict."""
    rules: List[Dict[str, Any]] = []
    seen_rules: set[str] = set()
    results: List[Dict[str, Any]] = []

    for f in report.issues:
        rule_id = f.rule_id or f.kind
        # Rule definition (only once per rule id)
        if rule_id not in seen_rules:
            seen_rules.add(rule_id)
            rules.append({
                "id": rule_id,
                "name": f.kind,
                "shortDescription": {"text": f.kind},
                "fullDescription": {"text": f.problem},
                "help": {"text": f.suggestion},
                "defaultConfiguration": {
                    "level": _SEVERITY_MAP.get(f.severity, "warning"),
                },
            })

        # Whole-file heuristics carry no line; the location is the file itself.
        results.append({
            "ruleId": rule_id,
            "level": _SEVERITY_MAP.get(f.severity, "warning"),
            "message": {"text": f"{f.problem}. {f.suggestion}"},
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": f.filename},
                    }
                }
            ],
        })

    return {
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "raceguard",
                        "version": __version__,
                        "rules": rules,
                    }
                },
                "results": results,
            }
        ],
    }


def render(report: Report) -> str:
    """Return SARIF JSON string."""
    return json.dumps(to_dict(report), indent=2)
