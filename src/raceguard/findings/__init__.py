"""Finding models and report aggregation."""

from raceguard.findings.aggregator import GENERAL_SUGGESTIONS, aggregate
from raceguard.findings.models import Finding, Report, SeverityTotals

__all__ = ["Finding", "GENERAL_SUGGESTIONS", "Report", "SeverityTotals", "aggregate"]
