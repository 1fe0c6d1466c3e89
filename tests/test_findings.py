"""Tests for report aggregation — totals, suggestion set, summary text."""

from raceguard.findings.aggregator import (
    GENERAL_SUGGESTIONS,
    NO_ISSUES_SUMMARY,
    aggregate,
    collect_suggestions,
    summarize,
)
from raceguard.findings.models import Finding, Report, SeverityTotals


def _finding(severity="high", suggestion="Fix it", filename="A.java") -> Finding:
    return Finding(
        filename=filename,
        kind="Kind",
        problem="Problem",
        suggestion=suggestion,
        severity=severity,
    )


class TestSummary:
    def test_no_issues(self):
        assert summarize(SeverityTotals()) == NO_ISSUES_SUMMARY

    def test_singular(self):
        assert summarize(SeverityTotals(low=1)) == (
            "Detected 1 potential issue (0 high, 0 medium, 1 low)."
        )

    def test_plural_orders_high_medium_low(self):
        assert summarize(SeverityTotals(low=3, medium=2, high=1)) == (
            "Detected 6 potential issues (1 high, 2 medium, 3 low)."
        )


class TestSuggestions:
    def test_first_seen_order_and_dedup(self):
        findings = [
            _finding(suggestion="B"),
            _finding(suggestion="A"),
            _finding(suggestion="B"),
        ]
        assert collect_suggestions(findings) == ["B", "A", *GENERAL_SUGGESTIONS]

    def test_general_only_when_empty(self):
        assert collect_suggestions([]) == list(GENERAL_SUGGESTIONS)

    def test_general_not_duplicated(self):
        findings = [_finding(suggestion=GENERAL_SUGGESTIONS[1])]
        suggestions = collect_suggestions(findings)
        assert len(suggestions) == 2
        assert set(suggestions) == set(GENERAL_SUGGESTIONS)


class TestAggregate:
    def test_totals(self):
        findings = [_finding("high"), _finding("low"), _finding("low"), _finding("medium")]
        report = aggregate(findings, file_count=7)
        assert report.severity_totals == SeverityTotals(low=2, medium=1, high=1)
        assert report.severity_totals.total == 4
        assert report.scanned_files == 7
        assert report.summary == "Detected 4 potential issues (1 high, 1 medium, 2 low)."

    def test_issue_order_preserved(self):
        findings = [_finding(filename=n) for n in ("c", "a", "b")]
        report = aggregate(findings, 3)
        assert [f.filename for f in report.issues] == ["c", "a", "b"]

    def test_issues_are_copied(self):
        findings = [_finding()]
        report = aggregate(findings, 1)
        findings.append(_finding())
        assert len(report.issues) == 1


class TestReportModel:
    def test_blocking_threshold(self):
        report = aggregate([_finding("medium"), _finding("low")], 1)
        assert report.is_blocked("low")
        assert report.is_blocked("medium")
        assert not report.is_blocked("high")
        assert len(report.blocking_findings("low")) == 2

    def test_empty_report(self):
        report = Report()
        assert report.total_findings == 0
        assert not report.is_blocked("low")
