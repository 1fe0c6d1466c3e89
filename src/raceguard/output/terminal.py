"""Rich terminal reporter — findings grouped by severity."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from raceguard.findings.models import Report

_SEVERITY_STYLE = {
    "high": "bold white on red",
    "medium": "bold black on yellow",
    "low": "bold black on bright_cyan",
}

_SEVERITY_ICON = {
    "high": "🔴",
    "medium": "🟡",
    "low": "🔵",
}

# Display order, most severe first.
_SEVERITY_GROUPS = ("high", "medium", "low")


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, "")
    icon = _SEVERITY_ICON.get(severity, "")
    return Text(f" {icon} {severity.upper()} ", style=style)


def render(
    report: Report,
    *,
    fail_on: str = "high",
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print the report to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not report.issues:
        console.print()
        console.print(f"[bold green]✅ {report.summary}[/bold green]")
        if show_summary:
            _print_summary(console, report)
        return

    console.print()
    table = Table(
        title="RaceGuard Findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=12)
    table.add_column("File", style="magenta")
    table.add_column("Type", style="cyan", min_width=16)
    table.add_column("Issue", style="bright_red")
    table.add_column("Suggestion", style="green")

    for severity in _SEVERITY_GROUPS:
        for finding in report.issues:
            if finding.severity != severity:
                continue
            table.add_row(
                _severity_pill(finding.severity),
                finding.filename,
                finding.kind,
                finding.problem,
                finding.suggestion,
            )

    console.print(table)

    if show_summary:
        _print_summary(console, report)

    # Final verdict
    console.print()
    if report.is_blocked(fail_on):
        console.print(
            f"[bold red]❌ FAILED — findings at or above '{fail_on}' severity.[/bold red]"
        )
    else:
        console.print(
            "[bold yellow]⚠️  Findings detected but below fail threshold.[/bold yellow]"
        )


def _print_summary(console: Console, report: Report) -> None:
    totals = report.severity_totals
    console.print()
    console.print(f"[dim]Summary:[/dim]        {report.summary}")
    console.print(f"[dim]Files scanned:[/dim]  {report.scanned_files}")
    console.print(
        f"[dim]Severity:[/dim]       {totals.high} high, "
        f"{totals.medium} medium, {totals.low} low"
    )
    console.print()
    console.print("[bold]Suggestions[/bold]")
    for suggestion in report.suggestions:
        console.print(f"  • {suggestion}")
