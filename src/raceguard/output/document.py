"""Paginated plain-text export of a Report.

Layout: a metadata header (title, generation time, summary, scanned files,
severity totals), then one wrapped block per finding separated by a rule.
Pages are split with form feeds and end with a ``Page n/m`` footer. A block
starts a new page when it does not fit; one taller than a page is sliced.
"""

from __future__ import annotations

import textwrap
from datetime import datetime
from typing import List, Optional

from raceguard.findings.models import Finding, Report

TITLE = "RaceGuard Report"
FOOTER_LINES = 2  # blank spacer + "Page n/m"


def _wrap(text: str, width: int) -> List[str]:
    return textwrap.wrap(text, width=width) or [""]


def _header(report: Report, generated_at: datetime, width: int) -> List[str]:
    totals = report.severity_totals
    lines = [TITLE, "=" * len(TITLE)]
    lines += _wrap(f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}", width)
    lines += _wrap(f"Summary: {report.summary}", width)
    lines += _wrap(f"Scanned files: {report.scanned_files}", width)
    lines += _wrap(
        f"Severity totals - High: {totals.high}, "
        f"Medium: {totals.medium}, Low: {totals.low}",
        width,
    )
    lines.append("")
    return lines


def _block(finding: Finding, width: int) -> List[str]:
    label = finding.severity.capitalize()
    lines = _wrap(f"[{label}] {finding.filename} · {finding.kind}", width)
    lines += _wrap(finding.problem, width)
    lines += _wrap(f"Suggestion: {finding.suggestion}", width)
    return lines


def _place(pages: List[List[str]], chunk: List[str], body: int) -> None:
    """Append *chunk* to *pages*, starting a fresh page if it does not fit.

    A chunk taller than *body* is cut into page-sized slices.
    """
    if pages[-1] and len(pages[-1]) + len(chunk) > body:
        pages.append([])
    remaining = chunk
    while remaining:
        room = body - len(pages[-1])
        if room <= 0:
            pages.append([])
            continue
        pages[-1].extend(remaining[:room])
        remaining = remaining[room:]


def _paginate(header: List[str], blocks: List[List[str]], width: int, body: int) -> List[List[str]]:
    pages: List[List[str]] = [[]]
    _place(pages, list(header), body)
    separator = "-" * width
    for index, block in enumerate(blocks):
        chunk = list(block)
        if index < len(blocks) - 1:
            chunk.append(separator)
        _place(pages, chunk, body)
    return pages


def render(
    report: Report,
    *,
    generated_at: Optional[datetime] = None,
    width: int = 80,
    page_length: int = 60,
) -> str:
    """Return the paginated document as a single string."""
    if page_length <= FOOTER_LINES + 1:
        raise ValueError(f"page_length must exceed {FOOTER_LINES + 1}, got {page_length}")
    generated_at = generated_at or datetime.now()
    body = page_length - FOOTER_LINES

    header = _header(report, generated_at, width)
    if report.issues:
        blocks = [_block(f, width) for f in report.issues]
    else:
        blocks = [["No issues detected."]]

    pages = _paginate(header, blocks, width, body)
    total = len(pages)
    rendered = []
    for number, lines in enumerate(pages, start=1):
        padding = [""] * max(body - len(lines), 0)
        footer = f"Page {number}/{total}".rjust(width)
        rendered.append("\n".join([*lines, *padding, "", footer]))
    return "\f\n".join(rendered) + "\n"
