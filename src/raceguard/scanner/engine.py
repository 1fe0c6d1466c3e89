"""Core scan engine — classify each file, run its rule family, aggregate.

Rule faults are contained: a rule that raises is logged and counts as
"no finding", and evaluation carries on with the next rule and file.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence, Tuple

from raceguard.findings.aggregator import aggregate
from raceguard.findings.models import Finding, Report
from raceguard.rules.models import Rule
from raceguard.rules.registry import RuleRegistry, default_registry
from raceguard.scanner.classifier import classify
from raceguard.sources.models import InputFile

logger = logging.getLogger(__name__)


def _apply_rule(rule: Rule, filename: str, content: str) -> List[Finding]:
    try:
        return list(rule.evaluate(filename, content))
    except Exception:
        logger.warning(
            "Rule %s failed on %s; treating as no finding", rule.id, filename,
            exc_info=True,
        )
        return []


def analyze_file(file: InputFile, registry: RuleRegistry) -> List[Finding]:
    """Run the rule family matching *file*'s category, in family order."""
    category = classify(file.filename)
    if category is None:
        logger.debug("Skipping %s (untracked extension)", file.filename)
        return []

    findings: List[Finding] = []
    for rule in registry.family(category):
        findings.extend(_apply_rule(rule, file.filename, file.content))
    return findings


def _analyze_parallel(
    files: Sequence[InputFile], registry: RuleRegistry, workers: int
) -> List[Finding]:
    results: List[Tuple[int, List[Finding]]] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {
            pool.submit(analyze_file, file, registry): index
            for index, file in enumerate(files)
        }
        for future in as_completed(futures):
            results.append((futures[future], future.result()))

    # Completion order is arbitrary; input order is the contract.
    results.sort(key=lambda item: item[0])
    return [finding for _, file_findings in results for finding in file_findings]


def analyze(
    files: Sequence[InputFile],
    registry: Optional[RuleRegistry] = None,
    *,
    workers: int = 1,
) -> Report:
    """Analyze a batch of files and return the aggregated Report.

    ``registry`` defaults to every built-in rule. With ``workers > 1`` files
    are evaluated on a thread pool; the resulting Report is identical to the
    sequential one.
    """
    start = time.perf_counter()
    if registry is None:
        registry = default_registry()

    if workers > 1 and len(files) > 1:
        findings = _analyze_parallel(files, registry, workers)
    else:
        findings = [f for file in files for f in analyze_file(file, registry)]

    report = aggregate(findings, len(files))

    elapsed = (time.perf_counter() - start) * 1000
    logger.debug(
        "Analyzed %d file(s) in %.1fms: %s", len(files), elapsed, report.summary
    )
    return report
