"""Rule data model — immutable records whose patterns compile on creation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from raceguard.config.schema import Category, Severity
from raceguard.findings.models import Finding


class RuleError(Exception):
    """Raised when a rule definition is invalid."""


@dataclass(frozen=True)
class Rule:
    """A single whole-file heuristic.

    The rule fires when ``pattern`` matches somewhere in the content and
    ``unless`` (the mitigation marker, if any) matches nowhere in it.
    ``ignore_case`` applies to both patterns. Patterns are kept as raw
    strings so rules stay serialisable; the compiled regexes are built once,
    when the rule is created, so a rule can be shared across threads.
    """

    id: str
    kind: str
    problem: str
    suggestion: str
    severity: Severity
    category: Category
    pattern: str
    unless: Optional[str] = None
    ignore_case: bool = False

    compiled_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)
    compiled_unless: Optional[re.Pattern[str]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        try:
            pattern = re.compile(self.pattern, self.flags)
            unless = re.compile(self.unless, self.flags) if self.unless is not None else None
        except (re.error, TypeError) as exc:
            raise RuleError(f"Rule {self.id}: invalid pattern: {exc}") from exc
        object.__setattr__(self, "compiled_pattern", pattern)
        object.__setattr__(self, "compiled_unless", unless)

    @property
    def flags(self) -> int:
        return re.IGNORECASE if self.ignore_case else 0

    def is_mitigated(self, content: str) -> bool:
        unless = self.compiled_unless
        return unless is not None and unless.search(content) is not None

    def evaluate(self, filename: str, content: str) -> List[Finding]:
        """Return the findings this rule yields for one file (zero or one)."""
        if self.compiled_pattern.search(content) is None:
            return []
        if self.is_mitigated(content):
            return []
        return [
            Finding(
                filename=filename,
                kind=self.kind,
                problem=self.problem,
                suggestion=self.suggestion,
                severity=self.severity,
                rule_id=self.id,
            )
        ]
