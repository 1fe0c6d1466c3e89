"""Rule registry — holds the rule families for a run, applies config filters."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from raceguard.config.schema import CATEGORIES, SEVERITIES, RaceGuardConfig
from raceguard.rules.models import Rule, RuleError


class RuleRegistry:
    """Ordered rule families keyed by content category.

    Registration order is evaluation order. Rules are never mutated here;
    enable/disable state lives in the registry so built-in rule objects can
    be shared between registries.
    """

    def __init__(self) -> None:
        self._families: Dict[str, List[Rule]] = {c: [] for c in CATEGORIES}
        self._disabled: set[str] = set()

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        """Append *rule* to its family, or replace a rule with the same id in place."""
        if rule.category not in self._families:
            raise RuleError(f"Rule {rule.id}: unknown category {rule.category!r}")
        if rule.severity not in SEVERITIES:
            raise RuleError(f"Rule {rule.id}: unknown severity {rule.severity!r}")
        existing = self.get(rule.id)
        if existing is not None:
            family = self._families[existing.category]
            if existing.category == rule.category:
                family[family.index(existing)] = rule
                return
            family.remove(existing)
        self._families[rule.category].append(rule)

    def register_many(self, rules: list[Rule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[Rule]:
        return [r for c in CATEGORIES for r in self._families[c]]

    def get(self, rule_id: str) -> Optional[Rule]:
        for rule in self.all_rules:
            if rule.id == rule_id:
                return rule
        return None

    def is_enabled(self, rule: Rule) -> bool:
        return rule.id not in self._disabled

    def enabled_rules(self) -> List[Rule]:
        return [r for r in self.all_rules if self.is_enabled(r)]

    def family(self, category: str) -> List[Rule]:
        """Enabled rules for *category*, in evaluation order."""
        return [r for r in self._families.get(category, []) if self.is_enabled(r)]

    # ---- config filtering ----

    def apply_config(self, config: RaceGuardConfig) -> None:
        """Enable / disable rules based on config.rules."""
        enable_list = config.rules.enable
        disable_list = config.rules.disable

        for rule in self.all_rules:
            # If an explicit enable-list exists, only those are enabled
            if enable_list and rule.id not in enable_list:
                self._disabled.add(rule.id)
            # Disable list always takes precedence
            if rule.id in disable_list:
                self._disabled.add(rule.id)

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise RuleError(f"Failed to parse {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            self.register(_rule_from_mapping(entry, path))
            count += 1
        return count


def _rule_from_mapping(entry: Any, path: Path) -> Rule:
    if not isinstance(entry, dict):
        raise RuleError(f"{path}: each rule must be a mapping")
    missing = [k for k in ("id", "category", "pattern") if not entry.get(k)]
    if missing:
        raise RuleError(f"{path}: rule is missing {', '.join(missing)}")
    return Rule(
        id=entry["id"],
        kind=entry.get("kind", entry["id"]),
        problem=entry.get("problem", ""),
        suggestion=entry.get("suggestion", ""),
        severity=entry.get("severity", "medium"),
        category=entry["category"],
        pattern=entry["pattern"],
        unless=entry.get("unless"),
        ignore_case=bool(entry.get("ignore_case", False)),
    )


def default_registry() -> RuleRegistry:
    """A registry holding every built-in rule, nothing disabled."""
    from raceguard.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    registry.register_many(ALL_BUILTIN_RULES)
    return registry


def build_registry(config: RaceGuardConfig, root: Path) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry."""
    registry = default_registry()

    # Custom rules from .raceguard-rules/
    registry.load_custom_rules(root / config.rules.custom_dir)

    # Apply enable/disable from config
    registry.apply_config(config)
    return registry
