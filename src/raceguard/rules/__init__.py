"""Rule engine — models, registry, built-in rule families."""

from raceguard.rules.models import Rule, RuleError
from raceguard.rules.registry import RuleRegistry, build_registry

__all__ = ["Rule", "RuleError", "RuleRegistry", "build_registry"]
