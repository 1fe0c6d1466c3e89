"""Built-in rules — one ordered family per content category."""

from raceguard.rules.builtin.java import JAVA_RULES
from raceguard.rules.builtin.script import SCRIPT_RULES
from raceguard.rules.builtin.sql import SQL_RULES
from raceguard.rules.models import Rule

RULE_FAMILIES: dict[str, list[Rule]] = {
    "java": JAVA_RULES,
    "sql-like": SQL_RULES,
    "script": SCRIPT_RULES,
}

ALL_BUILTIN_RULES: list[Rule] = [*JAVA_RULES, *SQL_RULES, *SCRIPT_RULES]

__all__ = ["ALL_BUILTIN_RULES", "JAVA_RULES", "RULE_FAMILIES", "SCRIPT_RULES", "SQL_RULES"]
