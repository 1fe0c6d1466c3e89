"""SQL / YAML rules — unguarded writes, unlocked reads, dirty reads.

All patterns are case-insensitive. ``.`` does not cross line breaks, so a
SELECT only counts when its FROM clause sits on the same line.
"""

from raceguard.rules.models import Rule

SQL_INSERT_WITHOUT_UNIQUE = Rule(
    id="SQL_INSERT_WITHOUT_UNIQUE",
    kind="SQL INSERT",
    problem="Insert statement without UNIQUE/UPSERT guard detected",
    suggestion="Add UNIQUE constraints or use UPSERT/MERGE to avoid duplicates",
    severity="medium",
    category="sql-like",
    pattern=r"insert\s+into\s+\S+\s*\(([^)]+)\)",
    unless=r"unique",
    ignore_case=True,
)

SQL_SELECT_WITHOUT_LOCK = Rule(
    id="SQL_SELECT_WITHOUT_LOCK",
    kind="SQL SELECT",
    problem="Select statement missing FOR UPDATE locking on critical tables",
    suggestion="Add FOR UPDATE or other locking hints to serialize writers",
    severity="medium",
    category="sql-like",
    pattern=r"select\s+.*from\s+\S+",
    unless=r"for\s+update",
    ignore_case=True,
)

SQL_MUTATION_WITHOUT_TRANSACTION = Rule(
    id="SQL_MUTATION_WITHOUT_TRANSACTION",
    kind="Transaction scope",
    problem="Data mutation without explicit transaction boundaries",
    suggestion="Wrap mutating statements inside BEGIN/COMMIT or use ORM transactions",
    severity="high",
    category="sql-like",
    pattern=r"update\s+\S+\s+set|delete\s+from\s+\S+",
    unless=r"(?:begin|start)\s+transaction|commit",
    ignore_case=True,
)

SQL_NOLOCK_HINT = Rule(
    id="SQL_NOLOCK_HINT",
    kind="NOLOCK hint",
    problem="Query uses NOLOCK which allows dirty reads and race conditions",
    suggestion="Remove NOLOCK or switch to snapshot isolation",
    severity="high",
    category="sql-like",
    pattern=r"with\s*\(\s*nolock\s*\)",
    ignore_case=True,
)

SQL_RULES = [
    SQL_INSERT_WITHOUT_UNIQUE,
    SQL_SELECT_WITHOUT_LOCK,
    SQL_MUTATION_WITHOUT_TRANSACTION,
    SQL_NOLOCK_HINT,
]
