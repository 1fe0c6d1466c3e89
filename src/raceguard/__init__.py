"""RaceGuard — heuristic race-condition scanner for Java, SQL/YAML and JS/TS."""

__version__ = "0.1.0"
