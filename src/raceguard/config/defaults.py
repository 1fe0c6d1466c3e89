"""Starter .raceguard.toml template."""

DEFAULT_TOML = """\
# RaceGuard Configuration
version = "1.0"

[scan]
fail_on = "high"          # low | medium | high — exit 1 at or above this level
workers = 1               # >1 scans files on a thread pool
max_file_size_kb = 1024

[output]
format = "terminal"       # terminal | json | sarif | document
show_summary = true

[rules]
# enable = ["JAVA_STATIC_MUTABLE", "SQL_NOLOCK_HINT"]   # empty = all enabled
# disable = ["SQL_SELECT_WITHOUT_LOCK"]
custom_dir = ".raceguard-rules"

[ignore]
# paths = ["node_modules/*", "*.min.js"]

[github]
branches = ["main", "master"]
timeout = 30.0
"""
