"""JS / TS / JSX / TSX rules — DOM access, timers, module-level state."""

from raceguard.rules.models import Rule

SCRIPT_DIRECT_DOM = Rule(
    id="SCRIPT_DIRECT_DOM",
    kind="Direct DOM manipulation",
    problem="Direct DOM access inside React component can desync state",
    suggestion="Use refs/effects to coordinate DOM mutations or rely on React state",
    severity="medium",
    category="script",
    pattern=(
        r"document\.(?:querySelector|getElementById|addEventListener)"
        r"|window\.addEventListener"
    ),
)

SCRIPT_TIMER_WITHOUT_CLEANUP = Rule(
    id="SCRIPT_TIMER_WITHOUT_CLEANUP",
    kind="Timers without cleanup",
    problem="setTimeout/setInterval created without clear*, risking dangling work",
    suggestion="Return a cleanup function from effects that clears timers",
    severity="low",
    category="script",
    pattern=r"(?:setTimeout|setInterval)\(",
    unless=r"clearTimeout|clearInterval",
)

SCRIPT_SHARED_MODULE_STATE = Rule(
    id="SCRIPT_SHARED_MODULE_STATE",
    kind="Shared mutable module state",
    problem="Top-level mutable objects may be shared across requests/renders",
    suggestion="Move mutable state inside hooks or wrap access with state managers",
    severity="medium",
    category="script",
    pattern=r"(?m)^\s*(?:let|var)\s+[A-Za-z0-9_]+\s*=\s*[{\[]",
)

SCRIPT_RULES = [
    SCRIPT_DIRECT_DOM,
    SCRIPT_TIMER_WITHOUT_CLEANUP,
    SCRIPT_SHARED_MODULE_STATE,
]
