"""Java concurrency rules — static state, @Async, date formatters, executors."""

from raceguard.rules.models import Rule

JAVA_STATIC_MUTABLE = Rule(
    id="JAVA_STATIC_MUTABLE",
    kind="Java static cache",
    problem="Detected static mutable field without synchronization",
    suggestion='Wrap access using synchronized blocks or @GuardedBy("class")',
    severity="high",
    category="java",
    pattern=r"static\s+(?!final)[A-Za-z0-9_<>\[\]]+\s+[A-Za-z0-9_]+\s*=",
    unless=r"@GuardedBy|synchronized",
)

JAVA_ASYNC = Rule(
    id="JAVA_ASYNC",
    kind="@Async usage",
    problem="Async method execution may run concurrently without protection",
    suggestion="Guard async methods with locks or move work onto managed queues",
    severity="medium",
    category="java",
    pattern=r"@Async",
)

JAVA_SIMPLE_DATE_FORMAT = Rule(
    id="JAVA_SIMPLE_DATE_FORMAT",
    kind="SimpleDateFormat",
    problem="SimpleDateFormat is not thread-safe and is cached statically",
    suggestion="Use ThreadLocal<SimpleDateFormat> or java.time formatters",
    severity="high",
    category="java",
    pattern=r"static\s+SimpleDateFormat",
)

JAVA_EXECUTOR_LIFECYCLE = Rule(
    id="JAVA_EXECUTOR_LIFECYCLE",
    kind="ExecutorService lifecycle",
    problem="Thread pool created without a corresponding shutdown/await termination",
    suggestion="Call shutdown() or manage the pool via application lifecycle hooks",
    severity="medium",
    category="java",
    pattern=r"Executors\.new(?:Fixed|Cached|Scheduled|WorkStealing)ThreadPool",
    unless=r"\.shutdown\s*\(",
)

JAVA_RULES = [
    JAVA_STATIC_MUTABLE,
    JAVA_ASYNC,
    JAVA_SIMPLE_DATE_FORMAT,
    JAVA_EXECUTOR_LIFECYCLE,
]
