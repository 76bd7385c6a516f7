"""Prometheus metrics for tool usage, stored applications and storage health"""

from prometheus_client import Counter, Histogram

# Tool metrics
tool_call_counter = Counter(
    "finance_tool_calls_total",
    "Tool invocations by outcome",
    ["tool", "status"],  # success | invalid | duplicate | storage_error
)

applications_added_counter = Counter(
    "finance_applications_added_total",
    "Finance applications stored",
    ["outcome"],  # SUCCESS | REJECTED
)

validation_failure_counter = Counter(
    "finance_validation_failures_total",
    "Candidate applications rejected by validation",
)

# Storage metrics
storage_failure_counter = Counter(
    "finance_storage_failures_total",
    "Failed reads or writes against the backing medium",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_tool_call(tool: str, status: str) -> None:
    """Count a tool invocation and fold failures into their dedicated counters"""
    tool_call_counter.labels(tool=tool, status=status).inc()

    if status == "invalid":
        validation_failure_counter.inc()
    elif status == "storage_error":
        storage_failure_counter.inc()


def record_application_added(outcome: str) -> None:
    """Record a stored application by outcome"""
    applications_added_counter.labels(outcome=outcome).inc()
