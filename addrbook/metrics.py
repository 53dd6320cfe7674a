from prometheus_client import Counter, Histogram

CALL_COUNT = Counter(
    "addrbook_calls_total",
    "Total address book calls",
    ["endpoint", "error_code"],
)
CALL_LATENCY = Histogram(
    "addrbook_call_duration_seconds",
    "Address book call latency",
    ["endpoint"],
)


def observe_call(endpoint: str, error_code: int, duration: float) -> None:
    CALL_COUNT.labels(endpoint=endpoint, error_code=str(error_code)).inc()
    CALL_LATENCY.labels(endpoint=endpoint).observe(duration)
