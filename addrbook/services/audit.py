import logging

from addrbook.metrics import observe_call

logger = logging.getLogger("addrbook.audit")


def record_call(endpoint: str, error_code: int, duration: float, **fields) -> None:
    """One line per call: endpoint, identifying fields, error code, duration."""
    observe_call(endpoint, error_code, duration)
    details = " ".join(f"{key}={value}" for key, value in fields.items())
    logger.info(
        "endpoint=%s %s errcode=%s duration_ms=%.3f",
        endpoint,
        details,
        error_code,
        duration * 1000,
        extra={
            "audit": {
                "endpoint": endpoint,
                "error_code": error_code,
                "duration_ms": round(duration * 1000, 3),
                **fields,
            }
        },
    )
