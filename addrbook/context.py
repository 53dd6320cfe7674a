"""Per-call context: bearer token plus deadline and cancellation signal."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass
class CallContext:
    token: str | None = None
    deadline: float | None = None  # time.monotonic() value
    cancelled: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def with_timeout(cls, token: str | None = None, timeout: float | None = None) -> CallContext:
        deadline = time.monotonic() + timeout if timeout is not None else None
        return cls(token=token, deadline=deadline)

    def cancel(self) -> None:
        self.cancelled.set()

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def expired(self) -> bool:
        if self.cancelled.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline
