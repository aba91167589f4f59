"""Read-only contracts the dumper consumes.

Any object with the right method shape satisfies these protocols (no base
class required), so test doubles with fixed fixtures can stand in for the
real scheduler cache and queue::

    class FixedCache:
        def snapshot(self) -> Snapshot:
            return Snapshot({"n1": NodeInfo("n1")})
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from sched_debugger.models import Pod, Snapshot


@runtime_checkable
class Cache(Protocol):
    """Scheduler node cache."""

    def snapshot(self) -> Snapshot:
        """Return a consistent point-in-time view of all cached nodes."""
        ...


@runtime_checkable
class SchedulingQueue(Protocol):
    """Queue of pods waiting to be scheduled."""

    def waiting_pods(self) -> list[Pod]:
        """Return all pending pods in the queue's native order."""
        ...


@runtime_checkable
class LogSink(Protocol):
    """Leveled, free-text log destination. structlog loggers satisfy this."""

    def info(self, event: str, *args: Any, **kwargs: Any) -> Any:
        ...
