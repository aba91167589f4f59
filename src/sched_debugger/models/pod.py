from dataclasses import dataclass, field
from enum import StrEnum

from sched_debugger.models.resource import Resource


class PodPhase(StrEnum):
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Pod:
    """Immutable view of a workload as the scheduler sees it."""

    name: str
    namespace: str
    uid: str
    phase: PodPhase = PodPhase.PENDING
    nominated_node_name: str | None = None
    node_name: str | None = None
    priority: int = 0
    requests: Resource = field(default_factory=Resource)

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"
