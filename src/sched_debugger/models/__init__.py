from sched_debugger.models.node import NodeInfo, Snapshot
from sched_debugger.models.pod import Pod, PodPhase
from sched_debugger.models.resource import Resource

__all__ = [
    "NodeInfo",
    "Pod",
    "PodPhase",
    "Resource",
    "Snapshot",
]
