from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from sched_debugger.models.pod import Pod
from sched_debugger.models.resource import Resource


class NodeInfo:
    """Aggregated scheduler view of one node: capacity, requests, bound pods."""

    def __init__(self, name: str, allocatable: Resource | None = None) -> None:
        self.name = name
        self.allocatable = allocatable or Resource()
        self.requested = Resource()
        self._pods: list[Pod] = []

    @property
    def pods(self) -> list[Pod]:
        return list(self._pods)

    def add_pod(self, pod: Pod) -> None:
        self._pods.append(pod)
        self.requested.add(pod.requests)

    def remove_pod(self, pod: Pod) -> bool:
        """Remove a pod by uid. Returns False if it was not on this node."""
        for i, existing in enumerate(self._pods):
            if existing.uid == pod.uid:
                del self._pods[i]
                self.requested.subtract(existing.requests)
                return True
        return False

    def clone(self) -> NodeInfo:
        copy = NodeInfo(self.name, self.allocatable.clone())
        copy.requested = self.requested.clone()
        copy._pods = list(self._pods)
        return copy

    def __repr__(self) -> str:
        return f"NodeInfo({self.name!r}, pods={len(self._pods)})"


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time, read-only view of every cached node."""

    nodes: Mapping[str, NodeInfo] = field(default_factory=dict)
    generation: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    def __iter__(self) -> Iterator[NodeInfo]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)
