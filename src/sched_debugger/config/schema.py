from __future__ import annotations

import signal
import uuid
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from sched_debugger.models import Pod, PodPhase, Resource

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class DebuggerConfig(BaseModel):
    """Debugger process settings. All optional."""

    log_level: str = "INFO"
    signal: str = "SIGUSR2"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"'log_level' must be one of {sorted(LOG_LEVELS)}")
        return v.upper()

    @field_validator("signal")
    @classmethod
    def validate_signal(cls, v: str) -> str:
        name = v.upper()
        if not name.startswith("SIG"):
            name = f"SIG{name}"
        if name not in signal.Signals.__members__:
            raise ValueError(f"Unknown signal: {v}")
        return name

    @property
    def dump_signal(self) -> signal.Signals:
        return signal.Signals[self.signal]


class NodeConfig(BaseModel):
    name: str
    allocatable: dict[str, Any] = {}

    @field_validator("allocatable")
    @classmethod
    def validate_allocatable(cls, v: dict[str, Any]) -> dict[str, Any]:
        Resource.from_resource_list(v)
        return v

    def to_resource(self) -> Resource:
        return Resource.from_resource_list(self.allocatable)


class PodConfig(BaseModel):
    name: str
    namespace: str = "default"
    uid: str = Field(default_factory=lambda: str(uuid.uuid4()))
    phase: PodPhase = PodPhase.PENDING
    node: str | None = None
    nominated_node: str | None = None
    priority: int = 0
    requests: dict[str, Any] = {}

    @field_validator("requests")
    @classmethod
    def validate_requests(cls, v: dict[str, Any]) -> dict[str, Any]:
        Resource.from_resource_list(v)
        return v

    def to_pod(self) -> Pod:
        return Pod(
            name=self.name,
            namespace=self.namespace,
            uid=self.uid,
            phase=self.phase,
            nominated_node_name=self.nominated_node or None,
            node_name=self.node or None,
            priority=self.priority,
            requests=Resource.from_resource_list(self.requests),
        )


class ClusterStateConfig(BaseModel):
    """Top-level cluster state file: debugger settings, nodes, and pods."""

    debugger: DebuggerConfig = DebuggerConfig()
    nodes: list[NodeConfig] = []
    pods: list[PodConfig] = []

    @model_validator(mode="after")
    def validate_references(self) -> "ClusterStateConfig":
        names = [n.name for n in self.nodes]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate node names: {', '.join(duplicates)}")
        known = set(names)
        for pod in self.pods:
            if pod.node and pod.node not in known:
                raise ValueError(
                    f"Pod '{pod.namespace}/{pod.name}' is bound to unknown node '{pod.node}'"
                )
        return self
