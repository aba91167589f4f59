from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from sched_debugger.cache import PriorityQueue, SchedulerCache
from sched_debugger.config.schema import ClusterStateConfig

log = structlog.get_logger()


class ConfigError(Exception):
    """Raised when a cluster state file cannot be loaded or validated."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


@dataclass
class ClusterState:
    config: ClusterStateConfig
    cache: SchedulerCache
    queue: PriorityQueue


class StateLoader:
    """Reads a YAML cluster state file and populates a cache and a queue from it."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load_config(self) -> ClusterStateConfig:
        if not self.path.is_file():
            raise ConfigError(self.path, "State file does not exist")
        try:
            raw = yaml.safe_load(self.path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(self.path, f"Invalid YAML: {e}") from e

        if raw is None:
            return ClusterStateConfig()
        if not isinstance(raw, dict):
            raise ConfigError(self.path, "Expected a YAML mapping at top level")

        try:
            return ClusterStateConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(self.path, f"Validation error: {e}") from e

    def load(self) -> ClusterState:
        return self.build(self.load_config())

    def build(self, config: ClusterStateConfig) -> ClusterState:
        """Populate a cache and a queue: bound pods go to the cache, unbound pods to the queue."""
        cache = SchedulerCache()
        queue = PriorityQueue()
        for node in config.nodes:
            cache.add_node(node.name, node.to_resource())
        for pod_config in config.pods:
            pod = pod_config.to_pod()
            if pod.node_name:
                cache.add_pod(pod)
            else:
                queue.add(pod)
        log.info(
            "cluster state loaded",
            path=str(self.path),
            nodes=cache.node_count(),
            bound_pods=cache.pod_count(),
            queued_pods=len(queue),
        )
        return ClusterState(config=config, cache=cache, queue=queue)
