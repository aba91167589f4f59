"""SchedulerCache: thread-safe in-memory node cache with snapshot support."""

from __future__ import annotations

import threading

import structlog

from sched_debugger.models import NodeInfo, Pod, Resource, Snapshot

log = structlog.get_logger()


class SchedulerCache:
    """Tracks nodes and the pods bound to them.

    Every mutation bumps ``generation``; ``snapshot()`` clones each node under
    the lock so callers get a view that does not change underneath them.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._nodes: dict[str, NodeInfo] = {}
        self._pod_nodes: dict[str, str] = {}
        self._generation = 0

    def add_node(self, name: str, allocatable: Resource | None = None) -> NodeInfo:
        with self._lock:
            if name in self._nodes:
                return self.update_node(name, allocatable)
            node = NodeInfo(name, allocatable)
            self._nodes[name] = node
            self._generation += 1
        log.debug("node added", node=name)
        return node

    def update_node(self, name: str, allocatable: Resource | None = None) -> NodeInfo:
        """Replace a node's allocatable resources, keeping its pods."""
        with self._lock:
            node = self._nodes.get(name)
            if node is None:
                return self.add_node(name, allocatable)
            node.allocatable = allocatable or Resource()
            self._generation += 1
        log.debug("node updated", node=name)
        return node

    def remove_node(self, name: str) -> None:
        with self._lock:
            if name not in self._nodes:
                raise KeyError(f"Node '{name}' not found in cache")
            node = self._nodes.pop(name)
            for pod in node.pods:
                self._pod_nodes.pop(pod.uid, None)
            self._generation += 1
        log.debug("node removed", node=name)

    def add_pod(self, pod: Pod) -> None:
        """Bind a pod to its node, creating the node entry if unseen.

        A pod whose uid is already cached replaces the earlier entry, even if
        it has moved to a different node.
        """
        if not pod.node_name:
            raise ValueError(f"Pod '{pod.key}' is not bound to a node")
        with self._lock:
            previous = self._pod_nodes.get(pod.uid)
            if previous is not None and previous in self._nodes:
                self._nodes[previous].remove_pod(pod)
            node = self._nodes.get(pod.node_name)
            if node is None:
                node = NodeInfo(pod.node_name)
                self._nodes[pod.node_name] = node
            node.add_pod(pod)
            self._pod_nodes[pod.uid] = pod.node_name
            self._generation += 1
        log.debug("pod added", pod=pod.key, node=pod.node_name)

    def remove_pod(self, pod: Pod) -> bool:
        with self._lock:
            node = self._nodes.get(pod.node_name or "")
            if node is None or not node.remove_pod(pod):
                return False
            self._pod_nodes.pop(pod.uid, None)
            self._generation += 1
        log.debug("pod removed", pod=pod.key, node=pod.node_name)
        return True

    def node_count(self) -> int:
        with self._lock:
            return len(self._nodes)

    def pod_count(self) -> int:
        with self._lock:
            return sum(len(node.pods) for node in self._nodes.values())

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                nodes={name: node.clone() for name, node in self._nodes.items()},
                generation=self._generation,
            )
