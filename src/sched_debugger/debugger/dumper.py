"""CacheDumper: writes the scheduler cache and scheduling queue to the logs."""

from __future__ import annotations

import io

from sched_debugger.cache.protocols import Cache, LogSink, SchedulingQueue
from sched_debugger.logging_config import get_logger
from sched_debugger.models import NodeInfo, Pod


class CacheDumper:
    """Logs cached nodes and pending pods for debugging purposes.

    Read-only: each call takes a fresh snapshot from its collaborator and
    drops it once the log statements have been emitted.
    """

    def __init__(
        self,
        cache: Cache,
        pod_queue: SchedulingQueue,
        sink: LogSink | None = None,
    ) -> None:
        self.cache = cache
        self.pod_queue = pod_queue
        self.sink = sink if sink is not None else get_logger(component="cache-dumper")

    def dump_all(self) -> None:
        """Write cached nodes, then the scheduling queue, to the logs."""
        self.dump_nodes()
        self.dump_scheduling_queue()

    def dump_nodes(self) -> None:
        """Write one log statement per cached node, after a header."""
        snapshot = self.cache.snapshot()
        self._emit("Dump of cached NodeInfo")
        for node in snapshot.nodes.values():
            self._emit(format_node_info(node))

    def dump_scheduling_queue(self) -> None:
        """Write all waiting pods, in queue order, as a single log statement."""
        waiting_pods = self.pod_queue.waiting_pods()
        pod_data = io.StringIO()
        for pod in waiting_pods:
            pod_data.write(format_pod(pod))
        self._emit(f"Dump of scheduling queue:\n{pod_data.getvalue()}")

    def _emit(self, message: str) -> None:
        try:
            self.sink.info(message)
        except Exception:
            pass


def format_node_info(node: NodeInfo) -> str:
    """Render a node's name, resources and bound pods as a text block."""
    pods = node.pods
    node_data = io.StringIO()
    node_data.write(
        f"\nNode name: {node.name}"
        f"\nRequested Resources: {node.requested}"
        f"\nAllocatable Resources: {node.allocatable}"
        f"\nNumber of Pods: {len(pods)}"
        f"\nPods:\n"
    )
    for pod in pods:
        node_data.write(format_pod(pod))
    return node_data.getvalue()


def format_pod(pod: Pod) -> str:
    return (
        f"name: {pod.name}, namespace: {pod.namespace}, uid: {pod.uid}, "
        f"phase: {pod.phase}, nominated node: {pod.nominated_node_name or ''}\n"
    )
