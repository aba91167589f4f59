"""
PriorityQueue: in-memory pending-pod queue.

Ordering: higher ``priority`` first, then arrival order (FIFO) among equals.
Re-adding a pod with the same namespace/name replaces the queued entry and
moves it to the back of its priority band.
"""

from __future__ import annotations

import heapq
import itertools
import threading

import structlog

from sched_debugger.models import Pod

log = structlog.get_logger()


class PriorityQueue:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._heap: list[tuple[int, int, str]] = []
        self._pods: dict[str, tuple[int, Pod]] = {}
        self._counter = itertools.count()

    def add(self, pod: Pod) -> None:
        with self._lock:
            if pod.key in self._pods:
                self._drop_heap_entry(pod.key)
            seq = next(self._counter)
            self._pods[pod.key] = (seq, pod)
            heapq.heappush(self._heap, (-pod.priority, seq, pod.key))
        log.debug("pod enqueued", pod=pod.key, priority=pod.priority)

    def delete(self, pod: Pod) -> bool:
        with self._lock:
            if self._pods.pop(pod.key, None) is None:
                return False
            self._drop_heap_entry(pod.key)
        log.debug("pod dequeued", pod=pod.key)
        return True

    def pop(self) -> Pod | None:
        """Remove and return the highest-priority pod, or None when empty."""
        with self._lock:
            if not self._heap:
                return None
            _, _, key = heapq.heappop(self._heap)
            _, pod = self._pods.pop(key)
            return pod

    def _drop_heap_entry(self, key: str) -> None:
        # Caller holds the lock.
        self._heap = [item for item in self._heap if item[2] != key]
        heapq.heapify(self._heap)

    def waiting_pods(self) -> list[Pod]:
        with self._lock:
            live = [
                (-pod.priority, seq, pod) for seq, pod in self._pods.values()
            ]
        live.sort(key=lambda item: (item[0], item[1]))
        return [pod for _, _, pod in live]

    def __len__(self) -> int:
        with self._lock:
            return len(self._pods)
