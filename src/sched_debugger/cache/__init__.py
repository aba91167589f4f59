from sched_debugger.cache.protocols import Cache, LogSink, SchedulingQueue
from sched_debugger.cache.scheduler_cache import SchedulerCache
from sched_debugger.cache.scheduling_queue import PriorityQueue

__all__ = [
    "Cache",
    "LogSink",
    "PriorityQueue",
    "SchedulerCache",
    "SchedulingQueue",
]
