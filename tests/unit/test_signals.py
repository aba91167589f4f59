"""Tests for the debug-signal listener."""

from __future__ import annotations

import asyncio
import os
import signal

from sched_debugger.cache import PriorityQueue, SchedulerCache
from sched_debugger.debugger.dumper import CacheDumper
from sched_debugger.debugger.signals import DEFAULT_DUMP_SIGNAL, DumpSignalListener


def _make_listener(sink, **kwargs) -> DumpSignalListener:
    cache = SchedulerCache()
    cache.add_node("n1")
    dumper = CacheDumper(cache, PriorityQueue(), sink)
    kwargs.setdefault("stop_signals", ())
    return DumpSignalListener(dumper, **kwargs)


async def _wait_for(predicate, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.01)


class TestDumpSignalListener:
    def test_default_signal(self, sink) -> None:
        assert _make_listener(sink).dump_signal == DEFAULT_DUMP_SIGNAL == signal.SIGUSR2

    async def test_signal_triggers_dump_all(self, sink) -> None:
        listener = _make_listener(sink)
        listener.install()
        try:
            os.kill(os.getpid(), signal.SIGUSR2)
            await _wait_for(lambda: listener.dump_count == 1)
        finally:
            listener.uninstall()
        assert sink.messages[0] == "Dump of cached NodeInfo"
        assert sink.messages[-1].startswith("Dump of scheduling queue:")
        assert len(sink.messages) == 3

    async def test_each_signal_dumps_again(self, sink) -> None:
        listener = _make_listener(sink, dump_signal=signal.SIGUSR1)
        listener.install()
        try:
            for expected in (1, 2):
                os.kill(os.getpid(), signal.SIGUSR1)
                await _wait_for(lambda: listener.dump_count == expected)
        finally:
            listener.uninstall()
        assert len(sink.messages) == 6

    async def test_run_until_stopped(self, sink) -> None:
        listener = _make_listener(sink)
        task = asyncio.create_task(listener.run())
        await _wait_for(lambda: listener._stop_event is not None)
        os.kill(os.getpid(), signal.SIGUSR2)
        await _wait_for(lambda: listener.dump_count == 1)
        listener.stop()
        await asyncio.wait_for(task, timeout=2.0)
        assert task.done()

    async def test_stop_signal_ends_run(self, sink) -> None:
        listener = _make_listener(sink, stop_signals=(signal.SIGUSR1,))
        task = asyncio.create_task(listener.run())
        await _wait_for(lambda: listener._stop_event is not None)
        os.kill(os.getpid(), signal.SIGUSR1)
        await asyncio.wait_for(task, timeout=2.0)
        assert listener.dump_count == 0

    def test_uninstall_without_install(self, sink) -> None:
        _make_listener(sink).uninstall()
