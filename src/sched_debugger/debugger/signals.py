"""DumpSignalListener: trigger cache dumps from a process signal."""

from __future__ import annotations

import asyncio
import signal

import structlog

from sched_debugger.debugger.dumper import CacheDumper

log = structlog.get_logger()

DEFAULT_DUMP_SIGNAL = signal.SIGUSR2


class DumpSignalListener:
    """Runs ``dumper.dump_all()`` on the event loop each time ``dump_signal`` arrives.

    ``run()`` blocks until one of ``stop_signals`` is received or ``stop()``
    is called.
    """

    def __init__(
        self,
        dumper: CacheDumper,
        dump_signal: signal.Signals = DEFAULT_DUMP_SIGNAL,
        stop_signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM),
    ) -> None:
        self.dumper = dumper
        self.dump_signal = dump_signal
        self.stop_signals = stop_signals
        self.dump_count = 0
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event: asyncio.Event | None = None

    def install(self) -> None:
        """Register signal handlers on the running loop."""
        self._loop = asyncio.get_running_loop()
        self._stop_event = asyncio.Event()
        self._loop.add_signal_handler(self.dump_signal, self._handle_dump)
        for sig in self.stop_signals:
            self._loop.add_signal_handler(sig, self.stop)
        log.info("listening for dump signal", signal=self.dump_signal.name)

    def uninstall(self) -> None:
        if self._loop is None:
            return
        self._loop.remove_signal_handler(self.dump_signal)
        for sig in self.stop_signals:
            self._loop.remove_signal_handler(sig)
        self._loop = None

    def stop(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()

    async def run(self) -> None:
        self.install()
        try:
            await self._stop_event.wait()
        finally:
            self.uninstall()
        log.info("dump listener stopped", dumps=self.dump_count)

    def _handle_dump(self) -> None:
        self.dump_count += 1
        self.dumper.dump_all()
