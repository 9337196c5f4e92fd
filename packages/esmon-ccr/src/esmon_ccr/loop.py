"""
CollectorLoop daemon for periodic CCR stats collection.

This module implements the collection daemon that:
- Runs collection cycles at a configurable interval
- Logs failed cycles and keeps going (the next cycle retries naturally)
- Outputs a heartbeat per cycle at debug level
- Handles graceful shutdown on SIGINT/SIGTERM

Uses asyncio.Event for shutdown coordination and wait_for with a timeout
for interruptible sleep. Cycles never overlap: the next cycle starts only
after the previous one has returned.
"""

import asyncio
import functools
import logging
import signal

from esmon_ccr.collector import CCRCollector

logger = logging.getLogger(__name__)


class CollectorLoop:
    """
    Long-running daemon that drives a CCRCollector.

    Example:
        collector = create_ccr_collector(settings)
        loop = CollectorLoop(collector, interval_seconds=10.0)
        await loop.run()  # Runs until SIGINT/SIGTERM
    """

    def __init__(
        self,
        collector: CCRCollector,
        interval_seconds: float = 10.0,
        install_signal_handlers: bool = True,
    ) -> None:
        """
        Initialize collector loop.

        Args:
            collector: Collector to run once per interval
            interval_seconds: Seconds between cycle starts (default 10)
            install_signal_handlers: Register SIGINT/SIGTERM handlers in run().
                Disable when embedding the loop in another application.
        """
        self.collector = collector
        self.interval = interval_seconds
        self.install_signal_handlers = install_signal_handlers
        self._shutdown = asyncio.Event()

        # Stats for heartbeat
        self.cycle_count = 0
        self.failure_count = 0
        self._last_event_count = 0

    async def run(self) -> None:
        """Run collection cycles until stop() or a shutdown signal."""
        if self.install_signal_handlers:
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(
                    sig,
                    functools.partial(self._handle_signal, sig),
                )

        logger.info(f"Collector loop starting (interval: {self.interval}s)")

        while not self._shutdown.is_set():
            await self._cycle()
            self._log_heartbeat()

            try:
                await asyncio.wait_for(
                    self._shutdown.wait(),
                    timeout=self.interval,
                )
            except asyncio.TimeoutError:
                pass  # Normal timeout, continue loop

        logger.info("Collector loop stopped")

    def stop(self) -> None:
        """Request shutdown after the current cycle."""
        self._shutdown.set()

    def _handle_signal(self, sig: signal.Signals) -> None:
        """Handle shutdown signal by setting shutdown event."""
        logger.info(f"Received {sig.name}, shutting down...")
        self._shutdown.set()

    async def _cycle(self) -> None:
        """Run one cycle, logging instead of raising on failure."""
        self.cycle_count += 1

        try:
            events = await self.collector.run_cycle()
        except Exception as e:
            # A failed cycle does not stop the daemon
            self.failure_count += 1
            self._last_event_count = 0
            logger.error(f"Collection cycle failed: {e}")
            return

        self._last_event_count = len(events)

    def _log_heartbeat(self) -> None:
        logger.debug(
            f"Cycle {self.cycle_count} complete: {self._last_event_count} events, "
            f"{self.failure_count} failed cycles so far"
        )
