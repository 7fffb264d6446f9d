"""
Control Loop

Runs the poll cycle forever. The next cycle starts ``interval`` seconds
after the previous one finished, so cycles never overlap. An error escaping
a cycle is logged and the loop carries on.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ControlLoop:
    """Single-threaded, fixed-delay scheduler for the poll cycle"""

    def __init__(
        self,
        cycle: Callable[[], object],
        interval_seconds: int,
        shutdown_event: Optional[threading.Event] = None
    ):
        """
        Initialize control loop

        Args:
            cycle: Zero-argument callable executing one poll cycle
            interval_seconds: Delay between the end of a cycle and the next start
            shutdown_event: Event that stops the loop when set
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        if interval_seconds > threading.TIMEOUT_MAX:
            raise ValueError(f"interval_seconds must not exceed {threading.TIMEOUT_MAX}, got {interval_seconds}")
        self.cycle = cycle
        self.interval_seconds = interval_seconds
        self.shutdown_event = shutdown_event or threading.Event()
        self.cycles_run = 0

    @property
    def is_running(self) -> bool:
        return not self.shutdown_event.is_set()

    def run_once(self) -> bool:
        """
        Execute one cycle, isolating its failures

        Returns:
            True if the cycle completed without an escaping error
        """
        self.cycles_run += 1
        started = time.monotonic()
        try:
            self.cycle()
            return True
        except Exception as e:
            logger.error(f"❌ Error in main loop: {e}", exc_info=True)
            return False
        finally:
            logger.debug(f"Cycle {self.cycles_run} finished in {time.monotonic() - started:.2f}s")

    def run(self, max_cycles: Optional[int] = None):
        """
        Run cycles until stopped

        Args:
            max_cycles: Stop after this many cycles (None runs forever)
        """
        logger.info(f"Control loop started (interval: {self.interval_seconds}s)")

        while self.is_running:
            self.run_once()

            if max_cycles is not None and self.cycles_run >= max_cycles:
                break

            # Returns True as soon as stop() is called
            if self.shutdown_event.wait(self.interval_seconds):
                break

        logger.info(f"Control loop stopped after {self.cycles_run} cycle(s)")

    def stop(self):
        """Stop scheduling new cycles; the current one runs to completion"""
        self.shutdown_event.set()
