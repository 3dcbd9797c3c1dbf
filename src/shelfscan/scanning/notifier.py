# ABOUTME: User notification and timed re-arm of the scan gate.
# ABOUTME: Every outcome shows a message, then clears it and releases the lock after a cool-down.

import asyncio
import logging
import math
from collections.abc import Callable
from typing import Any, Protocol

from shelfscan.scanning.gate import ScanGate
from shelfscan.scanning.outcomes import Outcome, Success, describe

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN = 3.0


class Scheduler(Protocol):
    """Anything that can run a callback after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any: ...


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class Notifier:
    """Shows the outcome of a scan cycle and re-arms the gate.

    The cool-down is the same for every outcome kind: a barcode left in frame
    is re-processed at most once per cool-down whether the last attempt
    succeeded or failed.

    Raises:
        ValueError: From the constructor, if cooldown is negative or not finite.
    """

    def __init__(
        self,
        gate: ScanGate,
        scheduler: Scheduler | None = None,
        cooldown: float = DEFAULT_COOLDOWN,
        sink: Callable[[Outcome, str], None] | None = None,
    ) -> None:
        if not math.isfinite(cooldown) or cooldown < 0:
            raise ValueError(f"Cool-down must be a finite number of seconds >= 0: {cooldown}")
        self._gate = gate
        self._scheduler = scheduler or AsyncioScheduler()
        self._cooldown = cooldown
        self._sink = sink
        self._message = ""
        self._generation = 0

    @property
    def message(self) -> str:
        """The status line currently on display ("" when cleared)."""
        return self._message

    @property
    def cooldown(self) -> float:
        return self._cooldown

    def announce(self, outcome: Outcome, isbn: str | None = None) -> None:
        """Display an outcome and schedule the cool-down release.

        Args:
            outcome: The terminal outcome of the cycle.
            isbn: The candidate that produced it; None releases any lock.
        """
        self._generation += 1
        generation = self._generation
        self._message = describe(outcome)

        level = logging.INFO if isinstance(outcome, Success) else logging.WARNING
        logger.log(level, "%s", self._message)

        if self._sink is not None:
            self._sink(outcome, self._message)

        def rearm() -> None:
            # A newer announcement owns the message; leave it alone.
            if generation == self._generation:
                self._message = ""
            self._gate.release(isbn)
            logger.debug("Re-armed scan gate for %s", isbn)

        self._scheduler.call_later(self._cooldown, rearm)
