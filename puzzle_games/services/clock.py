"""
Tick Sources

The crossword clock does not own a timer; it subscribes to a tick source
and unsubscribes once the puzzle is solved.

- ManualTicker: ticks only when told to (tests, replays)
- IntervalTicker: background thread ticking every ``interval`` seconds
"""

import logging
import threading
from typing import Callable, List

logger = logging.getLogger(__name__)

TickListener = Callable[[], None]


class ManualTicker:
    """Tick source driven explicitly by the caller."""

    def __init__(self):
        self._listeners: List[TickListener] = []

    def subscribe(self, listener: TickListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TickListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def tick(self, count: int = 1) -> None:
        """Deliver ``count`` ticks to every current listener."""
        for _ in range(count):
            for listener in list(self._listeners):
                listener()


class IntervalTicker(ManualTicker):
    """
    Tick source that fires from a daemon thread at a fixed interval.

    A listener that raises is logged and kept; one bad tick must not stop
    the clock for everyone else.
    """

    def __init__(self, interval: float = 1.0):
        super().__init__()
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread = None

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name='tick-source', daemon=True)
        self._thread.start()
        logger.info(f"[CLOCK] Tick source started, interval {self.interval}s")

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
            self._thread = None
        logger.info("[CLOCK] Tick source stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            for listener in list(self._listeners):
                try:
                    listener()
                except Exception as e:
                    logger.error(f"[CLOCK] Tick listener failed: {e}")
