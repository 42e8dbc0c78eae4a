"""Timers for debounced work.

A scheduler is anything with `call_later(delay, callback)` returning a
handle with `cancel()`. A running asyncio event loop already fits;
without one a `ThreadTimer` is used. `ManualScheduler` is a virtual clock
that only moves when told to.
"""

import asyncio
import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Protocol, Tuple


logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class ManualTimer:
    """Handle for a callback queued on a ManualScheduler."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic virtual-clock scheduler.

    Callbacks run only from `advance()`, in due-time order, ties broken by
    scheduling order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, ManualTimer]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + max(delay, 0.0), callback)
        heapq.heappush(self._queue, (timer.when, next(self._counter), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of queued, uncancelled timers."""
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every timer that falls due.

        Returns the number of callbacks run.
        """
        deadline = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            when, _, timer = heapq.heappop(self._queue)
            self.now = when
            if timer.cancelled:
                continue
            timer.callback()
            ran += 1
        self.now = deadline
        return ran


class ThreadTimer:
    """Cancellable timer on a daemon thread, for callers with no event loop."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self._timer = threading.Timer(max(delay, 0.0), callback)
        self._timer.daemon = True
        self._timer.start()

    def cancel(self) -> None:
        self._timer.cancel()


def call_later(scheduler: Optional[Scheduler], delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule on `scheduler`, else on the running asyncio loop.

    Outside any event loop the callback runs on a daemon timer thread, so
    callers that share state with it must hold a lock.
    """
    if scheduler is not None:
        return scheduler.call_later(delay, callback)
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop; scheduling on a timer thread")
        return ThreadTimer(delay, callback)
    return loop.call_later(delay, callback)
