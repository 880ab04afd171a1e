"""
Scheduler Module.

Provides the tick source and deferred-action interface the scan controller is
driven by. The controller never touches wall-clock timers directly: tests use
the VirtualScheduler and advance its clock explicitly, while the dashboard uses
the WallClockScheduler and syncs it to real time on every rerun.
"""
import heapq
import itertools
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]

class TimerHandle:
    """
    A registration returned by the scheduler.
    Once cancelled, the callback never fires again.
    """
    def __init__(self, due_ms: float, callback: Callback, interval_ms: Optional[float] = None):
        self.due_ms = due_ms
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False

    @property
    def is_periodic(self) -> bool:
        return self.interval_ms is not None

    def cancel(self):
        self.cancelled = True

    def __repr__(self):
        kind = "every" if self.is_periodic else "once"
        return f"TimerHandle({kind}, due={self.due_ms}, cancelled={self.cancelled})"


class Scheduler(ABC):
    """
    Abstract Base Class for a timer source.
    Times are expressed in milliseconds on the scheduler's own clock.
    """

    @property
    @abstractmethod
    def now_ms(self) -> float:
        """The current time on this scheduler's clock."""
        pass

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callback) -> TimerHandle:
        """Registers a one-shot callback that fires after delay_ms."""
        pass

    @abstractmethod
    def call_every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        """Registers a periodic callback; the first call fires after interval_ms."""
        pass


class VirtualScheduler(Scheduler):
    """
    Scheduler over a virtual clock that only moves when advance() is called.
    Due timers fire in (due time, registration order).
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    @property
    def now_ms(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of live (non-cancelled) registrations."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def call_later(self, delay_ms: float, callback: Callback) -> TimerHandle:
        handle = TimerHandle(self._now + max(0.0, delay_ms), callback)
        self._push(handle)
        return handle

    def call_every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError(f"Invalid interval '{interval_ms}'. Must be positive.")
        handle = TimerHandle(self._now + interval_ms, callback, interval_ms=interval_ms)
        self._push(handle)
        return handle

    def advance(self, delta_ms: float) -> int:
        """
        Moves the clock forward by delta_ms, firing every timer that falls due.
        Returns the number of callbacks run.
        """
        target = self._now + max(0.0, delta_ms)
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue

            self._now = due
            handle.callback()
            fired += 1

            # The callback may have cancelled its own registration.
            if handle.is_periodic and not handle.cancelled:
                handle.due_ms = due + handle.interval_ms
                self._push(handle)

        self._now = target
        return fired

    def run_until_idle(self, limit_ms: float = 60_000.0) -> int:
        """
        Advances timer by timer until nothing is pending or limit_ms has passed.
        The limit keeps a periodic timer that never cancels itself from looping forever.
        """
        deadline = self._now + limit_ms
        fired = 0
        while True:
            next_due = self._next_due()
            if next_due is None or next_due > deadline:
                break
            fired += self.advance(next_due - self._now)
        return fired

    def _next_due(self) -> Optional[float]:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
        return self._queue[0][0] if self._queue else None

    def _push(self, handle: TimerHandle):
        heapq.heappush(self._queue, (handle.due_ms, next(self._sequence), handle))


class WallClockScheduler(VirtualScheduler):
    """
    Virtual scheduler that follows real elapsed time.
    The dashboard calls sync() at the top of every rerun; the virtual clock
    catches up by the monotonic time elapsed since the previous sync.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self._clock = clock
        self._last_sync = clock()
        self._advancing = False

    def call_later(self, delay_ms: float, callback: Callback) -> TimerHandle:
        self._catch_up()
        return super().call_later(delay_ms, callback)

    def call_every(self, interval_ms: float, callback: Callback) -> TimerHandle:
        self._catch_up()
        return super().call_every(interval_ms, callback)

    def advance(self, delta_ms: float) -> int:
        self._advancing = True
        try:
            return super().advance(delta_ms)
        finally:
            self._advancing = False

    def _catch_up(self):
        # Registrations from outside a callback (e.g. a button click after a long
        # idle period) must be measured from the real current time.
        if not self._advancing:
            self.sync()

    def sync(self) -> int:
        now = self._clock()
        elapsed_ms = (now - self._last_sync) * 1000.0
        self._last_sync = now

        fired = self.advance(elapsed_ms)
        if fired:
            logger.debug(f"Scheduler sync fired {fired} callback(s) over {elapsed_ms:.1f}ms")
        return fired
