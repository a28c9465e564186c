from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Protocol

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], None]


class Scheduler(Protocol):
    """Deferred-callback capability consumed by the notification sequencer.

    ``after`` must never block; the callback runs later on the same logical
    thread. ``cancel`` on an unknown or already-fired handle is a no-op.
    """

    def after(self, delay_ms: int, callback: TimerCallback) -> object:
        ...

    def cancel(self, handle: object) -> None:
        ...


@dataclass(order=True)
class _Timer:
    due_ms: int
    seq: int
    callback: TimerCallback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class ManualScheduler:
    """Scheduler driven by an explicit virtual clock in milliseconds.

    The game loop (or a test) calls advance(dt_ms). Timers due at the same
    instant fire in the order they were scheduled.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now = int(start_ms)
        self._queue: List[_Timer] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now

    def after(self, delay_ms: int, callback: TimerCallback) -> _Timer:
        timer = _Timer(due_ms=self._now + max(0, int(delay_ms)), seq=next(self._seq), callback=callback)
        heapq.heappush(self._queue, timer)
        logger.debug("Timer armed: due=%dms (now=%dms)", timer.due_ms, self._now)
        return timer

    def cancel(self, handle: object) -> None:
        if isinstance(handle, _Timer) and not handle.cancelled:
            handle.cancelled = True
            logger.debug("Timer cancelled: due=%dms", handle.due_ms)

    def pending_count(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward and fire every timer that falls due.

        Returns:
            Number of callbacks fired.
        """
        if delta_ms < 0:
            raise ValueError("delta_ms must be non-negative")
        target = self._now + int(round(delta_ms))
        fired = 0
        while self._queue and self._queue[0].due_ms <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = timer.due_ms
            timer.cancelled = True
            fired += 1
            try:
                timer.callback()
            except Exception:
                logger.exception("Scheduled callback failed at %dms", self._now)
        self._now = target
        return fired
