from __future__ import annotations

import itertools
import logging
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..core.scheduler import Scheduler

logger = logging.getLogger(__name__)


class JobState(Enum):
    PENDING = auto()
    WAITING = auto()
    FIRED = auto()
    CANCELLED = auto()


Step = Tuple[str, Union[int, Callable[[], None]]]


class Sequence:
    """Chain of wait/then steps executed on a Scheduler.

    Usage:
        sequencer.create_sequence().wait(2000).then(hide).start()

    Callbacks run without blocking the caller; a wait hands the rest of the
    chain to the scheduler. A failing callback is logged and ends the chain.
    """

    def __init__(self, seq_id: int, sequencer: "NotificationSequencer") -> None:
        self.id = seq_id
        self._sequencer = sequencer
        self._steps: List[Step] = []
        self._state = JobState.PENDING
        self._handle: Optional[object] = None

    @property
    def state(self) -> JobState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state in (JobState.FIRED, JobState.CANCELLED)

    def wait(self, ms: int) -> "Sequence":
        if ms < 0:
            raise ValueError("wait duration must be non-negative")
        self._steps.append(("wait", int(ms)))
        return self

    def then(self, callback: Callable[[], None]) -> "Sequence":
        if not callable(callback):
            raise TypeError("callback must be callable")
        self._steps.append(("call", callback))
        return self

    def start(self) -> "Sequence":
        if self._state is not JobState.PENDING:
            logger.debug("Sequence %d start() ignored in state %s", self.id, self._state.name)
            return self
        self._sequencer._track(self)
        self._run_from(0)
        return self

    def cancel(self) -> None:
        if self.done:
            return
        if self._handle is not None:
            self._sequencer.scheduler.cancel(self._handle)
            self._handle = None
        self._state = JobState.CANCELLED
        self._sequencer._release(self)
        logger.debug("Sequence %d cancelled", self.id)

    def _run_from(self, index: int) -> None:
        self._handle = None
        while index < len(self._steps):
            if self._state is JobState.CANCELLED:
                return
            kind, arg = self._steps[index]
            index += 1
            if kind == "wait":
                resume_at = index
                self._state = JobState.WAITING
                self._handle = self._sequencer.scheduler.after(arg, lambda: self._run_from(resume_at))  # type: ignore[arg-type]
                return
            try:
                arg()  # type: ignore[operator]
            except Exception:
                logger.exception("Sequence %d callback failed; remaining steps skipped", self.id)
                break
        if self._state is not JobState.CANCELLED:
            self._state = JobState.FIRED
            self._sequencer._release(self)


class NotificationSequencer:
    """Factory and registry for timed show -> wait -> hide sequences."""

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self._active: Dict[int, Sequence] = {}
        self._ids = itertools.count()

    def create_sequence(self) -> Sequence:
        return Sequence(next(self._ids), self)

    def cancel_sequence(self, seq_id: int) -> None:
        seq = self._active.get(seq_id)
        if seq is not None:
            seq.cancel()

    def cancel_all(self) -> None:
        for seq in list(self._active.values()):
            seq.cancel()

    def active_count(self) -> int:
        return len(self._active)

    def _track(self, seq: Sequence) -> None:
        self._active[seq.id] = seq

    def _release(self, seq: Sequence) -> None:
        self._active.pop(seq.id, None)
