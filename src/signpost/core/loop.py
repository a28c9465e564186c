from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from .scheduler import ManualScheduler

logger = logging.getLogger(__name__)


@dataclass
class LoopConfig:
    """Configuration for the session tick loop.

    Attributes:
        tick_rate: Target updates per second for the loop. If 0 or None, updates as fast as possible.
        max_steps: If provided and > 0, the loop will automatically stop after this many updates.
    """

    tick_rate: float = 30.0
    max_steps: Optional[int] = None


class GameEngine:
    """Headless-friendly tick loop for one game session.

    The engine can be paused (e.g. while the message log is open). A paused
    engine does not advance game steps, but an attached ManualScheduler keeps
    receiving elapsed time so UI timers behave like wall-clock timers.
    """

    def __init__(self, config: Optional[LoopConfig] = None, scheduler: Optional[ManualScheduler] = None) -> None:
        self.config = config or LoopConfig()
        self.scheduler = scheduler
        self._running: bool = False
        self._paused: bool = False
        self._step: int = 0
        self._last_time: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def step(self) -> int:
        return self._step

    def start(self) -> None:
        """Start the engine loop state.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameEngine.start() called while already running")
            return
        self._running = True
        self._paused = False
        self._step = 0
        self._last_time = time.perf_counter()
        logger.info("GameEngine started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("GameEngine stopped at step=%s", self._step)

    def pause(self) -> None:
        if self._paused:
            return
        self._paused = True
        logger.info("GameEngine paused at step=%s", self._step)

    def resume(self) -> None:
        if not self._paused:
            return
        self._paused = False
        self._last_time = time.perf_counter()
        logger.info("GameEngine resumed at step=%s", self._step)

    def update(self, dt: float) -> None:
        """Perform a single update tick.

        Args:
            dt: Delta time in seconds since last update.
        """
        if not self._running:
            logger.debug("update() called while not running; ignored")
            return
        if self.scheduler is not None:
            self.scheduler.advance(dt * 1000.0)
        if self._paused:
            return
        self._step += 1
        logger.debug("Tick #%d (dt=%.4f)", self._step, dt)

        if self.config.max_steps is not None and self._step >= self.config.max_steps:
            self.stop()

    def run(self) -> None:
        """Run a blocking loop until stopped or max_steps reached.

        Throttles to tick_rate if configured.
        """
        self.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self._running:
            now = time.perf_counter()
            dt = 0.0 if self._last_time is None else now - self._last_time
            self._last_time = now

            self.update(dt)

            if target_dt > 0:
                remaining = target_dt - (time.perf_counter() - now)
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d)", self._step)
