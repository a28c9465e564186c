"""Arcade-backed scheduler and surface for the GUI runner."""
from __future__ import annotations

import logging
import re
from typing import Callable, Iterable

import arcade

from .surface import SlotSurface

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]+>")


class ArcadeScheduler:
    """Scheduler backed by the arcade (pyglet) clock."""

    def after(self, delay_ms: int, callback: Callable[[], None]) -> Callable[[float], None]:
        def _fire(_delta_time: float) -> None:
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback failed")

        arcade.schedule_once(_fire, max(0, delay_ms) / 1000.0)
        return _fire

    def cancel(self, handle: object) -> None:
        if callable(handle):
            arcade.unschedule(handle)


class ArcadeSurface(SlotSurface):
    """SlotSurface that draws visible slots as plain text lines."""

    def __init__(self, slot_ids: Iterable[str], *, x: float = 24, top: float = 560, line_height: float = 28) -> None:
        super().__init__(slot_ids)
        self.x = x
        self.top = top
        self.line_height = line_height

    def draw(self) -> None:
        y = self.top
        for slot_id, state in self.slots.items():
            if not state.visible or not state.text:
                continue
            plain = _TAG.sub(" ", state.text).strip()
            size = 20 if state.style.get("large_text") else 14
            arcade.draw_text(f"{slot_id}: {plain}", self.x, y, arcade.color.GHOST_WHITE, size)
            y -= self.line_height
