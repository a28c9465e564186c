from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .core.loop import GameEngine
from .ui.message_log import LogEntry
from .ui.overlay import OverlaySlot

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """State owned by one active game session.

    The message log and overlay slot live here for the session's lifetime and
    are handed to the UI components by reference.
    """

    engine: GameEngine = field(default_factory=GameEngine)
    message_log: List[LogEntry] = field(default_factory=list)
    overlay: OverlaySlot = field(default_factory=OverlaySlot)
    pending_confirmation: bool = False
    player_position: Optional[tuple[int, int]] = None

    def pause(self) -> None:
        self.engine.pause()

    def resume(self) -> None:
        self.engine.resume()

    def has_pending_confirmation(self) -> bool:
        return self.pending_confirmation

    def reset(self) -> None:
        """Clear per-run state for a new game.

        Display slots are owned by MessageManager; use its reset() to clear both.
        """
        logger.info("Session reset (dropping %d log entries)", len(self.message_log))
        self.message_log.clear()
        self.overlay.clear()
        self.pending_confirmation = False
        self.player_position = None
