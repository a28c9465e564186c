from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..config.models import OverlayConfig
from .sequencer import NotificationSequencer, Sequence
from .surface import PresentationSurface

logger = logging.getLogger(__name__)


class MessageSource(Enum):
    """Logical originator of an overlay request.

    SIGN is exclusive and sticky; NPC and GENERIC are cooperative.
    """

    NONE = "none"
    SIGN = "sign"
    NPC = "npc"
    GENERIC = "generic"


@dataclass
class OverlaySlot:
    """State of the single shared overlay, owned by the session.

    Invariant: active_source is NONE exactly when displayed_text is None.
    """

    active_source: MessageSource = MessageSource.NONE
    is_persistent: bool = False
    displayed_text: Optional[str] = None
    image_path: Optional[str] = None
    is_large_text: bool = False

    @property
    def occupied(self) -> bool:
        return self.active_source is not MessageSource.NONE

    def clear(self) -> None:
        self.active_source = MessageSource.NONE
        self.is_persistent = False
        self.displayed_text = None
        self.image_path = None
        self.is_large_text = False


class OverlayArbiter:
    """Single owner of the shared overlay slot.

    Rules:
    - A SIGN message blocks every other source: their show() calls are refused
      and their hide() calls leave it in place. Only SIGN may replace or hide it.
    - NPC and GENERIC messages override each other; the most recent call wins
      and any non-sign caller may hide them. A SIGN hide leaves them alone.
    - Non-persistent messages hide themselves after ``auto_hide_ms``. The timer
      only acts if the message that armed it is still the one displayed.

    Losing callers get a False return value; nothing is raised.
    """

    def __init__(
        self,
        slot: OverlaySlot,
        surface: PresentationSurface,
        sequencer: NotificationSequencer,
        *,
        slot_id: str = "messageOverlay",
        config: Optional[OverlayConfig] = None,
        hold: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.slot = slot
        self.surface = surface
        self.sequencer = sequencer
        self.slot_id = slot_id
        self.config = config or OverlayConfig()
        self._hold = hold
        self._auto_hide: Optional[Sequence] = None
        # Bumped on every accepted show/hide so stale auto-hides can tell they lost.
        self._generation = 0

    def is_showing(self) -> bool:
        return self.slot.occupied

    @property
    def active_source(self) -> MessageSource:
        return self.slot.active_source

    def show(
        self,
        text: str,
        image_path: Optional[str] = None,
        is_persistent: bool = False,
        is_large_text: bool = False,
        source: MessageSource = MessageSource.GENERIC,
    ) -> bool:
        if source is MessageSource.NONE:
            raise ValueError("show() requires a concrete message source")
        if self.slot.active_source is MessageSource.SIGN and source is not MessageSource.SIGN:
            logger.debug("Overlay show from %s refused: sign message active", source.value)
            return False

        display_text = text
        if not display_text or not display_text.strip():
            display_text = self.config.empty_placeholder
            logger.warning("Overlay message from %s is empty; showing placeholder", source.value)

        self._disarm_auto_hide()
        self._generation += 1
        self.slot.active_source = source
        self.slot.is_persistent = is_persistent
        self.slot.displayed_text = display_text
        self.slot.image_path = image_path
        self.slot.is_large_text = is_large_text

        self.surface.set_text(self.slot_id, display_text)
        self.surface.set_style(self.slot_id, {"image": image_path, "large_text": is_large_text})
        self.surface.set_visible(self.slot_id, True)
        logger.debug("Overlay shown by %s (persistent=%s): %r", source.value, is_persistent, display_text)

        if not is_persistent:
            self.schedule_auto_hide(self.config.auto_hide_ms)
        return True

    def hide(self, source: MessageSource = MessageSource.GENERIC) -> bool:
        active = self.slot.active_source
        if active is MessageSource.NONE:
            return False
        if (active is MessageSource.SIGN) != (source is MessageSource.SIGN):
            logger.debug("Overlay hide from %s ignored: slot owned by %s", source.value, active.value)
            return False
        if self._hold is not None and self._hold():
            logger.debug("Overlay hide from %s deferred: confirmation pending", source.value)
            return False

        self._disarm_auto_hide()
        self._generation += 1
        self.slot.clear()
        self.surface.set_visible(self.slot_id, False)
        logger.debug("Overlay hidden by %s", source.value)
        return True

    def reset(self) -> None:
        """Drop whatever is displayed regardless of owner or hold, for a new game."""
        self._disarm_auto_hide()
        self._generation += 1
        self.slot.clear()
        self.surface.set_visible(self.slot_id, False)

    def schedule_auto_hide(self, delay_ms: int) -> None:
        """(Re)arm the auto-hide for whatever is displayed now."""
        self._disarm_auto_hide()
        if not self.slot.occupied:
            return
        generation = self._generation
        owner = self.slot.active_source

        def _expire() -> None:
            if self._generation != generation:
                return
            self._auto_hide = None
            if self.hide(owner):
                logger.debug("Auto-hiding overlay message due to timeout")

        self._auto_hide = self.sequencer.create_sequence().wait(delay_ms).then(_expire).start()

    def _disarm_auto_hide(self) -> None:
        if self._auto_hide is not None:
            self._auto_hide.cancel()
            self._auto_hide = None
