from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ..config.models import UIConfig
from ..core.events import Event, EventBus, EventTypes, Subscription
from ..core.scheduler import Scheduler
from .message_log import MessageLogStore
from .notes import NoteStack
from .overlay import MessageSource, OverlayArbiter
from .region import RegionNotifier
from .sequencer import NotificationSequencer
from .sources import SignBoard
from .surface import PresentationSurface

if TYPE_CHECKING:
    from ..session import GameSession

logger = logging.getLogger(__name__)


class MessageManager:
    """Coordinates message display for one game session.

    Builds the log store, overlay arbiter, note stack, region notifier and sign
    board over a shared surface and scheduler, and wires them to the event bus.
    Call destroy() when the session ends.
    """

    def __init__(
        self,
        session: GameSession,
        bus: EventBus,
        surface: PresentationSurface,
        scheduler: Scheduler,
        config: Optional[UIConfig] = None,
    ) -> None:
        self.session = session
        self.bus = bus
        self.surface = surface
        self.config = config or UIConfig()
        slots = self.config.slots

        self.sequencer = NotificationSequencer(scheduler)
        self.overlay = OverlayArbiter(
            session.overlay,
            surface,
            self.sequencer,
            slot_id=slots.overlay,
            config=self.config.overlay,
            hold=session.has_pending_confirmation,
        )
        self.message_log = MessageLogStore(
            session.message_log,
            surface,
            config=self.config.log,
            slots=slots,
            resume=session.resume,
        )
        self.notes = NoteStack(surface, self.sequencer, slot_id=slots.notes, config=self.config.notes)
        self.region = RegionNotifier(surface, self.sequencer, slot_id=slots.region, config=self.config.region)
        self.signs = SignBoard(self.overlay)

        self._subscriptions: List[Subscription] = []
        self._setup_event_listeners()

    def _setup_event_listeners(self) -> None:
        self._subscriptions += [
            self.bus.subscribe(EventTypes.UI_SHOW_MESSAGE, self._on_show_message),
            self.bus.subscribe(EventTypes.PLAYER_MOVED, self._on_player_moved),
            self.bus.subscribe(EventTypes.TREASURE_FOUND, self._on_treasure_found),
            self.bus.subscribe(EventTypes.ZONE_CHANGED, self._on_zone_changed),
            self.bus.subscribe(EventTypes.GAME_RESET, self._on_game_reset),
        ]

    # Event handlers
    def _on_show_message(self, evt: Event) -> None:
        p = evt.payload
        self.show_overlay_message(
            p.get("text", ""),
            p.get("image_path"),
            bool(p.get("is_persistent", False)),
            bool(p.get("is_large_text", False)),
        )

    def _on_player_moved(self, evt: Event) -> None:
        position = (int(evt.payload["x"]), int(evt.payload["y"]))
        self.session.player_position = position
        if not self.signs.is_displaying:
            self.hide_overlay_message()
            return
        if self.signs.player_walked_away(position):
            logger.info("Player walked away from NPC, closing message")
            self.signs.dismiss()
            self.bus.publish(EventTypes.UI_DIALOG_HIDE, {"type": "barter"})

    def _on_treasure_found(self, evt: Event) -> None:
        message = evt.payload.get("message")
        if message:
            self.add_message_to_log(str(message))

    def _on_zone_changed(self, evt: Event) -> None:
        self.show_region_notification(int(evt.payload["x"]), int(evt.payload["y"]))

    def _on_game_reset(self, evt: Event) -> None:
        self.reset()

    # Overlay
    def show_overlay_message(
        self,
        text: str,
        image_path: Optional[str] = None,
        is_persistent: bool = False,
        is_large_text: bool = False,
    ) -> bool:
        return self.overlay.show(text, image_path, is_persistent, is_large_text, MessageSource.GENERIC)

    def hide_overlay_message(self) -> bool:
        return self.overlay.hide(MessageSource.GENERIC)

    def on_overlay_pressed(self) -> None:
        """Pointer press on the overlay dismisses a sign message."""
        if self.overlay.is_showing() and self.signs.is_displaying:
            self.signs.dismiss()

    # Message log
    def add_message_to_log(self, message: str) -> Optional[str]:
        coordinates = self.message_log.add_message(message)
        if coordinates:
            self.show_overlay_message(self.config.log.coordinates_confirmation.format(coordinates=coordinates))
        return coordinates

    def open_log(self) -> None:
        self.session.pause()
        self.message_log.show()

    def close_log(self) -> None:
        self.message_log.close()

    # Notes and region banner
    def add_note_to_stack(self, text: str, image_path: Optional[str] = None, timeout_ms: Optional[int] = None) -> str:
        return self.notes.add_note(text, image_path, timeout_ms)

    def remove_note_from_stack(self, note_id: str) -> None:
        self.notes.remove_note(note_id)

    def show_region_notification(self, zone_x: int, zone_y: int) -> str:
        return self.region.show_region_notification(zone_x, zone_y)

    def reset(self) -> None:
        """Return the session and every display slot to a fresh-game state."""
        self.overlay.reset()
        self.signs.displaying = None
        self.region.clear()
        self.notes.clear()
        if self.message_log.is_open:
            self.message_log.close()
        self.session.reset()
        self.surface.set_text(self.config.slots.log_content, self.message_log.render())
        logger.info("Message display reset")

    def destroy(self) -> None:
        """Release every bus subscription and pending timer taken by this manager."""
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions = []
        self.sequencer.cancel_all()
        logger.debug("MessageManager destroyed")
