from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..config.models import NoteConfig
from .sequencer import NotificationSequencer, Sequence
from .surface import PresentationSurface

logger = logging.getLogger(__name__)


@dataclass
class Note:
    note_id: str
    text: str
    image_path: Optional[str] = None
    leaving: bool = False


class NoteStack:
    """Stack of small auto-expiring note cards, newest on top.

    Each card lives for its timeout, then spends ``removal_delay_ms`` in a
    leaving state (exit transition) before it is dropped.
    """

    def __init__(
        self,
        surface: PresentationSurface,
        sequencer: NotificationSequencer,
        *,
        slot_id: str = "noteStack",
        config: Optional[NoteConfig] = None,
    ) -> None:
        self.surface = surface
        self.sequencer = sequencer
        self.slot_id = slot_id
        self.config = config or NoteConfig()
        self._notes: List[Note] = []
        self._timers: Dict[str, Sequence] = {}
        self._counter = 0

    def notes(self) -> List[Note]:
        return list(self._notes)

    def active_count(self) -> int:
        return len(self._notes)

    def get(self, note_id: str) -> Optional[Note]:
        for note in self._notes:
            if note.note_id == note_id:
                return note
        return None

    def add_note(self, text: str, image_path: Optional[str] = None, timeout_ms: Optional[int] = None) -> str:
        self._counter += 1
        note = Note(note_id=f"note-{self._counter}", text=text, image_path=image_path)
        self._notes.insert(0, note)
        timeout = self.config.default_timeout_ms if timeout_ms is None else max(0, int(timeout_ms))
        self._timers[note.note_id] = (
            self.sequencer.create_sequence().wait(timeout).then(lambda: self._expire(note.note_id)).start()
        )
        self._render()
        logger.debug("Note %s added (timeout=%dms)", note.note_id, timeout)
        return note.note_id

    def remove_note(self, note_id: str) -> None:
        """Start the exit transition for a note; unknown or leaving notes are ignored."""
        note = self.get(note_id)
        if note is None or note.leaving:
            return
        timer = self._timers.pop(note_id, None)
        if timer is not None:
            timer.cancel()
        note.leaving = True
        self._render()
        self._timers[note_id] = (
            self.sequencer.create_sequence()
            .wait(self.config.removal_delay_ms)
            .then(lambda: self._drop(note_id))
            .start()
        )

    def _expire(self, note_id: str) -> None:
        self._timers.pop(note_id, None)
        self.remove_note(note_id)

    def clear(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._notes.clear()
        self._render()

    def _drop(self, note_id: str) -> None:
        self._timers.pop(note_id, None)
        self._notes = [n for n in self._notes if n.note_id != note_id]
        self._render()
        logger.debug("Note %s removed", note_id)

    def _render(self) -> None:
        cards = []
        for note in self._notes:
            classes = "note-card" if note.leaving else "note-card show"
            thumb = f'<img class="note-thumb" src="{note.image_path}" alt="">' if note.image_path else ""
            cards.append(f'<div class="{classes}" id="{note.note_id}">{thumb}<div class="note-text">{note.text}</div></div>')
        self.surface.set_text(self.slot_id, "".join(cards))
        self.surface.set_visible(self.slot_id, bool(self._notes))
