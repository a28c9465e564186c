from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Mapping, MutableSequence, Optional

from ..config.models import LogConfig, SlotIds
from .coordinates import extract_coordinates
from .surface import PresentationSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEntry:
    """A stored log line; rendered_text already carries coordinate highlight markup."""

    rendered_text: str


def _css(style: Mapping[str, str]) -> str:
    return "; ".join(f"{k.replace('_', '-')}: {v}" for k, v in style.items())


class MessageLogStore:
    """Append-only, de-duplicating scrollback of messages for one session.

    - Entries are kept in insertion order; the view shows newest first.
    - Identical rendered text is stored once.
    - Closing the view hands control back to the session through ``resume``.

    The entries sequence is owned by the session and passed in by reference, so
    a session reset that clears it is seen here too.
    """

    def __init__(
        self,
        entries: MutableSequence[LogEntry],
        surface: PresentationSurface,
        *,
        config: Optional[LogConfig] = None,
        slots: Optional[SlotIds] = None,
        resume: Optional[Callable[[], None]] = None,
    ) -> None:
        self._entries = entries
        self.surface = surface
        self.config = config or LogConfig()
        self.slots = slots or SlotIds()
        self._resume = resume
        self._open = False

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_open(self) -> bool:
        return self._open

    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def newest_first(self) -> List[str]:
        return [e.rendered_text for e in reversed(self._entries)]

    def add_message(self, text: str) -> Optional[str]:
        """Store a message and return the first coordinate pair found in it.

        Every coordinate pair is highlighted before the duplicate check; a
        message whose highlighted form is already stored is dropped, but its
        coordinates are still returned.
        """
        rendered, coordinates = extract_coordinates(text, self.config.highlight_template)
        entry = LogEntry(rendered)
        if entry in self._entries:
            logger.debug("Duplicate log message dropped: %r", text)
        else:
            self._entries.append(entry)
            logger.debug("Log message stored (count=%d)", len(self._entries))
        return coordinates

    def render(self) -> str:
        if not self._entries:
            return f"<p>{self.config.empty_placeholder}</p>"
        style = _css(self.config.line_style)
        # Entries are trusted markup; no escaping.
        return "".join(f'<p style="{style}">{line}</p>' for line in self.newest_first())

    def show(self) -> None:
        self.surface.set_text(self.slots.log_content, self.render())
        self.surface.set_visible(self.slots.log_overlay, True)
        self._open = True
        logger.info("Message log opened (%d entries)", len(self._entries))

    def hide(self) -> None:
        self.surface.set_visible(self.slots.log_overlay, False)
        self._open = False

    def close(self) -> None:
        """Hide the view and resume the caller's loop."""
        self.hide()
        logger.info("Message log closed")
        if self._resume is None:
            return
        try:
            self._resume()
        except Exception:
            logger.exception("Resume callback failed after closing message log")
