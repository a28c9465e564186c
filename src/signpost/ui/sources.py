from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .overlay import MessageSource, OverlayArbiter

logger = logging.getLogger(__name__)

Point = Tuple[int, int]

SIGN_IMAGE = "assets/environment/doodads/sign.png"


@dataclass(frozen=True)
class SignMessage:
    text: str
    image_path: Optional[str] = SIGN_IMAGE
    npc_position: Optional[Point] = None


class SignBoard:
    """Exclusive overlay source for signs, statues and NPC dialogue boxes.

    Sign messages stay up until dismissed and block every other overlay source
    while shown.
    """

    def __init__(self, arbiter: OverlayArbiter) -> None:
        self.arbiter = arbiter
        self.displaying: Optional[SignMessage] = None

    @property
    def is_displaying(self) -> bool:
        return self.displaying is not None

    def toggle(self, text: str, image_path: Optional[str] = SIGN_IMAGE, player_adjacent: bool = True,
               npc_position: Optional[Point] = None) -> bool:
        """Handle a click on a sign: show it, or hide it if it is already up.

        Returns True when the sign ends up displayed.
        """
        if not player_adjacent:
            return self.is_displaying
        if self.displaying is not None and self.displaying.text == text:
            self.dismiss()
            return False
        if self.displaying is not None:
            self.dismiss()
        return self.display(text, image_path, npc_position=npc_position)

    def display(self, text: str, image_path: Optional[str] = SIGN_IMAGE, *, name: Optional[str] = None,
                npc_position: Optional[Point] = None) -> bool:
        body = f'<span class="character-name">{name}</span><br>{text}' if name else text
        if not self.arbiter.show(body, image_path, True, False, MessageSource.SIGN):
            return False
        self.displaying = SignMessage(text=text, image_path=image_path, npc_position=npc_position)
        logger.debug("Sign message shown: %r", text)
        return True

    def dismiss(self) -> bool:
        if self.displaying is None:
            return False
        hidden = self.arbiter.hide(MessageSource.SIGN)
        if hidden:
            self.displaying = None
        return hidden

    def player_walked_away(self, player: Point) -> bool:
        """True when a tracked NPC is no longer within one tile of ``player``."""
        if self.displaying is None or self.displaying.npc_position is None:
            return False
        nx, ny = self.displaying.npc_position
        return max(abs(player[0] - nx), abs(player[1] - ny)) > 1


class NpcChatter:
    """Proximity line for one NPC, shown while the player stands next to it.

    Chatter never displaces a sign message; between NPCs the latest caller wins,
    so whichever NPC the player approached last is the one shown.
    """

    def __init__(self, arbiter: OverlayArbiter, name: str, line: str, portrait: Optional[str] = None) -> None:
        self.arbiter = arbiter
        self.name = name
        self.line = line
        self.portrait = portrait

    @property
    def text(self) -> str:
        return f'<span class="character-name">{self.name}</span><br>{self.line}'

    def show_interaction(self) -> bool:
        return self.arbiter.show(self.text, self.portrait, False, False, MessageSource.NPC)

    def hide_interaction(self) -> bool:
        return self.arbiter.hide(MessageSource.NPC)
