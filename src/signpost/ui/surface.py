from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)


class PresentationSurface(Protocol):
    """Key-addressed sink the UI components write to. Allows decoupling from Arcade in tests.

    Implementations must tolerate unknown slot ids by ignoring the call.
    """

    def set_text(self, slot_id: str, text: str) -> None:
        ...

    def set_visible(self, slot_id: str, visible: bool) -> None:
        ...

    def set_style(self, slot_id: str, props: Mapping[str, Any]) -> None:
        ...


@dataclass
class SlotState:
    text: str = ""
    visible: bool = False
    style: Dict[str, Any] = field(default_factory=dict)


class SlotSurface:
    """In-memory presentation surface holding one SlotState per registered slot.

    Writes to slots that were never registered are dropped, mirroring a page
    where the element is simply absent.
    """

    def __init__(self, slot_ids: Iterable[str] = ()) -> None:
        self._slots: Dict[str, SlotState] = {sid: SlotState() for sid in slot_ids}

    def add_slot(self, slot_id: str) -> SlotState:
        return self._slots.setdefault(slot_id, SlotState())

    def remove_slot(self, slot_id: str) -> None:
        self._slots.pop(slot_id, None)

    def slot(self, slot_id: str) -> Optional[SlotState]:
        return self._slots.get(slot_id)

    @property
    def slots(self) -> Mapping[str, SlotState]:
        return self._slots

    def _lookup(self, slot_id: str, op: str) -> Optional[SlotState]:
        state = self._slots.get(slot_id)
        if state is None:
            logger.debug("%s ignored: slot '%s' is not present", op, slot_id)
        return state

    def set_text(self, slot_id: str, text: str) -> None:
        state = self._lookup(slot_id, "set_text")
        if state is not None:
            state.text = text

    def set_visible(self, slot_id: str, visible: bool) -> None:
        state = self._lookup(slot_id, "set_visible")
        if state is not None:
            state.visible = bool(visible)

    def set_style(self, slot_id: str, props: Mapping[str, Any]) -> None:
        state = self._lookup(slot_id, "set_style")
        if state is not None:
            state.style.update(props)

    def text(self, slot_id: str) -> Optional[str]:
        state = self._slots.get(slot_id)
        return None if state is None else state.text

    def is_visible(self, slot_id: str) -> bool:
        state = self._slots.get(slot_id)
        return bool(state and state.visible)
