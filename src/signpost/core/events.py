import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventTypes:
    """Topic names published on the session event bus."""

    UI_SHOW_MESSAGE = "ui:show-message"
    UI_DIALOG_HIDE = "ui:dialog-hide"
    UI_UPDATE_STATS = "ui:update-stats"
    PLAYER_MOVED = "player:moved"
    PLAYER_STATS_CHANGED = "player:stats-changed"
    ZONE_CHANGED = "zone:changed"
    TREASURE_FOUND = "treasure:found"
    GAME_RESET = "game:reset"


@dataclass(frozen=True)
class Event:
    """Event container delivered to subscribers.

    Attributes:
        name: Topic the event was published on, typically from EventTypes.
        payload: Arbitrary payload associated with the event.
    """
    name: str
    payload: Dict[str, Any]


Callback = Callable[[Event], None]


class Subscription:
    """Handle returned by EventBus.subscribe; cancel() releases the callback once."""

    def __init__(self, bus: "EventBus", event_name: str, callback: Callback) -> None:
        self._bus: Optional[EventBus] = bus
        self.event_name = event_name
        self.callback = callback

    @property
    def active(self) -> bool:
        return self._bus is not None

    def cancel(self) -> None:
        bus, self._bus = self._bus, None
        if bus is not None:
            bus.unsubscribe(self.event_name, self.callback)

    def __call__(self) -> None:
        self.cancel()


class EventBus:
    """A lightweight publish/subscribe event bus.

    Subscribers register callbacks for a topic. When an event is published, all
    callbacks registered for that topic are invoked in registration order. A
    subscriber that raises is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[Callback]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callback) -> Subscription:
        """Subscribe a callback for a given topic.

        Args:
            event_name: The topic to listen for.
            callback: A function accepting a single Event argument.

        Returns:
            A Subscription whose cancel() removes the callback again.
        """
        if not callable(callback):
            raise TypeError("callback must be callable")
        self._subs[event_name].append(callback)
        logger.debug("Subscribed %s to '%s'", getattr(callback, "__name__", str(callback)), event_name)
        return Subscription(self, event_name, callback)

    def unsubscribe(self, event_name: str, callback: Callback) -> None:
        if event_name in self._subs and callback in self._subs[event_name]:
            self._subs[event_name].remove(callback)
            if not self._subs[event_name]:
                del self._subs[event_name]
            logger.debug("Unsubscribed %s from '%s'", getattr(callback, "__name__", str(callback)), event_name)

    def publish(self, event_name: str, payload: Optional[Dict[str, Any]] = None) -> None:
        event = Event(name=event_name, payload=dict(payload or {}))
        subs = list(self._subs.get(event_name, []))
        logger.debug("Publishing event '%s' to %d subscribers with payload: %s", event_name, len(subs), event.payload)
        for cb in subs:
            try:
                cb(event)
            except Exception:
                logger.exception("Unhandled exception in event subscriber for '%s'", event_name)

    def subscriber_count(self, event_name: Optional[str] = None) -> int:
        if event_name is not None:
            return len(self._subs.get(event_name, []))
        return sum(len(v) for v in self._subs.values())

    def clear(self) -> None:
        self._subs.clear()
