from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.events import Event, EventBus, EventTypes, Subscription
from .surface import PresentationSurface


@dataclass(frozen=True)
class PlayerStats:
    hunger: int = 50
    thirst: int = 50
    health: int = 3
    max_stat: int = 50


@dataclass
class StatsPanelPresenter:
    """Presenter that listens to player stat changes and updates the stats panel.

    Every subscription taken in start() is released by stop().
    """

    bus: EventBus
    surface: PresentationSurface
    hunger_slot: str = "hunger-progress"
    thirst_slot: str = "thirst-progress"
    hearts_slot: str = "hearts"
    _current: Optional[PlayerStats] = None
    _subscriptions: List[Subscription] = field(default_factory=list)

    @property
    def current(self) -> Optional[PlayerStats]:
        return self._current

    def start(self, initial: PlayerStats) -> None:
        self._push(initial)
        self._subscriptions.append(self.bus.subscribe(EventTypes.PLAYER_STATS_CHANGED, self._on_stats_changed))

    def stop(self) -> None:
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()

    def _on_stats_changed(self, evt: Event) -> None:
        base = self._current or PlayerStats()
        stats = PlayerStats(
            hunger=int(evt.payload.get("hunger", base.hunger)),
            thirst=int(evt.payload.get("thirst", base.thirst)),
            health=int(evt.payload.get("health", base.health)),
            max_stat=base.max_stat,
        )
        self._push(stats)
        self.bus.publish(EventTypes.UI_UPDATE_STATS, {})

    def _push(self, stats: PlayerStats) -> None:
        self._current = stats
        self.surface.set_style(self.hunger_slot, {"width": f"{_percent(stats.hunger, stats.max_stat)}%"})
        self.surface.set_style(self.thirst_slot, {"width": f"{_percent(stats.thirst, stats.max_stat)}%"})
        self.surface.set_text(self.hearts_slot, "♥" * max(0, stats.health))


def _percent(value: int, maximum: int) -> int:
    if maximum <= 0:
        return 0
    return max(0, min(100, round(value * 100 / maximum)))
