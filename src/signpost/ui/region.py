from __future__ import annotations

import logging
from typing import Optional, Sequence as Seq

from ..config.models import RegionBand, RegionConfig
from .sequencer import NotificationSequencer, Sequence
from .surface import PresentationSurface

logger = logging.getLogger(__name__)

DEFAULT_BANDS = RegionConfig().bands


def zone_distance(zone_x: int, zone_y: int) -> int:
    """Chebyshev distance of a zone from the origin zone."""
    return max(abs(zone_x), abs(zone_y))


def region_name(
    zone_x: int,
    zone_y: int,
    bands: Seq[RegionBand] = DEFAULT_BANDS,
    fallback: str = "Frontier",
) -> str:
    """Classify a zone into its region band.

    With the default bands: distance <= 2 is Home, <= 8 Woods, <= 16 Wilds,
    anything further is the Frontier.
    """
    distance = zone_distance(zone_x, zone_y)
    for band in bands:
        if distance <= band.max_distance:
            return band.name
    return fallback


class RegionNotifier:
    """Flashes the region banner when the player enters a zone.

    A second call before the banner hides replaces the text and restarts the
    hide timer; only the latest call's timer hides the banner.
    """

    def __init__(
        self,
        surface: PresentationSurface,
        sequencer: NotificationSequencer,
        *,
        slot_id: str = "regionNotification",
        config: Optional[RegionConfig] = None,
    ) -> None:
        self.surface = surface
        self.sequencer = sequencer
        self.slot_id = slot_id
        self.config = config or RegionConfig()
        self._pending: Optional[Sequence] = None
        self.current: Optional[str] = None

    @property
    def showing(self) -> bool:
        return self.current is not None

    def classify(self, zone_x: int, zone_y: int) -> str:
        return region_name(zone_x, zone_y, self.config.bands, self.config.fallback_name)

    def show_region_notification(self, zone_x: int, zone_y: int) -> str:
        name = self.classify(zone_x, zone_y)
        if self._pending is not None:
            self._pending.cancel()

        self.current = name
        self.surface.set_text(self.slot_id, name)
        self.surface.set_style(self.slot_id, {"pointer_events": "none"})
        self.surface.set_visible(self.slot_id, True)
        logger.info("Entered region %s at zone (%d, %d)", name, zone_x, zone_y)

        seq = self.sequencer.create_sequence()
        self._pending = seq
        seq.wait(self.config.hide_delay_ms).then(lambda: self._hide(seq)).start()
        return name

    def _hide(self, seq: Sequence) -> None:
        if seq is not self._pending:
            return
        self._pending = None
        self.current = None
        self.surface.set_visible(self.slot_id, False)
        self.surface.set_style(self.slot_id, {"pointer_events": "auto"})

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def clear(self) -> None:
        """Cancel the pending hide and take the banner down now."""
        self.cancel()
        self.current = None
        self.surface.set_visible(self.slot_id, False)
        self.surface.set_style(self.slot_id, {"pointer_events": "auto"})
