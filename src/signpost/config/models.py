from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class OverlayConfig(BaseModel):
    """Shared overlay slot behaviour."""

    auto_hide_ms: int = Field(2000, ge=0, description="Delay before a non-persistent overlay hides itself")
    empty_placeholder: str = Field(
        "[No message found for this note]",
        description="Text shown when a caller asks to display an empty message",
    )


class RegionBand(BaseModel):
    """A named band of zones whose Chebyshev distance from the origin is <= max_distance."""

    max_distance: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)


class RegionConfig(BaseModel):
    hide_delay_ms: int = Field(2000, ge=0)
    bands: List[RegionBand] = Field(
        default_factory=lambda: [
            RegionBand(max_distance=2, name="Home"),
            RegionBand(max_distance=8, name="Woods"),
            RegionBand(max_distance=16, name="Wilds"),
        ]
    )
    fallback_name: str = "Frontier"

    @field_validator("bands")
    @classmethod
    def bands_strictly_ascending(cls, v: List[RegionBand]) -> List[RegionBand]:
        limits = [b.max_distance for b in v]
        if any(a >= b for a, b in zip(limits, limits[1:])):
            raise ValueError("region bands must have strictly ascending max_distance")
        return list(v)


class LogConfig(BaseModel):
    empty_placeholder: str = "No messages yet."
    highlight_template: str = '<span style="color: darkgreen">{match}</span>'
    coordinates_confirmation: str = "Coordinates {coordinates} added to log."
    line_style: Dict[str, str] = Field(
        default_factory=lambda: {"font_variant": "small-caps", "font_weight": "bold"}
    )

    @field_validator("highlight_template")
    @classmethod
    def template_has_match(cls, v: str) -> str:
        if "{match}" not in v:
            raise ValueError("highlight_template must contain '{match}'")
        return v


class NoteConfig(BaseModel):
    default_timeout_ms: int = Field(2000, ge=0)
    removal_delay_ms: int = Field(260, ge=0, description="Exit transition before a note is dropped")


class SlotIds(BaseModel):
    """Presentation slot keys the UI components write to."""

    overlay: str = "messageOverlay"
    log_overlay: str = "messageLogOverlay"
    log_content: str = "messageLogContent"
    region: str = "regionNotification"
    notes: str = "noteStack"

    def all(self) -> List[str]:
        return [self.overlay, self.log_overlay, self.log_content, self.region, self.notes]


class UIConfig(BaseModel):
    """Top-level UI configuration, normally loaded from YAML."""

    overlay: OverlayConfig = Field(default_factory=OverlayConfig)
    region: RegionConfig = Field(default_factory=RegionConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    notes: NoteConfig = Field(default_factory=NoteConfig)
    slots: SlotIds = Field(default_factory=SlotIds)
