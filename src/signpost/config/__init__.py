from .loader import CONFIG_ENV_VAR, load_ui_config
from .models import LogConfig, NoteConfig, OverlayConfig, RegionBand, RegionConfig, SlotIds, UIConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "LogConfig",
    "NoteConfig",
    "OverlayConfig",
    "RegionBand",
    "RegionConfig",
    "SlotIds",
    "UIConfig",
    "load_ui_config",
]
