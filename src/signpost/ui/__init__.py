from .coordinates import extract_coordinates
from .message_log import LogEntry, MessageLogStore
from .message_manager import MessageManager
from .notes import NoteStack
from .overlay import MessageSource, OverlayArbiter, OverlaySlot
from .region import RegionNotifier, region_name
from .sequencer import JobState, NotificationSequencer, Sequence
from .sources import NpcChatter, SignBoard
from .stats import PlayerStats, StatsPanelPresenter
from .surface import PresentationSurface, SlotSurface

__all__ = [
    "JobState",
    "LogEntry",
    "MessageLogStore",
    "MessageManager",
    "MessageSource",
    "NoteStack",
    "NotificationSequencer",
    "NpcChatter",
    "OverlayArbiter",
    "OverlaySlot",
    "PlayerStats",
    "PresentationSurface",
    "RegionNotifier",
    "Sequence",
    "SignBoard",
    "SlotSurface",
    "StatsPanelPresenter",
    "extract_coordinates",
    "region_name",
]
