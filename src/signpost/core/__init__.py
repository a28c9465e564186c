from .events import Event, EventBus, EventTypes, Subscription
from .loop import GameEngine, LoopConfig
from .scheduler import ManualScheduler, Scheduler

__all__ = [
    "Event",
    "EventBus",
    "EventTypes",
    "GameEngine",
    "LoopConfig",
    "ManualScheduler",
    "Scheduler",
    "Subscription",
]
