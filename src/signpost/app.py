from __future__ import annotations

import logging
from typing import Optional

from .config import load_ui_config
from .core.events import EventBus, EventTypes
from .core.loop import GameEngine, LoopConfig
from .core.scheduler import ManualScheduler
from .session import GameSession
from .ui.message_manager import MessageManager
from .ui.sources import NpcChatter
from .ui.stats import PlayerStats, StatsPanelPresenter
from .ui.surface import SlotSurface

logger = logging.getLogger(__name__)

STATS_SLOTS = ("hunger-progress", "thirst-progress", "hearts")
GUI_TICK_RATE = 60.0
HEADLESS_TICK_RATE = 10.0


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def run_headless(max_steps: Optional[int] = None, tick_rate: Optional[float] = None, config_path: Optional[str] = None) -> int:
    """Play a short scripted session against an in-memory surface.

    Each tick advances a virtual clock by 1/tick_rate seconds, so timers
    resolve deterministically and no wall time passes. The script is keyed by
    tick number; slot states are logged at the end.
    """
    if tick_rate is None:
        tick_rate = HEADLESS_TICK_RATE
    if tick_rate <= 0:
        raise ValueError("tick_rate must be positive")
    dt = 1.0 / tick_rate
    config = load_ui_config(config_path)
    scheduler = ManualScheduler()
    steps = max_steps if max_steps and max_steps > 0 else 40
    engine = GameEngine(LoopConfig(tick_rate=tick_rate, max_steps=steps), scheduler=scheduler)
    session = GameSession(engine=engine)
    bus = EventBus()
    surface = SlotSurface(list(config.slots.all()) + list(STATS_SLOTS))
    manager = MessageManager(session, bus, surface, scheduler, config)
    stats = StatsPanelPresenter(bus, surface)
    stats.start(PlayerStats())
    penne = NpcChatter(manager.overlay, "Penne", "Give me meat!", "assets/fauna/lion.png")

    script = {
        1: lambda: bus.publish(EventTypes.ZONE_CHANGED, {"x": 0, "y": 0}),
        3: lambda: bus.publish(EventTypes.TREASURE_FOUND, {"message": "You found a treasure map pointing at (5, -3)"}),
        8: lambda: penne.show_interaction(),
        10: lambda: manager.signs.display("Beware the woods beyond (3, 0).", npc_position=(4, 4)),
        12: lambda: penne.show_interaction(),
        14: lambda: bus.publish(EventTypes.PLAYER_MOVED, {"x": 7, "y": 4}),
        16: lambda: bus.publish(EventTypes.ZONE_CHANGED, {"x": 9, "y": -2}),
        18: lambda: bus.publish(EventTypes.PLAYER_STATS_CHANGED, {"hunger": 30, "thirst": 20}),
        20: lambda: manager.add_note_to_stack("Picked up a stick"),
        24: lambda: manager.open_log(),
        26: lambda: manager.close_log(),
    }

    engine.start()
    tick = 0
    while engine.running:
        tick += 1
        action = script.get(tick)
        if action is not None:
            action()
        engine.update(dt)
        if tick > steps * 4:
            logger.warning("Headless run did not finish in %d ticks; stopping", tick)
            engine.stop()

    logger.info("Headless session ended after %d ticks (%d ms virtual time)", tick, scheduler.now_ms)
    for slot_id, state in surface.slots.items():
        logger.info("slot %-20s visible=%-5s text=%r", slot_id, state.visible, state.text)
    logger.info("Log entries (newest first): %s", manager.message_log.newest_first())
    stats.stop()
    manager.destroy()
    return 0


def run_gui(max_steps: Optional[int] = None, tick_rate: Optional[float] = None, config_path: Optional[str] = None) -> int:
    """Run with an Arcade window if available, otherwise fall back to headless.

    Keys: R cycles region zones, S toggles a sign, N shows NPC chatter,
    L toggles the message log, T adds a treasure message.
    """
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(max_steps=max_steps, tick_rate=tick_rate, config_path=config_path)

    import arcade

    from .ui.arcade_adapters import ArcadeScheduler, ArcadeSurface

    config = load_ui_config(config_path)
    scheduler = ArcadeScheduler()
    engine = GameEngine(LoopConfig(tick_rate=tick_rate or GUI_TICK_RATE, max_steps=max_steps))
    session = GameSession(engine=engine)
    bus = EventBus()
    surface = ArcadeSurface(list(config.slots.all()) + list(STATS_SLOTS))
    manager = MessageManager(session, bus, surface, scheduler, config)
    penne = NpcChatter(manager.overlay, "Penne", "Give me meat!")

    class MessageWindow(arcade.Window):
        def __init__(self) -> None:
            super().__init__(800, 600, title="Signpost")
            self.background_color = arcade.color.BLACK
            self.zone = 0
            self.treasures = 0
            engine.start()

        def on_draw(self):
            self.clear()
            surface.draw()

        def on_update(self, delta_time: float):
            if engine.running:
                engine.update(delta_time)
            else:
                self.close()

        def on_key_press(self, symbol: int, modifiers: int):
            if symbol == arcade.key.ESCAPE:
                engine.stop()
                self.close()
            elif symbol == arcade.key.R:
                self.zone += 3
                bus.publish(EventTypes.ZONE_CHANGED, {"x": self.zone, "y": 0})
            elif symbol == arcade.key.S:
                manager.signs.toggle("Welcome home, traveller.")
            elif symbol == arcade.key.N:
                penne.show_interaction()
            elif symbol == arcade.key.T:
                self.treasures += 1
                manager.add_message_to_log(f"Treasure #{self.treasures} at ({self.treasures}, -{self.treasures})")
            elif symbol == arcade.key.L:
                if manager.message_log.is_open:
                    manager.close_log()
                else:
                    manager.open_log()

        def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
            manager.on_overlay_pressed()

    MessageWindow()
    try:
        arcade.run()
    finally:
        manager.destroy()
    return 0


def run_auto(max_steps: Optional[int] = None, tick_rate: Optional[float] = None, config_path: Optional[str] = None) -> int:
    if _arcade_available():
        return run_gui(max_steps=max_steps, tick_rate=tick_rate, config_path=config_path)
    return run_headless(max_steps=max_steps, tick_rate=tick_rate, config_path=config_path)
