from __future__ import annotations

from signpost.core.loop import GameEngine, LoopConfig
from signpost.core.scheduler import ManualScheduler


def test_engine_runs_exact_steps():
    engine = GameEngine(LoopConfig(tick_rate=0, max_steps=5))
    engine.run()
    assert engine.step == 5
    assert engine.running is False


def test_paused_engine_skips_steps_but_advances_timers():
    sched = ManualScheduler()
    fired = []
    sched.after(250, lambda: fired.append(sched.now_ms))
    engine = GameEngine(LoopConfig(tick_rate=0, max_steps=10), scheduler=sched)
    engine.start()
    engine.update(0.1)
    engine.pause()
    engine.update(0.1)
    engine.update(0.1)
    assert engine.step == 1
    assert fired == [250]

    engine.resume()
    engine.update(0.1)
    assert engine.step == 2
    assert sched.now_ms == 400


def test_update_ignored_when_stopped():
    sched = ManualScheduler()
    engine = GameEngine(LoopConfig(tick_rate=0, max_steps=2), scheduler=sched)
    engine.update(1.0)
    assert engine.step == 0
    assert sched.now_ms == 0
