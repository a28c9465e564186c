import logging

import pytest

from signpost.core.scheduler import ManualScheduler


def test_timers_fire_in_due_order_with_call_order_tiebreak():
    sched = ManualScheduler()
    fired = []
    sched.after(200, lambda: fired.append("b"))
    sched.after(100, lambda: fired.append("a1"))
    sched.after(100, lambda: fired.append("a2"))

    assert sched.advance(99) == 0
    assert sched.advance(1) == 2
    assert fired == ["a1", "a2"]
    sched.advance(100)
    assert fired == ["a1", "a2", "b"]
    assert sched.now_ms == 200


def test_cancelled_timer_never_fires():
    sched = ManualScheduler()
    fired = []
    handle = sched.after(50, lambda: fired.append(1))
    sched.cancel(handle)
    sched.cancel(handle)
    sched.cancel(object())
    sched.advance(1000)
    assert fired == []
    assert sched.pending_count() == 0


def test_timers_armed_inside_callback_fire_within_window():
    sched = ManualScheduler()
    fired = []

    def first():
        fired.append(("first", sched.now_ms))
        sched.after(30, lambda: fired.append(("second", sched.now_ms)))

    sched.after(10, first)
    sched.advance(100)
    assert fired == [("first", 10), ("second", 40)]


def test_failing_callback_is_logged_and_others_still_run(caplog):
    sched = ManualScheduler()
    fired = []

    def boom():
        raise RuntimeError("bad timer")

    sched.after(10, boom)
    sched.after(10, lambda: fired.append("ok"))
    with caplog.at_level(logging.ERROR):
        sched.advance(10)
    assert fired == ["ok"]
    assert "Scheduled callback failed" in caplog.text


def test_negative_advance_rejected():
    with pytest.raises(ValueError):
        ManualScheduler().advance(-1)
