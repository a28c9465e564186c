import logging

import pytest

from signpost.core.events import EventBus, EventTypes


def test_publish_in_registration_order():
    bus = EventBus()
    seen = []
    bus.subscribe(EventTypes.GAME_RESET, lambda e: seen.append(("a", e.payload)))
    bus.subscribe(EventTypes.GAME_RESET, lambda e: seen.append(("b", e.payload)))
    bus.publish(EventTypes.GAME_RESET, {"seed": 1})
    assert seen == [("a", {"seed": 1}), ("b", {"seed": 1})]


def test_failing_subscriber_is_isolated(caplog):
    bus = EventBus()
    seen = []

    def broken(_e):
        raise ValueError("nope")

    bus.subscribe(EventTypes.PLAYER_MOVED, broken)
    bus.subscribe(EventTypes.PLAYER_MOVED, lambda e: seen.append(e.name))
    with caplog.at_level(logging.ERROR):
        bus.publish(EventTypes.PLAYER_MOVED, {"x": 0, "y": 0})
    assert seen == [EventTypes.PLAYER_MOVED]
    assert "player:moved" in caplog.text


def test_subscription_cancel_is_idempotent():
    bus = EventBus()
    seen = []
    sub = bus.subscribe(EventTypes.ZONE_CHANGED, lambda e: seen.append(1))
    assert sub.active
    sub.cancel()
    sub()
    assert not sub.active
    bus.publish(EventTypes.ZONE_CHANGED)
    assert seen == []
    assert bus.subscriber_count() == 0


def test_unsubscribe_during_publish_uses_snapshot():
    bus = EventBus()
    seen = []
    subs = []

    def first(_e):
        seen.append("first")
        subs[1].cancel()

    subs.append(bus.subscribe("t", first))
    subs.append(bus.subscribe("t", lambda e: seen.append("second")))
    bus.publish("t")
    bus.publish("t")
    assert seen == ["first", "second", "first"]


def test_subscribe_requires_callable():
    with pytest.raises(TypeError):
        EventBus().subscribe("t", "not callable")  # type: ignore[arg-type]
