import logging

import pytest

from signpost.core.scheduler import ManualScheduler
from signpost.ui.overlay import MessageSource, OverlayArbiter, OverlaySlot
from signpost.ui.sequencer import NotificationSequencer
from signpost.ui.surface import SlotSurface

SIGN, NPC, GENERIC = MessageSource.SIGN, MessageSource.NPC, MessageSource.GENERIC


def _arbiter(hold=None):
    sched = ManualScheduler()
    surface = SlotSurface(["messageOverlay"])
    slot = OverlaySlot()
    arbiter = OverlayArbiter(slot, surface, NotificationSequencer(sched), hold=hold)
    return arbiter, slot, surface, sched


def test_sign_is_exclusive_and_sticky():
    arbiter, slot, surface, _ = _arbiter()
    assert arbiter.show("Beware of the woods", "sign.png", False, False, SIGN)

    assert arbiter.show("Give me meat!", None, False, False, NPC) is False
    assert slot.displayed_text == "Beware of the woods"
    assert slot.active_source is SIGN

    assert arbiter.hide(NPC) is False
    assert arbiter.hide(GENERIC) is False
    assert arbiter.is_showing()

    assert arbiter.hide(SIGN) is True
    assert not arbiter.is_showing()
    assert slot.displayed_text is None
    assert not surface.is_visible("messageOverlay")


def test_sign_can_replace_sign():
    arbiter, slot, _, _ = _arbiter()
    arbiter.show("first", None, True, False, SIGN)
    assert arbiter.show("second", None, True, False, SIGN)
    assert slot.displayed_text == "second"


def test_non_sign_sources_override_each_other():
    arbiter, slot, surface, _ = _arbiter()
    assert arbiter.show("t1", None, False, False, NPC)
    assert arbiter.show("t2", None, False, False, GENERIC)
    assert slot.displayed_text == "t2"
    assert slot.active_source is GENERIC
    assert surface.text("messageOverlay") == "t2"

    assert arbiter.show("t3", None, False, False, NPC)
    assert slot.displayed_text == "t3"


def test_any_non_sign_source_may_hide_cooperative_message():
    arbiter, slot, _, _ = _arbiter()
    arbiter.show("npc line", None, True, False, NPC)
    assert arbiter.hide(GENERIC) is True
    assert slot.active_source is MessageSource.NONE


def test_hide_on_empty_slot_is_noop():
    arbiter, _, _, _ = _arbiter()
    assert arbiter.hide(GENERIC) is False
    assert arbiter.hide(SIGN) is False


def test_surface_receives_text_image_and_size():
    arbiter, _, surface, _ = _arbiter()
    arbiter.show("Found a bow", "assets/items/bow.png", True, True, GENERIC)
    state = surface.slot("messageOverlay")
    assert state.visible
    assert state.text == "Found a bow"
    assert state.style == {"image": "assets/items/bow.png", "large_text": True}


def test_non_persistent_message_auto_hides_after_delay():
    arbiter, _, surface, sched = _arbiter()
    arbiter.show("toast", None, False, False, GENERIC)
    sched.advance(1999)
    assert arbiter.is_showing()
    sched.advance(1)
    assert not arbiter.is_showing()
    assert not surface.is_visible("messageOverlay")


def test_persistent_message_stays():
    arbiter, _, _, sched = _arbiter()
    arbiter.show("stay", None, True, False, NPC)
    sched.advance(60_000)
    assert arbiter.is_showing()


def test_newer_show_restarts_auto_hide():
    arbiter, slot, _, sched = _arbiter()
    arbiter.show("t1", None, False, False, NPC)
    sched.advance(1500)
    arbiter.show("t2", None, False, False, GENERIC)
    sched.advance(1000)
    assert slot.displayed_text == "t2"
    sched.advance(1000)
    assert not arbiter.is_showing()


def test_stale_auto_hide_does_not_clear_persistent_replacement():
    arbiter, slot, _, sched = _arbiter()
    arbiter.show("toast", None, False, False, GENERIC)
    sched.advance(500)
    arbiter.show("dialogue", None, True, False, NPC)
    sched.advance(5000)
    assert slot.displayed_text == "dialogue"


def test_auto_hidden_sign_cannot_be_cleared_by_npc_but_expires():
    arbiter, _, _, sched = _arbiter()
    arbiter.show("sign", None, False, False, SIGN)
    arbiter.hide(NPC)
    sched.advance(2000)
    assert not arbiter.is_showing()


def test_empty_text_uses_placeholder(caplog):
    arbiter, slot, _, _ = _arbiter()
    with caplog.at_level(logging.WARNING):
        arbiter.show("   ", None, True, False, GENERIC)
    assert slot.displayed_text == "[No message found for this note]"
    assert "empty" in caplog.text


def test_pending_confirmation_holds_overlay():
    pending = {"value": True}
    arbiter, _, _, sched = _arbiter(hold=lambda: pending["value"])
    arbiter.show("Confirm charge?", None, False, False, GENERIC)
    assert arbiter.hide(GENERIC) is False
    sched.advance(5000)
    assert arbiter.is_showing()

    pending["value"] = False
    assert arbiter.hide(GENERIC) is True


def test_show_requires_concrete_source():
    arbiter, _, _, _ = _arbiter()
    with pytest.raises(ValueError):
        arbiter.show("x", source=MessageSource.NONE)


def test_slot_invariant_holds_through_sequence_of_calls():
    arbiter, slot, _, sched = _arbiter()
    calls = [
        lambda: arbiter.show("a", None, False, False, NPC),
        lambda: arbiter.show("b", None, True, False, SIGN),
        lambda: arbiter.hide(NPC),
        lambda: sched.advance(3000),
        lambda: arbiter.hide(SIGN),
        lambda: arbiter.show("c", None, False, False, GENERIC),
        lambda: sched.advance(3000),
    ]
    for call in calls:
        call()
        assert (slot.active_source is MessageSource.NONE) == (slot.displayed_text is None)


def test_sign_hide_leaves_cooperative_message():
    arbiter, slot, _, _ = _arbiter()
    arbiter.show("npc line", None, True, False, NPC)
    assert arbiter.hide(SIGN) is False
    assert slot.displayed_text == "npc line"


def test_reset_ignores_owner_and_hold_and_disarms_timer():
    arbiter, slot, surface, sched = _arbiter(hold=lambda: True)
    arbiter.show("sign", None, True, False, SIGN)
    arbiter.reset()
    assert not slot.occupied
    assert not surface.is_visible("messageOverlay")

    arbiter, slot, surface, sched = _arbiter()
    arbiter.show("short", None, False, False, GENERIC)
    arbiter.reset()
    assert arbiter.sequencer.active_count() == 0
