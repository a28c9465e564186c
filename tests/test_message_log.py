import logging
from typing import List, Optional

from signpost.ui.message_log import LogEntry, MessageLogStore
from signpost.ui.surface import SlotSurface


def _store(entries: Optional[List[LogEntry]] = None, resume=None):
    surface = SlotSurface(["messageLogOverlay", "messageLogContent"])
    store = MessageLogStore(entries if entries is not None else [], surface, resume=resume)
    return store, surface


def test_add_message_returns_coordinates_and_highlights():
    store, _ = _store()
    assert store.add_message("You found wood at (3, -4)") == "(3, -4)"
    assert store.add_message("no coords here") is None

    entries = store.entries()
    assert len(entries) == 2
    assert '<span style="color: darkgreen">(3, -4)</span>' in entries[0].rendered_text
    assert entries[1].rendered_text == "no coords here"


def test_duplicate_message_stored_once_but_coordinates_still_returned():
    store, _ = _store()
    first = store.add_message("Treasure at (5, 3)")
    second = store.add_message("Treasure at (5, 3)")
    assert first == second == "(5, 3)"
    assert len(store) == 1


def test_entries_list_is_shared_with_owner():
    owned: List[LogEntry] = []
    store, _ = _store(owned)
    store.add_message("hello")
    assert owned == [LogEntry("hello")]
    owned.clear()
    assert len(store) == 0


def test_show_renders_newest_first_with_emphasis():
    store, surface = _store()
    for text in ["Welcome to the game!", "You found a treasure at (5, 3)", "Enemy defeated!"]:
        store.add_message(text)

    store.show()

    html = surface.text("messageLogContent")
    assert surface.is_visible("messageLogOverlay")
    assert html.index("Enemy defeated!") < html.index("treasure") < html.index("Welcome")
    assert html.count('<p style="font-variant: small-caps; font-weight: bold">') == 3
    assert store.newest_first()[0] == "Enemy defeated!"


def test_show_empty_log_placeholder():
    store, surface = _store()
    store.show()
    assert surface.text("messageLogContent") == "<p>No messages yet.</p>"


def test_markup_is_not_escaped():
    store, surface = _store()
    store.add_message("Message with <strong>bold</strong> text & <>")
    store.show()
    assert "Message with <strong>bold</strong> text & <>" in surface.text("messageLogContent")


def test_show_hide_leaves_entries_untouched():
    store, surface = _store()
    for i in range(5):
        store.add_message(f"msg {i} at ({i}, {-i})")
    before = store.entries()

    store.show()
    store.hide()

    assert store.entries() == before
    assert not surface.is_visible("messageLogOverlay")
    assert store.is_open is False


def test_show_refreshes_content_each_time():
    store, surface = _store()
    store.add_message("one")
    store.show()
    store.add_message("two")
    store.show()
    assert surface.text("messageLogContent").startswith('<p style="font-variant: small-caps; font-weight: bold">two')


def test_close_invokes_resume_once():
    calls = []
    store, surface = _store(resume=lambda: calls.append("resume"))
    store.show()
    store.close()
    assert calls == ["resume"]
    assert not surface.is_visible("messageLogOverlay")


def test_failing_resume_is_logged_not_raised(caplog):
    def boom():
        raise RuntimeError("loop gone")

    store, _ = _store(resume=boom)
    with caplog.at_level(logging.ERROR):
        store.close()
    assert "Resume callback failed" in caplog.text


def test_missing_slots_are_tolerated():
    store = MessageLogStore([], SlotSurface())
    store.add_message("x")
    store.show()
    store.close()
    assert len(store) == 1
