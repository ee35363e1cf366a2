from __future__ import annotations

import pytest

from homectl.core.notifications import (
    DisplaySlot,
    NotificationQueue,
    coerce_duration,
)
from homectl.errors import ValidationError


def test_drain_twice_returns_nothing_the_second_time(home):
    home.notify("Laundry is folded")
    home.notify("Door opened", "alert")

    first = home.drain_notifications()
    second = home.drain_notifications()

    assert [n.message for n in first] == ["Laundry is folded", "Door opened"]
    assert [n.severity for n in first] == ["info", "alert"]
    assert second == []


def test_ids_are_monotonic_across_drains(scheduler):
    queue = NotificationQueue(clock=scheduler.now)
    first = queue.notify("one")
    queue.drain()
    second = queue.notify("two")

    assert second.id > first.id
    assert second.timestamp == scheduler.now()


@pytest.mark.parametrize("severity", ["loud", None, ""])
def test_invalid_severity_defaults_to_info(severity):
    queue = NotificationQueue()
    assert queue.notify("hello", severity).severity == "info"


def test_buffer_keeps_most_recent_entries():
    queue = NotificationQueue(max_entries=50)
    for index in range(60):
        queue.notify(f"message {index}")

    items = queue.drain()

    assert len(items) == 50
    assert items[0].message == "message 10"
    assert items[-1].message == "message 59"


def test_notify_requires_message(home):
    with pytest.raises(ValidationError, match="message is required"):
        home.notify("")


def test_display_message_expires(scheduler):
    slot = DisplaySlot(clock=scheduler.now)
    slot.set("Dinner is ready", 1)

    assert slot.get().text == "Dinner is ready"

    scheduler.advance(2)
    assert slot.get() is None
    assert slot.get() is None


def test_display_message_is_overwritten(home, scheduler):
    home.set_display_message("first", 30)
    home.set_display_message("second")

    message = home.get_display_message()
    assert message.text == "second"
    assert message.duration == 10

    scheduler.advance(10)
    assert home.get_display_message() is not None
    scheduler.advance(0.5)
    assert home.get_display_message() is None


def test_display_message_requires_text(home):
    with pytest.raises(ValidationError, match="text is required"):
        home.set_display_message(None)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, 10), ("abc", 10), (0, 10), (-3, 10), (True, 10), ("5", 5), (2.5, 2.5)],
)
def test_coerce_duration(value, expected):
    assert coerce_duration(value, 10) == expected


def test_notify_rejects_non_string_message(home):
    with pytest.raises(ValidationError, match="Invalid message"):
        home.notify(5)

    assert home.drain_notifications() == []
