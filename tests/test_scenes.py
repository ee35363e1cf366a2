from __future__ import annotations

from homectl.config import ScenesConfig, Settings
from homectl.context import HomeContext


def three_rooms() -> dict:
    room = {
        "light": {"status": "on", "brightness": 70},
        "tv": {"status": "on", "volume": 12},
        "doorlock": {"status": "unlocked"},
    }
    return {"rooms": {name: dict(room) for name in ("hall", "study", "den")}}


def test_leave_home_switches_everything_off(home, database):
    database.save("appliances", three_rooms())

    state = home.leave_home()

    for devices in state.rooms.values():
        assert devices["light"].status == "off"
        assert devices["light"].brightness == 0
        assert devices["tv"].status == "off"
        assert devices["doorlock"].status == "locked"
    assert database.load_home().to_document() == state.to_document()
    assert len(home.drain_notifications()) == 1


def test_leave_home_covers_every_switchable_kind(home):
    home.apply_action("living room", "aircon", "on")
    home.apply_action("living room", "airpurifier", "auto")
    home.apply_action("bedroom", "fan", "on")

    state = home.leave_home()

    assert state.device("living room", "aircon").status == "off"
    assert state.device("living room", "airpurifier").status == "off"
    assert state.device("bedroom", "fan").status == "off"


def test_leave_home_keeps_appliance_cycles_running(home, scheduler):
    home.apply_action("utility room", "washer", "start", {"course": "급속"})

    state = home.leave_home()

    assert state.device("utility room", "washer").status == "running"
    assert ("utility room", "washer") in home.timers
    scheduler.advance(120)
    assert home.get_rooms().device("utility room", "washer").status == "done"


def test_arrive_home(home):
    state = home.arrive_home()

    assert state.device("living room", "light").status == "on"
    assert state.device("living room", "light").brightness == 80
    assert state.device("living room", "airpurifier").status == "auto"
    assert state.device("entryway", "doorlock").status == "unlocked"
    assert [n.severity for n in home.drain_notifications()] == ["info"]


def test_arrive_home_without_entryway(home, database):
    database.save(
        "appliances",
        {
            "rooms": {
                "living room": {
                    "light": {"status": "off", "brightness": 0},
                    "airpurifier": {"status": "off"},
                }
            }
        },
    )

    state = home.arrive_home()

    assert state.device("living room", "light").status == "on"
    assert state.device("living room", "airpurifier").status == "auto"
    assert list(state.rooms) == ["living room"]


def test_arrive_home_uses_configured_room_names(database, scheduler):
    database.save(
        "appliances",
        {
            "rooms": {
                "거실": {"light": {"status": "off", "brightness": 0}},
                "현관": {"doorlock": {"status": "locked"}},
            }
        },
    )
    settings = Settings(
        scenes=ScenesConfig(living_room="거실", entryway="현관", arrive_brightness=50)
    )

    with HomeContext(settings, database=database, scheduler=scheduler) as home:
        state = home.arrive_home()

    assert state.device("거실", "light").brightness == 50
    assert state.device("현관", "doorlock").status == "unlocked"
