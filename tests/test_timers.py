from __future__ import annotations

from homectl.core.notifications import NotificationQueue
from homectl.core.timers import ApplianceTimers
from homectl.storage import Database


def washer(database: Database):
    return database.load_home().device("utility room", "washer")


def completions(home) -> list[str]:
    return [n.message for n in home.drain_notifications() if n.severity == "success"]


def test_start_sets_running_and_arms_timer(home, database):
    device = home.apply_action("utility room", "washer", "start", {"course": "급속"})

    assert device.status == "running"
    assert device.course == "급속"
    assert device.remaining_min == 20
    assert ("utility room", "washer") in home.timers
    assert washer(database).status == "running"


def test_cycle_completes_after_accelerated_delay(home, database, scheduler):
    home.apply_action("utility room", "washer", "start", {"course": "급속"})

    scheduler.advance(119)
    assert washer(database).status == "running"

    scheduler.advance(1)
    device = washer(database)
    assert device.status == "done"
    assert device.remaining_min == 0
    assert completions(home) == ["Washer cycle complete"]
    assert home.timers.pending() == []


def test_unknown_course_falls_back_to_default(home, scheduler, database):
    device = home.apply_action("kitchen", "dishwasher", "start", {"course": "eco"})

    assert device.course == "표준"
    assert device.remaining_min == 60

    scheduler.advance(6 * 60)
    assert database.load_home().device("kitchen", "dishwasher").status == "done"


def test_stop_before_completion_never_fires(home, database, scheduler):
    home.apply_action("utility room", "washer", "start", {"course": "급속"})
    scheduler.advance(60)

    device = home.apply_action("utility room", "washer", "stop")
    assert device.status == "idle"
    assert device.course is None
    assert device.remaining_min == 0

    assert scheduler.advance(3600) == 0
    assert washer(database).status == "idle"
    assert completions(home) == []


def test_restart_replaces_previous_job(home, scheduler):
    home.apply_action("utility room", "washer", "start", {"course": "급속"})
    scheduler.advance(60)
    home.apply_action("utility room", "washer", "start", {"course": "급속"})

    scheduler.advance(60)
    assert completions(home) == []

    scheduler.advance(3600)
    assert completions(home) == ["Washer cycle complete"]


def test_stop_then_start_yields_one_completion(home, scheduler):
    home.apply_action("utility room", "washer", "start", {"course": "울"})
    home.apply_action("utility room", "washer", "stop")
    home.apply_action("utility room", "washer", "start", {"course": "급속"})

    scheduler.advance(3600)

    assert completions(home) == ["Washer cycle complete"]


def test_removed_device_makes_completion_a_no_op(home, database, scheduler):
    home.apply_action("utility room", "washer", "start")
    database.save("appliances", {"rooms": {"utility room": {}}})

    scheduler.advance(3600)

    assert database.load("appliances") == {"rooms": {"utility room": {}}}
    assert completions(home) == []
    assert home.timers.pending() == []


def test_completion_reloads_fresh_document(home, database, scheduler):
    home.apply_action("utility room", "washer", "start", {"course": "급속"})
    home.apply_action("living room", "light", "on", {"brightness": 42})

    scheduler.advance(120)

    state = database.load_home()
    assert state.device("utility room", "washer").status == "done"
    assert state.device("living room", "light").brightness == 42


def test_cancel_unknown_key_is_a_no_op(home):
    assert home.timers.cancel("utility room", "washer") is False


def test_delay_uses_acceleration(database, scheduler):
    timers = ApplianceTimers(
        database, NotificationQueue(clock=scheduler.now), scheduler, acceleration=20
    )

    assert timers.delay_for(40) == 120
    job = timers.arm("utility room", "washer", 40)
    assert (job.due_at - scheduler.now()).total_seconds() == 120


def test_shutdown_cancels_every_job(home, scheduler):
    home.apply_action("utility room", "washer", "start")
    home.apply_action("kitchen", "dishwasher", "start")
    assert len(home.timers.pending()) == 2

    home.close()

    assert home.timers.pending() == []
    assert scheduler.advance(3600) == 0
