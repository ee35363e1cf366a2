"""Leave-home and arrive-home scene macros."""

from __future__ import annotations

import logging

from homectl.config import ScenesConfig
from homectl.models import HomeState, Light
from homectl.storage import Database

from .dispatcher import assign
from .notifications import NotificationQueue

logger = logging.getLogger(__name__)

SWITCH_OFF_KINDS = ("light", "tv", "aircon", "fan", "airpurifier")

LEAVE_HOME_MESSAGE = (
    "Leave-home mode activated. All lights and appliances are off "
    "and the door is locked."
)
ARRIVE_HOME_MESSAGE = (
    "Arrive-home mode activated. Living room light and air purifier are on "
    "and the door is unlocked."
)


def leave_home(database: Database, notifications: NotificationQueue) -> HomeState:
    """Switch everything off and lock every door.

    Washer and dishwasher cycles keep running.
    """
    state = database.load_home()

    for devices in state.rooms.values():
        for kind in SWITCH_OFF_KINDS:
            device = devices.get(kind)
            if device is None:
                continue
            if isinstance(device, Light):
                assign(device, status="off", brightness=0)
            else:
                assign(device, status="off")
        if "doorlock" in devices:
            assign(devices["doorlock"], status="locked")

    database.save_home(state)
    notifications.notify(LEAVE_HOME_MESSAGE, "info")
    logger.info("Leave-home applied to %d room(s)", len(state.rooms))
    return state


def arrive_home(
    database: Database, notifications: NotificationQueue, scenes: ScenesConfig
) -> HomeState:
    state = database.load_home()

    light = state.get(scenes.living_room, "light")
    if light is not None:
        assign(light, status="on", brightness=scenes.arrive_brightness)

    purifier = state.get(scenes.living_room, "airpurifier")
    if purifier is not None:
        assign(purifier, status="auto")

    door = state.get(scenes.entryway, "doorlock")
    if door is not None:
        assign(door, status="unlocked")

    database.save_home(state)
    notifications.notify(ARRIVE_HOME_MESSAGE, "info")
    logger.info("Arrive-home applied")
    return state
