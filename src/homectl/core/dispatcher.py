"""Per-kind device actions.

Each handler mutates a device in place and may return a timer effect, which
``apply_action`` carries out once the document has been persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from homectl.errors import DeviceNotFoundError, ValidationError
from homectl.models import (
    AirPurifier,
    Aircon,
    Appliance,
    Device,
    DoorLock,
    Fan,
    Light,
    Tv,
    Vacuum,
)
from homectl.storage import Database

from .timers import ApplianceTimers

logger = logging.getLogger(__name__)

DEFAULT_BRIGHTNESS = 80


@dataclass(frozen=True)
class ArmCycle:
    display_minutes: int


@dataclass(frozen=True)
class CancelCycle:
    pass


TimerEffect = ArmCycle | CancelCycle | None
Handler = Callable[[Any, str | None, Mapping[str, Any], datetime], TimerEffect]


def _field_name(device: Device, key: str) -> str:
    for name, info in type(device).model_fields.items():
        if key in (name, info.alias):
            return name
    return key


def assign(device: Device, **values: Any) -> None:
    """Set fields by name or document alias, validating each value."""
    for key, value in values.items():
        name = _field_name(device, key)
        try:
            setattr(device, name, value)
        except PydanticValidationError as exc:
            reason = exc.errors()[0]["msg"]
            raise ValidationError(f"Invalid {key} {value!r}: {reason}") from exc


def _switch(device: Device, action: str | None, allowed: tuple[str, ...]) -> None:
    if action in allowed:
        assign(device, status=action)


def _copy_params(
    device: Device, params: Mapping[str, Any], keys: tuple[str, ...]
) -> None:
    for key in keys:
        if key in params:
            assign(device, **{key: params[key]})


def _light(
    device: Light, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    brightness = params.get("brightness")
    if action == "on":
        if brightness is None:
            brightness_on = device.brightness or DEFAULT_BRIGHTNESS
        else:
            brightness_on = brightness
        assign(device, status="on", brightness=brightness_on)
    elif action == "off":
        assign(device, status="off", brightness=0)

    if brightness is not None and device.status == "on":
        assign(device, brightness=brightness)
    return None


def _aircon(
    device: Aircon, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    _switch(device, action, ("on", "off"))
    _copy_params(device, params, ("targetTemp", "mode"))
    return None


def _tv(
    device: Tv, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    _switch(device, action, ("on", "off"))
    _copy_params(device, params, ("volume", "input"))
    return None


def _fan(
    device: Fan, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    _switch(device, action, ("on", "off"))
    return None


def _air_purifier(
    device: AirPurifier, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    _switch(device, action, ("on", "off", "auto"))
    return None


def _door_lock(
    device: DoorLock, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    if action == "lock":
        assign(device, status="locked")
    elif action == "unlock":
        assign(device, status="unlocked")
    return None


def _vacuum(
    device: Vacuum, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    if action == "start":
        assign(device, status="cleaning")
    elif action == "stop":
        assign(device, status="idle", lastCleaned=now)
    return None


def _appliance(
    device: Appliance, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    if action == "start":
        course, minutes = type(device).resolve_course(params.get("course"))
        assign(device, status="running", course=course, remainingMin=minutes)
        return ArmCycle(minutes)
    if action == "stop":
        assign(device, status="idle", remainingMin=0, course=None)
        return CancelCycle()
    return None


def _generic(
    device: Device, action: str | None, params: Mapping[str, Any], now: datetime
) -> TimerEffect:
    # forward compatible: unknown kinds only understand on/off
    if action in ("on", "off"):
        setattr(device, "status", action)
    return None


_HANDLERS: dict[type[Device], Handler] = {
    Light: _light,
    Aircon: _aircon,
    Tv: _tv,
    Fan: _fan,
    AirPurifier: _air_purifier,
    DoorLock: _door_lock,
    Vacuum: _vacuum,
    Appliance: _appliance,
}


def handler_for(device: Device) -> Handler:
    for cls in type(device).__mro__:
        if cls in _HANDLERS:
            return _HANDLERS[cls]
    return _generic


def dispatch(
    device: Device,
    action: str | None,
    params: Mapping[str, Any],
    now: datetime,
) -> TimerEffect:
    return handler_for(device)(device, action, params, now)


def apply_action(
    database: Database,
    timers: ApplianceTimers,
    room: str,
    kind: str,
    action: str | None,
    params: Mapping[str, Any],
    now: datetime,
) -> Device:
    state = database.load_home()
    device = state.device(room, kind)

    effect = dispatch(device, action, params, now)
    database.save_home(state)
    logger.info("%s in '%s': %s", kind, room, action)

    if isinstance(effect, ArmCycle):
        timers.arm(room, kind, effect.display_minutes)
    elif isinstance(effect, CancelCycle):
        timers.cancel(room, kind)
    return device


def update_device(
    database: Database,
    timers: ApplianceTimers,
    kind: str,
    state: str | None = None,
    target_temp: Any = None,
    mode: str | None = None,
    brightness: Any = None,
) -> tuple[str, Device]:
    """Set fields on the first device of ``kind`` found in any room.

    An appliance moved out of ``running`` drops its course and remaining
    minutes, and its pending cycle is cancelled. Starting a cycle needs a
    course and a timer, so it goes through ``apply_action`` instead.
    """
    home = database.load_home()
    found = home.find(kind)
    if found is None:
        raise DeviceNotFoundError(kind)
    room, device = found
    stopped = False

    if state is not None:
        if isinstance(device, Appliance):
            if state == "running" and device.status != "running":
                raise ValidationError(
                    f"Start {kind} with the 'start' action to run a cycle"
                )
            stopped = device.status == "running" and state != "running"
        assign(device, status=state)
    if target_temp is not None:
        assign(device, targetTemp=target_temp)
    if mode is not None:
        assign(device, mode=mode)
    if brightness is not None:
        assign(device, brightness=brightness)
    if isinstance(device, Light) and device.status == "off":
        assign(device, brightness=0)
    if stopped:
        assign(device, remainingMin=0, course=None)

    database.save_home(home)
    logger.info("Updated %s in '%s'", kind, room)
    if stopped:
        timers.cancel(room, kind)
    return room, device
