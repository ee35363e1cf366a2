"""Device models, one class per device kind."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, Field

from homectl.errors import DeviceNotFoundError, RoomNotFoundError

Number = int | float


class Device(BaseModel):
    """Common base for every device stored under a room.

    Unknown fields are kept so that a document written by a newer client
    survives a round-trip through this process.
    """

    model_config = {
        "extra": "allow",
        "populate_by_name": True,
        "validate_assignment": True,
    }

    name: str | None = None

    @classmethod
    def normalize(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Repair raw document fields before validation."""
        return data

    def to_document(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True)
        if data.get("name") is None:
            data.pop("name", None)
        return data


class GenericDevice(Device):
    status: str | None = None


class Light(Device):
    status: Literal["on", "off"] = "off"
    brightness: int = Field(default=0, ge=0, le=100)

    @classmethod
    def normalize(cls, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("status") == "off":
            data["brightness"] = 0
        return data


class Aircon(Device):
    status: Literal["on", "off"] = "off"
    target_temp: Number | None = Field(default=None, alias="targetTemp")
    mode: str | None = None


class Tv(Device):
    status: Literal["on", "off"] = "off"
    volume: Number | None = None
    input: str | None = None


class Fan(Device):
    status: Literal["on", "off"] = "off"


class AirPurifier(Device):
    status: Literal["on", "off", "auto"] = "off"


class DoorLock(Device):
    status: Literal["locked", "unlocked"] = "locked"


class Vacuum(Device):
    status: Literal["idle", "cleaning"] = "idle"
    last_cleaned: datetime | None = Field(default=None, alias="lastCleaned")


class Appliance(Device):
    """A device that runs a timed cycle (washer, dishwasher)."""

    COURSES: ClassVar[dict[str, int]] = {}
    DEFAULT_COURSE: ClassVar[str] = "표준"

    status: Literal["idle", "running", "done"] = "idle"
    course: str | None = None
    remaining_min: int = Field(default=0, ge=0, alias="remainingMin")

    @classmethod
    def normalize(cls, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("status") != "running":
            data["remainingMin"] = 0
            data.pop("remaining_min", None)
        return data

    @classmethod
    def resolve_course(cls, course: str | None) -> tuple[str, int]:
        """Return the course name and its display minutes.

        Unknown or missing courses fall back to the default course.
        """
        if isinstance(course, str) and course in cls.COURSES:
            return course, cls.COURSES[course]
        return cls.DEFAULT_COURSE, cls.COURSES[cls.DEFAULT_COURSE]


class Washer(Appliance):
    COURSES: ClassVar[dict[str, int]] = {"표준": 40, "급속": 20, "울": 50}


class Dishwasher(Appliance):
    COURSES: ClassVar[dict[str, int]] = {"표준": 60, "강력": 90}


DEVICE_KINDS: dict[str, type[Device]] = {
    "light": Light,
    "aircon": Aircon,
    "tv": Tv,
    "fan": Fan,
    "airpurifier": AirPurifier,
    "doorlock": DoorLock,
    "vacuum": Vacuum,
    "washer": Washer,
    "dishwasher": Dishwasher,
}


def parse_device(kind: str, data: dict[str, Any]) -> Device:
    """Build the model for ``kind``; unknown kinds become a GenericDevice."""
    model = DEVICE_KINDS.get(kind, GenericDevice)
    return model.model_validate(model.normalize(dict(data)))


@dataclass
class HomeState:
    """The room-set document: room name -> device kind -> device."""

    rooms: dict[str, dict[str, Device]] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> HomeState:
        raw_rooms = data.get("rooms") or {}
        rooms = {
            room_name: {
                kind: parse_device(kind, device or {})
                for kind, device in (devices or {}).items()
            }
            for room_name, devices in raw_rooms.items()
        }
        extra = {key: value for key, value in data.items() if key != "rooms"}
        return cls(rooms=rooms, extra=extra)

    def to_document(self) -> dict[str, Any]:
        document = dict(self.extra)
        document["rooms"] = {
            room_name: {kind: device.to_document() for kind, device in devices.items()}
            for room_name, devices in self.rooms.items()
        }
        return document

    def room(self, name: str) -> dict[str, Device]:
        if name not in self.rooms:
            raise RoomNotFoundError(name)
        return self.rooms[name]

    def device(self, room: str, kind: str) -> Device:
        devices = self.room(room)
        if kind not in devices:
            raise DeviceNotFoundError(kind, room)
        return devices[kind]

    def get(self, room: str, kind: str) -> Device | None:
        return self.rooms.get(room, {}).get(kind)

    def find(self, kind: str) -> tuple[str, Device] | None:
        """First room holding a device of ``kind``."""
        for room_name, devices in self.rooms.items():
            if kind in devices:
                return room_name, devices[kind]
        return None
