"""Data models for homectl."""

from homectl.models.devices import (
    DEVICE_KINDS,
    AirPurifier,
    Aircon,
    Appliance,
    Device,
    Dishwasher,
    DoorLock,
    Fan,
    GenericDevice,
    HomeState,
    Light,
    Tv,
    Vacuum,
    Washer,
    parse_device,
)
from homectl.models.fridge import FridgeInventory, FridgeItem
from homectl.models.notifications import (
    SEVERITIES,
    DisplayMessage,
    Notification,
    Severity,
)

__all__ = [
    "DEVICE_KINDS",
    "SEVERITIES",
    "AirPurifier",
    "Aircon",
    "Appliance",
    "Device",
    "Dishwasher",
    "DisplayMessage",
    "DoorLock",
    "Fan",
    "FridgeInventory",
    "FridgeItem",
    "GenericDevice",
    "HomeState",
    "Light",
    "Notification",
    "Severity",
    "Tv",
    "Vacuum",
    "Washer",
    "parse_device",
]
