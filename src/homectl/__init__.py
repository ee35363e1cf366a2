"""homectl - smart home control backend: rooms, devices, appliance cycles."""

from __future__ import annotations

from importlib.metadata import version

from .config import Settings, get_settings
from .context import HomeContext
from .errors import (
    ExternalToolError,
    HomeError,
    NotFoundError,
    ValidationError,
)
from .models import Device, HomeState, Notification
from .storage import Database

__all__ = [
    "Database",
    "Device",
    "ExternalToolError",
    "HomeContext",
    "HomeError",
    "HomeState",
    "NotFoundError",
    "Notification",
    "Settings",
    "ValidationError",
    "__version__",
    "get_settings",
]

__version__ = version("homectl")
