from __future__ import annotations

from . import assistant, dispatcher, fridge, scenes
from .dispatcher import apply_action, update_device
from .notifications import DisplaySlot, NotificationQueue
from .scheduling import AsyncioScheduler, ManualScheduler, Scheduler, utc_now
from .timers import ApplianceJob, ApplianceTimers

__all__ = [
    "ApplianceJob",
    "ApplianceTimers",
    "AsyncioScheduler",
    "DisplaySlot",
    "ManualScheduler",
    "NotificationQueue",
    "Scheduler",
    "apply_action",
    "assistant",
    "dispatcher",
    "fridge",
    "scenes",
    "update_device",
    "utc_now",
]
