"""Process-wide home context.

Owns the store, the notification buffer, the display slot and the appliance
timers, and exposes every inbound operation. Build one at startup and close
it on shutdown.

Usage:
    with HomeContext(get_settings()) as home:
        home.apply_action("living room", "light", "on", {"brightness": 60})
        home.leave_home()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from homectl.config import Settings, data_dir_from_settings
from homectl.core import assistant, dispatcher, fridge, scenes
from homectl.core.notifications import DisplaySlot, NotificationQueue
from homectl.core.scheduling import AsyncioScheduler, Scheduler
from homectl.core.timers import ApplianceTimers
from homectl.models import (
    Device,
    DisplayMessage,
    FridgeInventory,
    FridgeItem,
    HomeState,
    Notification,
)
from homectl.storage import Database

logger = logging.getLogger(__name__)


class HomeContext:
    def __init__(
        self,
        settings: Settings,
        database: Database | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.settings = settings
        self.database = database or Database(data_dir_from_settings(settings))
        self.scheduler = scheduler or AsyncioScheduler()
        self.notifications = NotificationQueue(
            clock=self.scheduler.now,
            max_entries=settings.notifications.max_entries,
        )
        self.display = DisplaySlot(
            clock=self.scheduler.now,
            default_duration=settings.notifications.display_duration,
        )
        self.timers = ApplianceTimers(
            self.database,
            self.notifications,
            self.scheduler,
            acceleration=settings.appliances.acceleration,
        )
        self._closed = False

    def __enter__(self) -> HomeContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self.timers.shutdown()
        self._closed = True
        logger.debug("Home context closed")

    # Rooms and devices
    def get_rooms(self) -> HomeState:
        return self.database.load_home()

    def apply_action(
        self,
        room: str,
        kind: str,
        action: str | None,
        params: Mapping[str, Any] | None = None,
    ) -> Device:
        return dispatcher.apply_action(
            self.database,
            self.timers,
            room,
            kind,
            action,
            params or {},
            self.scheduler.now(),
        )

    def update_device(
        self,
        kind: str,
        state: str | None = None,
        target_temp: Any = None,
        mode: str | None = None,
        brightness: Any = None,
    ) -> Device:
        _, device = dispatcher.update_device(
            self.database,
            self.timers,
            kind,
            state=state,
            target_temp=target_temp,
            mode=mode,
            brightness=brightness,
        )
        return device

    # Scenes
    def leave_home(self) -> HomeState:
        return scenes.leave_home(self.database, self.notifications)

    def arrive_home(self) -> HomeState:
        return scenes.arrive_home(
            self.database, self.notifications, self.settings.scenes
        )

    # Notifications and display
    def notify(
        self, message: str | None, severity: str | None = "info"
    ) -> Notification:
        return self.notifications.notify(message, severity)

    def drain_notifications(self) -> list[Notification]:
        return self.notifications.drain()

    def set_display_message(
        self, text: str | None, duration: object = None
    ) -> DisplayMessage:
        return self.display.set(text, duration)

    def get_display_message(self) -> DisplayMessage | None:
        return self.display.get()

    # Fridge
    def list_fridge(self) -> FridgeInventory:
        return fridge.list_items(self.database)

    def add_fridge_item(
        self,
        name: str | None,
        quantity: str | None = None,
        expiry: str | None = None,
        category: str | None = None,
    ) -> FridgeItem:
        return fridge.add_item(
            self.database,
            name,
            self.scheduler.now(),
            quantity=quantity,
            expiry=expiry,
            category=category,
        )

    def remove_fridge_item(self, item_id: int | None) -> FridgeItem:
        return fridge.remove_item(self.database, item_id, self.scheduler.now())

    # Assistant
    def chat(self, message: str | None) -> str:
        return assistant.ask(message, self.settings.assistant)
