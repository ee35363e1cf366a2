from __future__ import annotations

import itertools
import logging
import math
from collections import deque
from collections.abc import Callable
from datetime import datetime, timedelta

from pydantic import ValidationError as PydanticValidationError

from homectl.errors import ValidationError
from homectl.models import SEVERITIES, DisplayMessage, Notification

from .scheduling import utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class NotificationQueue:
    """Bounded buffer of notifications, emptied by each drain."""

    def __init__(self, clock: Clock = utc_now, max_entries: int = 50) -> None:
        self._clock = clock
        self._items: deque[Notification] = deque(maxlen=max_entries)
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._items)

    def notify(
        self, message: str | None, severity: str | None = "info"
    ) -> Notification:
        if not message:
            raise ValidationError("message is required")
        if severity not in SEVERITIES:
            severity = "info"

        try:
            notification = Notification(
                id=next(self._ids),
                message=message,
                severity=severity,
                timestamp=self._clock(),
            )
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc
        self._items.append(notification)
        logger.debug("Notification #%d [%s]: %s", notification.id, severity, message)
        return notification

    def drain(self) -> list[Notification]:
        items = list(self._items)
        self._items.clear()
        return items


def coerce_duration(value: object, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        seconds = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if not math.isfinite(seconds) or seconds <= 0:
        return default
    return seconds


class DisplaySlot:
    """Holds at most one message for the companion screen."""

    def __init__(self, clock: Clock = utc_now, default_duration: float = 10.0) -> None:
        self._clock = clock
        self._default_duration = default_duration
        self._message: DisplayMessage | None = None

    def set(self, text: str | None, duration: object = None) -> DisplayMessage:
        if not text:
            raise ValidationError("text is required")
        seconds = coerce_duration(duration, self._default_duration)
        try:
            self._message = DisplayMessage(
                text=text,
                duration=seconds,
                expires_at=self._clock() + timedelta(seconds=seconds),
            )
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc
        return self._message

    def get(self) -> DisplayMessage | None:
        if self._message is not None and self._message.expired(self._clock()):
            self._message = None
        return self._message
