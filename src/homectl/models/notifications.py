"""Notification and display message models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

Severity = Literal["info", "success", "warning", "alert"]
SEVERITIES: tuple[str, ...] = ("info", "success", "warning", "alert")


class Notification(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    id: int
    message: str
    severity: Severity = "info"
    timestamp: datetime


class DisplayMessage(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    text: str
    duration: float
    expires_at: datetime

    def expired(self, now: datetime) -> bool:
        return now > self.expires_at
