from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from homectl.models import Appliance
from homectl.storage import Database

from .notifications import NotificationQueue
from .scheduling import Handle, Scheduler

logger = logging.getLogger(__name__)

JobKey = tuple[str, str]


@dataclass
class ApplianceJob:
    room: str
    kind: str
    display_minutes: int
    due_at: datetime
    handle: Handle | None = field(default=None, repr=False)
    cancelled: bool = False

    @property
    def key(self) -> JobKey:
        return (self.room, self.kind)

    def cancel(self) -> None:
        self.cancelled = True
        if self.handle is not None:
            self.handle.cancel()

    def to_dict(self) -> dict[str, object]:
        return {
            "room": self.room,
            "device": self.kind,
            "displayMinutes": self.display_minutes,
            "dueAt": self.due_at.isoformat(),
        }


class ApplianceTimers:
    """One cancelable completion job per (room, device kind).

    Cycles run ``acceleration`` times faster than their display minutes.
    """

    def __init__(
        self,
        database: Database,
        notifications: NotificationQueue,
        scheduler: Scheduler,
        acceleration: float = 10.0,
    ) -> None:
        self._database = database
        self._notifications = notifications
        self._scheduler = scheduler
        self._acceleration = acceleration
        self._jobs: dict[JobKey, ApplianceJob] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._jobs

    def delay_for(self, display_minutes: int) -> float:
        """Real seconds until a cycle of ``display_minutes`` completes."""
        return display_minutes / self._acceleration * 60

    def pending(self) -> list[ApplianceJob]:
        return sorted(self._jobs.values(), key=lambda job: job.due_at)

    def arm(self, room: str, kind: str, display_minutes: int) -> ApplianceJob:
        self.cancel(room, kind)

        delay = self.delay_for(display_minutes)
        job = ApplianceJob(
            room=room,
            kind=kind,
            display_minutes=display_minutes,
            due_at=self._scheduler.now() + timedelta(seconds=delay),
        )
        job.handle = self._scheduler.call_later(delay, lambda: self._fire(job))
        self._jobs[job.key] = job
        logger.info(
            "Armed %s cycle in '%s': %d min, completes in %.0fs",
            kind,
            room,
            display_minutes,
            delay,
        )
        return job

    def cancel(self, room: str, kind: str) -> bool:
        job = self._jobs.pop((room, kind), None)
        if job is None:
            return False
        job.cancel()
        logger.info("Cancelled %s cycle in '%s'", kind, room)
        return True

    def shutdown(self) -> None:
        for job in list(self._jobs.values()):
            job.cancel()
            logger.warning(
                "Abandoning %s cycle in '%s' (due %s)",
                job.kind,
                job.room,
                job.due_at.isoformat(),
            )
        self._jobs.clear()

    def _fire(self, job: ApplianceJob) -> None:
        if job.cancelled or self._jobs.get(job.key) is not job:
            logger.debug("Skipping stale %s timer in '%s'", job.kind, job.room)
            return
        try:
            self._complete(job)
        finally:
            if self._jobs.get(job.key) is job:
                del self._jobs[job.key]

    def _complete(self, job: ApplianceJob) -> None:
        # reload: the document may have changed since the cycle was armed
        state = self._database.load_home()
        device = state.get(job.room, job.kind)
        if not isinstance(device, Appliance):
            logger.info(
                "%s in '%s' is gone, dropping cycle completion", job.kind, job.room
            )
            return

        device.status = "done"
        device.remaining_min = 0
        self._database.save_home(state)

        name = device.name or job.kind
        self._notifications.notify(f"{name} cycle complete", "success")
        logger.info("%s cycle in '%s' complete", job.kind, job.room)
