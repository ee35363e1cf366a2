from __future__ import annotations

from .database import APPLIANCES_KEY, FRIDGE_KEY, Database
from .sample import SAMPLE_ROOMS, sample_home

__all__ = ["APPLIANCES_KEY", "FRIDGE_KEY", "SAMPLE_ROOMS", "Database", "sample_home"]
