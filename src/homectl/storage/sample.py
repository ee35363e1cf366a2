from __future__ import annotations

from typing import Any

from homectl.models import HomeState

SAMPLE_ROOMS: dict[str, dict[str, dict[str, Any]]] = {
    "living room": {
        "light": {"name": "Living room light", "status": "off", "brightness": 0},
        "tv": {"name": "TV", "status": "off", "volume": 20, "input": "HDMI1"},
        "aircon": {
            "name": "Living room aircon",
            "status": "off",
            "targetTemp": 24,
            "mode": "cool",
        },
        "airpurifier": {"name": "Air purifier", "status": "off"},
    },
    "entryway": {
        "light": {"name": "Entryway light", "status": "off", "brightness": 0},
        "doorlock": {"name": "Front door", "status": "locked"},
    },
    "bedroom": {
        "light": {"name": "Bedroom light", "status": "off", "brightness": 0},
        "fan": {"name": "Bedroom fan", "status": "off"},
    },
    "kitchen": {
        "light": {"name": "Kitchen light", "status": "off", "brightness": 0},
        "dishwasher": {
            "name": "Dishwasher",
            "status": "idle",
            "course": None,
            "remainingMin": 0,
        },
    },
    "utility room": {
        "washer": {
            "name": "Washer",
            "status": "idle",
            "course": None,
            "remainingMin": 0,
        },
        "vacuum": {"name": "Robot vacuum", "status": "idle"},
    },
}


def sample_home() -> HomeState:
    return HomeState.from_document({"rooms": SAMPLE_ROOMS})
