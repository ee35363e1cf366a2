from __future__ import annotations

import pytest
from pydantic import ValidationError

from homectl.models import (
    Dishwasher,
    GenericDevice,
    HomeState,
    Light,
    Washer,
    parse_device,
)


def test_parse_device_picks_model_by_kind():
    assert isinstance(parse_device("light", {"status": "on", "brightness": 40}), Light)
    assert isinstance(parse_device("washer", {}), Washer)


def test_unknown_kind_becomes_generic_and_keeps_fields():
    device = parse_device("humidifier", {"status": "on", "level": 3})

    assert isinstance(device, GenericDevice)
    assert device.to_document() == {"status": "on", "level": 3}


def test_light_off_is_loaded_with_zero_brightness():
    light = parse_device("light", {"status": "off", "brightness": 55})
    assert light.brightness == 0


def test_appliance_not_running_has_no_remaining_minutes():
    washer = parse_device("washer", {"status": "done", "remainingMin": 12})
    assert washer.remaining_min == 0

    running = parse_device("washer", {"status": "running", "remainingMin": 12})
    assert running.remaining_min == 12


def test_brightness_out_of_range_is_rejected():
    light = Light(status="on", brightness=50)
    with pytest.raises(ValidationError):
        light.brightness = 150


@pytest.mark.parametrize(
    ("model", "course", "expected"),
    [
        (Washer, "급속", ("급속", 20)),
        (Washer, "울", ("울", 50)),
        (Washer, "unknown", ("표준", 40)),
        (Washer, None, ("표준", 40)),
        (Dishwasher, "강력", ("강력", 90)),
        (Dishwasher, "급속", ("표준", 60)),
    ],
)
def test_resolve_course(model, course, expected):
    assert model.resolve_course(course) == expected


def test_document_uses_camel_case_and_keeps_extra_keys():
    document = {
        "version": 2,
        "rooms": {
            "living room": {
                "aircon": {"name": "AC", "status": "on", "targetTemp": 22, "mode": "cool"},
            },
            "empty": {},
        },
    }

    state = HomeState.from_document(document)

    assert state.to_document() == document
