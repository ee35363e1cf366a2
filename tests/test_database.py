from __future__ import annotations

import pytest

from homectl.models import FridgeInventory, HomeState
from homectl.storage import Database


def test_load_missing_key_returns_empty_document(tmp_path):
    db = Database(tmp_path)

    assert db.load("appliances") == {}
    assert db.load_home().rooms == {}
    assert db.load_fridge().items == []


def test_save_overwrites_whole_document(tmp_path):
    db = Database(tmp_path / "nested")

    db.save("settings", {"a": 1, "b": 2})
    db.save("settings", {"c": 3})

    assert db.load("settings") == {"c": 3}
    assert not list(db.path.glob("*.tmp"))


def test_invalid_json_raises_value_error(tmp_path):
    db = Database(tmp_path)
    db.appliances_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid JSON"):
        db.load_home()


def test_invalid_device_raises_value_error(tmp_path):
    db = Database(tmp_path)
    db.save("appliances", {"rooms": {"hall": {"light": {"brightness": 500}}}})

    with pytest.raises(ValueError, match="Invalid appliances file"):
        db.load_home()


def test_init_keeps_existing_documents(tmp_path):
    db = Database(tmp_path)
    db.save("appliances", {"rooms": {"hall": {"fan": {"status": "on"}}}})

    db.init()

    assert "hall" in db.load_home().rooms
    assert db.load_fridge() == FridgeInventory()


def test_home_roundtrip_keeps_unicode(tmp_path):
    db = Database(tmp_path)
    state = HomeState.from_document(
        {"rooms": {"utility room": {"washer": {"status": "running", "course": "급속", "remainingMin": 20}}}}
    )

    db.save_home(state)

    assert "급속" in db.appliances_path.read_text(encoding="utf-8")
    assert db.load_home().rooms["utility room"]["washer"].course == "급속"
