from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from homectl.models import FridgeInventory, HomeState

logger = logging.getLogger(__name__)

APPLIANCES_KEY = "appliances"
FRIDGE_KEY = "fridge"


class Database:
    """JSON document store, one file per key under the data directory.

    Every ``save`` fully replaces the document through a temporary file and
    ``os.replace`` so a reader never sees a half-written file.
    """

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir

    @property
    def path(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    @property
    def appliances_path(self) -> Path:
        return self.path_for(APPLIANCES_KEY)

    @property
    def fridge_path(self) -> Path:
        return self.path_for(FRIDGE_KEY)

    def ensure_dirs(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def load(self, key: str) -> dict[str, Any]:
        path = self.path_for(key)
        if not path.exists():
            return {}

        try:
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}\n{exc}") from exc

        logger.debug("Loaded '%s' from %s", key, path)
        return data or {}

    def save(self, key: str, document: dict[str, Any]) -> None:
        self.ensure_dirs()
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._data_dir, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2, ensure_ascii=False)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved '%s' to %s", key, path)

    def load_home(self) -> HomeState:
        data = self.load(APPLIANCES_KEY)
        try:
            return HomeState.from_document(data)
        except ValidationError as exc:
            raise ValueError(
                f"Invalid appliances file: {self.appliances_path}\n{exc}"
            ) from exc

    def save_home(self, state: HomeState) -> None:
        self.save(APPLIANCES_KEY, state.to_document())

    def load_fridge(self) -> FridgeInventory:
        data = self.load(FRIDGE_KEY)
        try:
            return FridgeInventory.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid fridge file: {self.fridge_path}\n{exc}") from exc

    def save_fridge(self, inventory: FridgeInventory) -> None:
        self.save(FRIDGE_KEY, inventory.to_document())

    def init(self, home: HomeState | None = None) -> None:
        self.ensure_dirs()
        if home is not None or not self.appliances_path.exists():
            self.save_home(home or HomeState())
        if not self.fridge_path.exists():
            self.save_fridge(FridgeInventory())
