from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .paths import default_config_path, default_data_dir, expand_path

CONFIG_ENV_VAR = "HOMECTL_CONFIG"


class DatabaseConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str = Field(default_factory=lambda: str(default_data_dir()))


class AppliancesConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    # display minutes per real minute
    acceleration: float = Field(default=10.0, gt=0)


class NotificationsConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    max_entries: int = Field(default=50, ge=1)
    display_duration: float = Field(default=10.0, gt=0)


class ScenesConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    living_room: str = "living room"
    entryway: str = "entryway"
    arrive_brightness: int = Field(default=80, ge=0, le=100)


class AssistantConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    command: list[str] = Field(default_factory=lambda: ["picoclaw", "agent"])
    timeout: float = Field(default=30.0, gt=0)


class ServerConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8765, ge=1, le=65535)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    appliances: AppliancesConfig = Field(default_factory=AppliancesConfig)
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)
    scenes: ScenesConfig = Field(default_factory=ScenesConfig)
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.database.path)


def _toml_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _toml_list(values: list[str]) -> str:
    return "[" + ", ".join(_toml_string(value) for value in values) + "]"


def render_settings_toml(settings: Settings) -> str:
    lines = [
        "# homectl configuration",
        "",
        "[database]",
        f"path = {_toml_string(settings.database.path)}",
        "",
        "[appliances]",
        f"acceleration = {settings.appliances.acceleration}",
        "",
        "[notifications]",
        f"max_entries = {settings.notifications.max_entries}",
        f"display_duration = {settings.notifications.display_duration}",
        "",
        "[scenes]",
        f"living_room = {_toml_string(settings.scenes.living_room)}",
        f"entryway = {_toml_string(settings.scenes.entryway)}",
        f"arrive_brightness = {settings.scenes.arrive_brightness}",
        "",
        "[assistant]",
        f"command = {_toml_list(settings.assistant.command)}",
        f"timeout = {settings.assistant.timeout}",
        "",
        "[server]",
        f"host = {_toml_string(settings.server.host)}",
        f"port = {settings.server.port}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings), encoding="utf-8")
