import json
import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_DIR = Path(__file__).resolve().parents[2]
ENV_FILES = (ROOT_DIR / ".env", ROOT_DIR / ".env.example")


def _read_env_values() -> dict:
    values = {}
    for path in ENV_FILES:
        if not path.exists():
            continue
        values.update(dotenv_values(path))
    values.update(os.environ)
    return values


class SyncSettings(BaseModel):
    poll_interval_ms: int = Field(
        default=500,
        ge=1,
        validation_alias=AliasChoices("POLL_INTERVAL_MS", "DROIDCTL_POLL_INTERVAL_MS"),
    )
    settle_interval_ms: int = Field(
        default=500,
        ge=0,
        validation_alias=AliasChoices(
            "SETTLE_INTERVAL_MS", "DROIDCTL_SETTLE_INTERVAL_MS"
        ),
    )
    stable_samples: int = Field(
        default=2,
        ge=2,
        validation_alias=AliasChoices("STABLE_SAMPLES", "DROIDCTL_STABLE_SAMPLES"),
    )
    scroll_duration_ms: int = Field(
        default=300,
        ge=1,
        validation_alias=AliasChoices(
            "SCROLL_DURATION_MS", "DROIDCTL_SCROLL_DURATION_MS"
        ),
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Settings(BaseSettings):
    adb_path: str = Field(
        default="adb",
        validation_alias=AliasChoices("ADB_PATH", "DROIDCTL_ADB_PATH"),
    )
    device_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DEVICE_ID", "DROIDCTL_DEVICE_ID"),
    )
    command_timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices(
            "ADB_COMMAND_TIMEOUT", "DROIDCTL_COMMAND_TIMEOUT"
        ),
    )
    dump_path: str = Field(
        default="/sdcard/ui_dump.xml",
        validation_alias=AliasChoices("UI_DUMP_PATH", "DROIDCTL_DUMP_PATH"),
    )
    screenshot_dir: str = Field(
        default="/tmp/android-screenshots",
        validation_alias=AliasChoices("SCREENSHOT_DIR", "DROIDCTL_SCREENSHOT_DIR"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "DROIDCTL_LOG_LEVEL"),
    )
    sync: SyncSettings = SyncSettings()

    model_config = SettingsConfigDict(
        env_file=[str(path) for path in ENV_FILES],
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("device_id", mode="before")
    @classmethod
    def _parse_device_id(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value):
        if value is None:
            return "INFO"
        return str(value).strip().upper() or "INFO"

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            _flat_sync_env_settings,
            file_secret_settings,
        )


def _flat_sync_env_settings(_settings: Optional[BaseSettings] = None, *_args, **_kwargs) -> dict:
    env = _read_env_values()
    sync = {}
    for field_name, field in SyncSettings.model_fields.items():
        for env_key in field.validation_alias.choices:
            value = env.get(env_key)
            if value in (None, ""):
                continue
            sync[field_name] = value
            break
    if not sync:
        return {}
    return {"sync": sync}


def _load_json(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object: {}".format(path))
    return data


def load_settings(config_path: Optional[str] = None) -> Settings:
    data = {}
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError("config not found: {}".format(path))
        data = _load_json(path)
    return Settings(**data)
