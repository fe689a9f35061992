from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping
import logging
import os

from firestore_model.storage.firestore_path import COLLECTION_INFOS, PathError, normalize_segment


DEFAULT_APP_ENV = "development"
DEFAULT_FIRESTORE_DATABASE = "(default)"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(ValueError):
    """Raised when settings values are invalid."""


@dataclass(frozen=True)
class AppSettings:
    app_env: str
    firestore_project_id: str
    firestore_database: str
    info_collection: str
    log_level: str

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


def _read_dotenv(dotenv_path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    if not dotenv_path.exists():
        return values

    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip("'").strip('"')
        if key:
            values[key] = value
    return values


def _get_str(values: Mapping[str, str], key: str, default: str) -> str:
    value = values.get(key, default).strip()
    if not value:
        raise SettingsError(f"{key} must not be empty.")
    return value


def _get_optional_str(values: Mapping[str, str], key: str) -> str:
    return values.get(key, "").strip()


def _get_collection_name(values: Mapping[str, str], key: str, default: str) -> str:
    value = _get_str(values, key, default)
    try:
        return normalize_segment(value)
    except PathError as exc:
        raise SettingsError(f"{key} must be a single collection name: {value}") from exc


def _get_log_level(values: Mapping[str, str], key: str, default: str) -> str:
    value = _get_str(values, key, default).upper()
    if value not in LOG_LEVELS:
        raise SettingsError(f"{key} must be one of {', '.join(LOG_LEVELS)}: {value}")
    return value


def load_settings(
    *,
    env: Mapping[str, str] | None = None,
    dotenv_path: str | Path = ".env",
) -> AppSettings:
    """Load settings from .env and environment variables.

    Priority: OS environment > .env > default.
    FIRESTORE_EMULATOR_HOST is read by the Firestore client itself and is not
    part of these settings.
    """

    env_values = dict(env) if env is not None else dict(os.environ)
    dotenv_values = _read_dotenv(Path(dotenv_path))
    merged: dict[str, str] = {**dotenv_values, **env_values}

    return AppSettings(
        app_env=_get_str(merged, "APP_ENV", DEFAULT_APP_ENV),
        firestore_project_id=_get_optional_str(merged, "FIRESTORE_PROJECT_ID"),
        firestore_database=_get_str(merged, "FIRESTORE_DATABASE", DEFAULT_FIRESTORE_DATABASE),
        info_collection=_get_collection_name(merged, "INFO_COLLECTION", COLLECTION_INFOS),
        log_level=_get_log_level(merged, "LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )
