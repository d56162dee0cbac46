"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

_DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class SpendImportSettings:
    """
    Runtime settings for supplier-spend imports.
    """

    delimiter: str = ","
    default_filename: str = "upload.csv"
    max_upload_bytes: int = _DEFAULT_MAX_UPLOAD_BYTES


@dataclass(frozen=True)
class HTTPSettings:
    """
    Settings for the HTTP surface.
    """

    cors_allow_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_spend_import_settings() -> SpendImportSettings:
    """
    Return cached import settings from environment variables.
    """

    delimiter = _get_str_env("SPEND_IMPORT_DELIMITER", ",")
    if len(delimiter) != 1:
        raise RuntimeError("SPEND_IMPORT_DELIMITER must be exactly one character.")

    return SpendImportSettings(
        delimiter=delimiter,
        default_filename=_get_str_env("SPEND_IMPORT_DEFAULT_FILENAME", "upload.csv"),
        max_upload_bytes=max(
            1,
            _get_int_env("SPEND_IMPORT_MAX_UPLOAD_BYTES", _DEFAULT_MAX_UPLOAD_BYTES),
        ),
    )


@lru_cache(maxsize=1)
def get_http_settings() -> HTTPSettings:
    """
    Return cached HTTP settings from environment variables.
    """

    return HTTPSettings(
        cors_allow_origins=_get_csv_env("CORS_ALLOW_ORIGINS", ("*",)),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )
