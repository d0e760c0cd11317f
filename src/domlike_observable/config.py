"""Configuration loading and validation for observable objects."""

from __future__ import annotations

from copy import deepcopy
import logging
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    field_validator,
    model_validator,
)

from .exceptions import ConfigValidationError

import tomllib  # stdlib since Python 3.11 (project requires >=3.11)

LOGGER = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "domlike-observable"
CONFIG_PATH = CONFIG_DIR / "config.toml"

VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class PayloadConfig(BaseModel):
    """Names of the fields injected into every dispatched payload."""

    model_config = ConfigDict(frozen=True)
    timestamp_field: str = "timestamp"
    event_name_field: str = "eventName"

    @field_validator("timestamp_field", "event_name_field", mode="before")
    @classmethod
    def _validate_field_name(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Expected a string value.")
        normalized = value.strip()
        if not normalized:
            raise ValueError("Field name must not be empty.")
        return normalized

    @model_validator(mode="after")
    def _validate_distinct_fields(self) -> PayloadConfig:
        if self.timestamp_field == self.event_name_field:
            raise ValueError("timestamp_field and event_name_field must differ.")
        return self


class LoggingConfig(BaseModel):
    """Logging behavior and output destinations."""

    level: str = "INFO"
    structured: bool = True
    log_to_file: bool = False
    log_file_path: str = "~/.local/state/domlike-observable/observable.log"

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Logging level must be a string.")
        normalized = value.strip().upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(f"Unsupported log level {normalized!r}.")
        return normalized

    @field_validator("log_file_path", mode="before")
    @classmethod
    def _validate_log_file_path(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("log_file_path must be a string.")
        normalized = value.strip()
        if not normalized:
            raise ValueError("log_file_path must not be empty.")
        return normalized


class Config(BaseModel):
    """Root configuration model for all sections."""

    payload: PayloadConfig = PayloadConfig()
    logging: LoggingConfig = LoggingConfig()


DEFAULT_CONFIG: dict[str, dict[str, Any]] = Config().model_dump()


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override values onto base values."""
    merged: dict[str, Any] = deepcopy(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _safe_default_config() -> dict[str, dict[str, Any]]:
    """Return a deep copy of validated default config data."""
    return deepcopy(DEFAULT_CONFIG)


def _validate_config(raw: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Validate merged config and fallback to safe defaults when possible."""
    try:
        config = Config.model_validate(raw)
        return config.model_dump()
    except ValidationError as exc:
        LOGGER.warning(
            "config.invalid",
            extra={"event": "config.invalid", "reason": str(exc)},
        )
        return _safe_default_config()
    except Exception as exc:  # noqa: BLE001 - unexpected model construction failure.
        raise ConfigValidationError(f"Unable to validate configuration: {exc}") from exc


def load_config(config_path: Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load configuration from TOML, merge with defaults, and validate.

    A missing file yields the defaults. A file that cannot be parsed or
    validated is ignored with a warning.
    """
    target_path = config_path or CONFIG_PATH

    raw_data: dict[str, Any] = {}
    if target_path.exists():
        try:
            raw_data = tomllib.loads(target_path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            LOGGER.warning(
                "config.parse_failed",
                extra={
                    "event": "config.parse_failed",
                    "path": str(target_path),
                    "reason": str(exc),
                },
            )
            raw_data = {}

    return _validate_config(_deep_merge(DEFAULT_CONFIG, raw_data))


def load_payload_config(config_path: Path | None = None) -> PayloadConfig:
    """Return the ``[payload]`` section of the loaded config as a model."""
    return PayloadConfig.model_validate(load_config(config_path)["payload"])
