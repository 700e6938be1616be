"""Configuration management."""

import re
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_DIR = Path(__file__).parent.parent / "config"

DEFAULT_SENDER_PATTERN = r"jobalerts-noreply@linkedin.com|jobs-listings@linkedin.com"


class Config(BaseModel):
    """Application configuration."""

    spreadsheet_id: str
    sheet_name: str = "Listings"
    log_level: str = "INFO"
    max_threads: int = Field(default=20, ge=1)
    time_zone: str = "America/Los_Angeles"
    result_range: str = "B2:BF"
    date_column: str = "C"
    sender_pattern: str = DEFAULT_SENDER_PATTERN

    @field_validator("time_zone")
    @classmethod
    def _validate_time_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value

    @field_validator("sender_pattern")
    @classmethod
    def _validate_sender_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"Invalid sender_pattern: {exc}") from exc
        return value


_config: Optional[Config] = None


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file."""
    global _config

    if _config is not None:
        return _config

    if config_path is None:
        config_path = CONFIG_DIR / "config.yaml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}. "
            "Copy config/config.yaml.example to config/config.yaml and fill in your settings."
        )

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    _config = Config(**data)
    return _config


def get_config() -> Config:
    """Get the loaded configuration."""
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next load re-reads the file."""
    global _config
    _config = None
