"""Tests for config.py: YAML loading and validation."""

import pytest
from pydantic import ValidationError

from alert_sheet.config import DEFAULT_SENDER_PATTERN, Config, get_config, load_config


def _write(tmp_path, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


def test_defaults_applied(tmp_path):
    config = load_config(_write(tmp_path, "spreadsheet_id: abc123\n"))

    assert config.spreadsheet_id == "abc123"
    assert config.sheet_name == "Listings"
    assert config.max_threads == 20
    assert config.time_zone == "America/Los_Angeles"
    assert config.result_range == "B2:BF"
    assert config.date_column == "C"
    assert config.sender_pattern == DEFAULT_SENDER_PATTERN


def test_load_is_cached(tmp_path):
    first = load_config(_write(tmp_path, "spreadsheet_id: abc123\nmax_threads: 5\n"))
    assert get_config() is first
    assert get_config().max_threads == 5


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_missing_spreadsheet_id_rejected(tmp_path):
    with pytest.raises(ValidationError):
        load_config(_write(tmp_path, "sheet_name: Jobs\n"))


def test_unknown_time_zone_rejected():
    with pytest.raises(ValidationError):
        Config(spreadsheet_id="x", time_zone="Mars/Olympus_Mons")


def test_invalid_sender_pattern_rejected():
    with pytest.raises(ValidationError):
        Config(spreadsheet_id="x", sender_pattern="linkedin(")


def test_max_threads_must_be_positive():
    with pytest.raises(ValidationError):
        Config(spreadsheet_id="x", max_threads=0)
