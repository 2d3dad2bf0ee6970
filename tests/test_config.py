from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from property_dedupe.config import Settings, get_settings, reload_settings
from property_dedupe.logging_config import JSONFormatter, setup_logging


def test_settings_defaults() -> None:
    settings = get_settings()

    assert settings.log_level == "INFO"
    assert settings.log_format == "text"
    assert not settings.json_logs
    assert settings.output_dir == Path("data/cli_output")
    assert settings.explain_limit == 10
    assert get_settings() is settings


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROPERTY_DEDUPE_LOG_LEVEL", "debug")
    monkeypatch.setenv("PROPERTY_DEDUPE_LOG_FORMAT", "JSON")
    monkeypatch.setenv("PROPERTY_DEDUPE_OUTPUT_DIR", "/tmp/dedupe")
    monkeypatch.setenv("PROPERTY_DEDUPE_EXPLAIN_LIMIT", "3")

    settings = reload_settings()

    assert settings.log_level == "DEBUG"
    assert settings.json_logs
    assert settings.output_dir == Path("/tmp/dedupe")
    assert settings.explain_limit == 3


def test_settings_read_dotenv_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("PROPERTY_DEDUPE_EXPLAIN_LIMIT=0\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert reload_settings().explain_limit == 0


def test_settings_reject_invalid_values() -> None:
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")
    with pytest.raises(ValidationError):
        Settings(log_format="xml")
    with pytest.raises(ValidationError):
        Settings(explain_limit=-1)


def test_json_formatter_merges_extra_data() -> None:
    record = logging.LogRecord("property_dedupe", logging.WARNING, __file__, 1, "dropped %d rows", (3,), None)
    record.extra_data = {"stage": "loose"}

    payload = json.loads(JSONFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "property_dedupe"
    assert payload["message"] == "dropped 3 rows"
    assert payload["stage"] == "loose"


def test_setup_logging_configures_root_logger() -> None:
    setup_logging(level="DEBUG", json_format=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JSONFormatter)
