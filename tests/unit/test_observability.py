"""Unit tests for logging, metrics and configuration"""

import json
import logging
import pytest
from prometheus_client import REGISTRY
from penny_engine.config import Settings
from penny_engine.infrastructure.observability.logging import CustomJsonFormatter, setup_logging
from penny_engine.infrastructure.observability.metrics import record_streak_advance


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_adds_service_fields():
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord("penny", logging.WARNING, __file__, 1, "Streak advanced", None, None)
    record.current_streak = 4

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Streak advanced"
    assert payload["level"] == "WARNING"
    assert payload["service"] == "penny-engine"
    assert payload["current_streak"] == 4
    assert "timestamp" in payload


def test_setup_logging_installs_single_json_handler(restore_root_logger):
    setup_logging("DEBUG")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, CustomJsonFormatter)


def test_streak_advance_metrics():
    extended_before = REGISTRY.get_sample_value("penny_streak_advances_total", {"outcome": "extended"}) or 0.0
    reset_before = REGISTRY.get_sample_value("penny_streak_advances_total", {"outcome": "reset"}) or 0.0

    record_streak_advance(previous_streak=2, current_streak=3)
    record_streak_advance(previous_streak=3, current_streak=0)

    assert REGISTRY.get_sample_value("penny_streak_advances_total", {"outcome": "extended"}) == extended_before + 1
    assert REGISTRY.get_sample_value("penny_streak_advances_total", {"outcome": "reset"}) == reset_before + 1
    assert REGISTRY.get_sample_value("penny_current_streak_days") == 0.0


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.streak_history_days == 90
    assert settings.savings_plan_days == 30
    assert settings.price_range_spread == 0.2


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("PENNY_SAVINGS_PLAN_DAYS", "14")
    monkeypatch.setenv("PENNY_LOG_LEVEL", "DEBUG")

    settings = Settings(_env_file=None)

    assert settings.savings_plan_days == 14
    assert settings.log_level == "DEBUG"
