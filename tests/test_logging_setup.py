"""Tests for logging configuration."""

import json
import logging

import pytest

from travel_guide.config import ObservabilityConfig
from travel_guide.logging_setup import JsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(**extra):
    record = logging.LogRecord(
        "travel_guide.services.resolver", logging.INFO, __file__, 1, "Query matched", None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_includes_extra_fields(self):
        line = JsonFormatter().format(make_record(place="Taj Mahal", intent="HOURS"))
        payload = json.loads(line)
        assert payload["message"] == "Query matched"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "travel_guide.services.resolver"
        assert payload["place"] == "Taj Mahal"
        assert payload["intent"] == "HOURS"

    def test_standard_attributes_are_not_repeated(self):
        payload = json.loads(JsonFormatter().format(make_record()))
        assert "lineno" not in payload
        assert "args" not in payload


class TestSetupLogging:
    def test_installs_one_handler(self, restore_root_logger):
        config = ObservabilityConfig(level="debug", structured=True)
        setup_logging(config)
        setup_logging(config)

        ours = [h for h in restore_root_logger.handlers if h.get_name() == "travel_guide"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JsonFormatter)
        assert restore_root_logger.level == logging.DEBUG

    def test_plain_format(self, restore_root_logger):
        setup_logging(ObservabilityConfig(structured=False))
        (handler,) = [
            h for h in restore_root_logger.handlers if h.get_name() == "travel_guide"
        ]
        assert not isinstance(handler.formatter, JsonFormatter)
