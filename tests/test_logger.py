"""Unit tests for logging setup."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

import json
import logging
from logger import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord("services.orchestrator", logging.INFO, __file__, 1, "Chat turn for user %s", ("u1",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields():
    """Test that JSON lines carry level, logger and message."""
    data = json.loads(JSONFormatter().format(_record()))

    assert data["level"] == "INFO"
    assert data["logger"] == "services.orchestrator"
    assert data["message"] == "Chat turn for user u1"
    assert "timestamp" in data


def test_json_formatter_includes_known_extras():
    """Test that selected extra attributes are copied into the line."""
    data = json.loads(JSONFormatter().format(_record(user_id="u1", flow="turn", unrelated="x")))

    assert data["user_id"] == "u1"
    assert data["flow"] == "turn"
    assert "unrelated" not in data


def test_setup_logging_is_idempotent():
    """Test that repeated setup does not stack handlers."""
    root = logging.getLogger()
    before = len(root.handlers)

    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")

    ours = [h for h in root.handlers if getattr(h, "_job_intake_handler", False)]
    assert len(ours) == 1
    assert root.level == logging.INFO
    assert len(root.handlers) <= before + 1
