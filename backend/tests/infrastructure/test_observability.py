"""Structured Logging - JSON formatter fields."""

import json
import logging

from taskboard.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "taskboard.services.task_service", logging.INFO, __file__, 1,
        "Task created", None, None,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "taskboard.services.task_service"
    assert out["message"] == "Task created"
    assert "timestamp" in out


def test_json_formatter_surfaces_known_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(task_id=7, error_code="INVALID_STATUS", unrelated="x"),
    ))
    assert out["task_id"] == 7
    assert out["error_code"] == "INVALID_STATUS"
    assert "unrelated" not in out
