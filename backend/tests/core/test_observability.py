"""Structured Logging: JSON formatter fields and the fault sink."""

import json
import logging

from forms_api.config import Settings
from forms_api.infrastructure.observability import JSONFormatter, log_fault


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "forms_api.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "forms_api.test"
    assert log["message"] == "hello world"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    record = _record(form_id="f-1", path="/api/v1/customer-forms", secret="x")
    log = json.loads(JSONFormatter().format(record))
    assert log["form_id"] == "f-1"
    assert log["path"] == "/api/v1/customer-forms"
    assert "secret" not in log


def test_log_fault_records_traceback(caplog):
    try:
        raise ValueError("boom")
    except ValueError as e:
        fault = e

    with caplog.at_level(logging.ERROR, logger="forms_api.faults"):
        log_fault(fault)

    [record] = caplog.records
    assert record.exc_info[1] is fault
    assert "boom" in record.getMessage()


def test_settings_rewrite_plain_postgres_url():
    settings = Settings(database_url="postgresql://u:p@host:5432/forms")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/forms"
