"""Structured logging: JSON lines, context propagation, idempotent setup."""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    get_logger,
)


def _format(record_msg, **extra):
    record = logging.LogRecord("ledger_kernel.test", logging.INFO, "", 0, record_msg, (), None)
    for k, v in extra.items():
        setattr(record, k, v)
    return json.loads(StructuredFormatter().format(record))


def test_formatter_emits_json_with_extras():
    payload = _format("payment_completed", job_id=7, amount=Decimal("250.50"))
    assert payload["message"] == "payment_completed"
    assert payload["level"] == "INFO"
    assert payload["job_id"] == 7
    assert payload["amount"] == "250.50"


def test_context_fields_are_included():
    with LogContext.bind(correlation_id="abc", profile_id=3, operation="pay_job"):
        payload = _format("hello")
    assert payload["correlation_id"] == "abc"
    assert payload["profile_id"] == "3"
    assert payload["operation"] == "pay_job"


def test_bind_restores_previous_values():
    LogContext.set(correlation_id="outer")
    with LogContext.bind(correlation_id="inner"):
        assert LogContext.get_all()["correlation_id"] == "inner"
    assert LogContext.get_all()["correlation_id"] == "outer"


def test_bind_skips_none():
    with LogContext.bind(job_id=None, operation="deposit"):
        assert "job_id" not in LogContext.get_all()


def test_exception_fields_are_structured():
    from ledger_kernel.exceptions import JobAlreadyPaidError

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = get_logger("test.exc")
    logger.addHandler(handler)
    try:
        try:
            raise JobAlreadyPaidError(9)
        except JobAlreadyPaidError:
            logger.error("failed", exc_info=True)
    finally:
        logger.removeHandler(handler)

    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["exc_type"] == "JobAlreadyPaidError"
    assert payload["exc_code"] == "JOB_ALREADY_PAID"
    assert payload["exc_job_id"] == 9
    assert "traceback" in payload


def test_get_logger_namespaces_under_kernel():
    assert get_logger("services.payment").name == "ledger_kernel.services.payment"


def test_captured_logs_fixture(captured_logs):
    get_logger("test.capture").info("ping", extra={"n": 1})
    records = captured_logs()
    assert records[-1]["message"] == "ping"
    assert records[-1]["n"] == 1


def test_unknown_context_field_rejected():
    with pytest.raises(ValueError):
        LogContext.set(tenant="x")
