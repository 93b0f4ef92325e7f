from __future__ import annotations

import json
import logging
import sys

from wellness.core.logging import (
    RequestContextFilter,
    _ContainerFormatter,
    _JsonFormatter,
    request_id_var,
    setup_logging,
    user_id_var,
)


def _record(level: int = logging.INFO, msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="svc.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_setup_logging_sets_root_level() -> None:
    setup_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_defaults_to_info_for_unknown_level() -> None:
    setup_logging("nonexistent")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_quiets_sqlalchemy_and_uvicorn_at_debug() -> None:
    setup_logging("debug")
    assert logging.getLogger("uvicorn").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_setup_logging_json_handler() -> None:
    setup_logging("info", json_format=True)
    [handler] = logging.getLogger().handlers
    assert isinstance(handler.formatter, _JsonFormatter)
    setup_logging("info")
    [handler] = logging.getLogger().handlers
    assert isinstance(handler.formatter, _ContainerFormatter)


def test_container_formatter_location_only_for_warning_and_above() -> None:
    fmt = _ContainerFormatter()
    assert "[svc.py:42]" not in fmt.format(_record(logging.INFO))
    assert "[svc.py:42]" in fmt.format(_record(logging.WARNING))


def test_json_formatter_produces_valid_json() -> None:
    parsed = json.loads(_JsonFormatter().format(_record(msg="hi")))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "test.logger"
    assert parsed["message"] == "hi"
    assert "timestamp" in parsed


def test_json_formatter_includes_request_context() -> None:
    record = _record(
        request_id="abc-123",
        method="GET",
        path="/v1/courses",
        user_id="7",
        status_code=200,
        duration_ms=3.2,
    )
    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["request_id"] == "abc-123"
    assert parsed["user_id"] == "7"
    assert parsed["path"] == "/v1/courses"
    assert parsed["duration_ms"] == 3.2


def test_json_formatter_skips_placeholder_context() -> None:
    parsed = json.loads(_JsonFormatter().format(_record(request_id="-", user_id="-")))
    assert "request_id" not in parsed
    assert "user_id" not in parsed


def test_json_formatter_includes_exception_info() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record(logging.ERROR, msg="failed")
        record.exc_info = sys.exc_info()
    parsed = json.loads(_JsonFormatter().format(record))
    assert "ValueError: boom" in parsed["exception"]


def test_container_formatter_tags_request_id() -> None:
    fmt = _ContainerFormatter()
    assert "[req-1]" in fmt.format(_record(request_id="req-1"))
    # Records logged outside a request still format.
    assert "[-]" in fmt.format(_record())


def test_context_filter_reads_context_vars() -> None:
    record = _record()
    req_token = request_id_var.set("req-42")
    user_token = user_id_var.set("7")
    try:
        RequestContextFilter().filter(record)
    finally:
        request_id_var.reset(req_token)
        user_id_var.reset(user_token)
    assert record.request_id == "req-42"  # type: ignore[attr-defined]
    assert record.user_id == "7"  # type: ignore[attr-defined]


def test_context_filter_keeps_explicit_extra() -> None:
    record = _record(request_id="explicit")
    RequestContextFilter().filter(record)
    assert record.request_id == "explicit"  # type: ignore[attr-defined]
    assert record.user_id == "-"  # type: ignore[attr-defined]


def test_setup_logging_attaches_context_filter() -> None:
    setup_logging("info")
    [handler] = logging.getLogger().handlers
    assert any(isinstance(f, RequestContextFilter) for f in handler.filters)
