import json
import logging
import os

from mu.common.core import logging_config, request_context
from mu.common.core.config import BaseAppConfig


def _record(msg="Test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test_logger",
        level=logging.INFO,
        pathname="test_path.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_custom_json_formatter_includes_invocation_ids():
    """Ensure the formatter includes TraceID and RequestID from context."""
    request_context.clear_request_context()
    request_context.set_trace_id("Root=1-abc-123;Sampled=1")
    request_context.set_request_id("0000-0001")

    try:
        log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))
    finally:
        request_context.clear_request_context()

    assert log_json["message"] == "Test message"
    assert log_json["level"] == "INFO"
    assert log_json["logger"] == "test_logger"
    assert log_json["trace_id"] == "Root=1-abc-123;Sampled=1"
    assert log_json["aws_request_id"] == "0000-0001"


def test_custom_json_formatter_without_context():
    request_context.clear_request_context()

    log_json = json.loads(logging_config.CustomJsonFormatter().format(_record()))

    assert "trace_id" not in log_json
    assert "aws_request_id" not in log_json


def test_custom_json_formatter_includes_extra_fields():
    record = _record(target_url="http://127.0.0.1:9001", error_type="ConnectError")

    log_json = json.loads(logging_config.CustomJsonFormatter().format(record))

    assert log_json["target_url"] == "http://127.0.0.1:9001"
    assert log_json["error_type"] == "ConnectError"


def test_setup_logging_substitutes_environment(tmp_path, monkeypatch):
    config_file = tmp_path / "runtime_log.yaml"
    config_file.write_text(
        "\n".join(
            [
                "version: 1",
                "disable_existing_loggers: false",
                "loggers:",
                "  mu.test_setup:",
                "    level: ${LOG_LEVEL}",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    logging_config.setup_logging(str(config_file))

    assert logging.getLogger("mu.test_setup").level == logging.WARNING


def test_setup_logging_missing_file_falls_back(tmp_path):
    # Must not raise.
    logging_config.setup_logging(str(tmp_path / "missing.yaml"))


def test_default_config_is_shipped_with_the_package(monkeypatch):
    monkeypatch.delenv("LOG_CONFIG_PATH", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    path = BaseAppConfig().LOG_CONFIG_PATH

    assert os.path.isfile(path)
    rendered = logging_config._render_config(path, "DEBUG")
    assert rendered["formatters"]["json"]["()"] == (
        "mu.common.core.logging_config.CustomJsonFormatter"
    )
    assert rendered["loggers"]["mu"]["level"] == "DEBUG"
