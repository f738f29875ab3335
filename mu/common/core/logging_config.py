"""
Structured logging for the Lambda log stream.

Every record is written as a single JSON object so CloudWatch Logs Insights
can filter on its fields. Records emitted while an invocation is running are
tagged with its request id and trace header.
"""

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from string import Template
from typing import Any, Dict

import yaml

from .request_context import get_request_id, get_trace_id

# Everything else found on a record was passed through `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class CustomJsonFormatter(logging.Formatter):
    """
    Output keys, in order:
      _time, level, logger, message, trace_id, aws_request_id, <extra fields>, exception

    trace_id and aws_request_id are omitted outside an invocation.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "_time": self._timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        ids = (
            ("trace_id", getattr(record, "trace_id", None) or get_trace_id()),
            ("aws_request_id", getattr(record, "aws_request_id", None) or get_request_id()),
        )
        entry.update((key, value) for key, value in ids if value)

        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_") and key not in entry
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)

    @staticmethod
    def _timestamp(record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return created.isoformat(timespec="milliseconds")


def _render_config(config_path: str, level: str) -> Dict[str, Any]:
    with open(config_path, encoding="utf-8") as f:
        raw = f.read()
    # ${VAR} placeholders; LOG_LEVEL falls back to the configured level.
    variables = {"LOG_LEVEL": level, **os.environ}
    return yaml.safe_load(Template(raw).safe_substitute(variables))


def setup_logging(config_path: str = "runtime_log.yaml", level: str = "INFO") -> None:
    """
    Configure logging from a YAML dictConfig file.

    Falls back to logging.basicConfig when the file does not exist.
    """
    if not os.path.isfile(config_path):
        logging.basicConfig(level=level)
        return

    logging.config.dictConfig(_render_config(config_path, level))
