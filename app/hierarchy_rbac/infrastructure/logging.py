from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from hierarchy_rbac.core.config import RbacConfig, get_config

APP_LOGGER_NAME = "hierarchy_rbac"
PLAIN_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_LOGGING_CONFIGURED = False
# Attributes every LogRecord carries; anything else on a record came from ``extra=``.
_STANDARD_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


class _JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, then extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_record_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=True)


def _build_formatter(config: RbacConfig) -> logging.Formatter:
    if config.log_json:
        return _JsonFormatter()
    return logging.Formatter(PLAIN_LOG_FORMAT)


def setup_app_logging(config: RbacConfig | None = None) -> None:
    """Attach a single stdout handler to the package logger. Later calls are no-ops."""
    global _LOGGING_CONFIGURED  # pylint: disable=global-statement
    if _LOGGING_CONFIGURED:
        return

    config = config or get_config()
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_build_formatter(config))

    package_logger = logging.getLogger(APP_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    _LOGGING_CONFIGURED = True
    logging.getLogger(__name__).debug(
        "RBAC logging ready. level=%s json=%s",
        logging.getLevelName(level),
        str(config.log_json).lower(),
    )


def reset_app_logging() -> None:
    global _LOGGING_CONFIGURED  # pylint: disable=global-statement
    package_logger = logging.getLogger(APP_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
    _LOGGING_CONFIGURED = False
