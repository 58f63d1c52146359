from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

APP_ROOT = Path(__file__).resolve().parents[1] / "app"
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

from hierarchy_rbac.core.config import RbacConfig
from hierarchy_rbac.infrastructure.logging import APP_LOGGER_NAME, setup_app_logging


def test_json_logging_includes_extra_fields(capsys: pytest.CaptureFixture[str]) -> None:
    setup_app_logging(RbacConfig(log_json=True, log_level="DEBUG"))

    logging.getLogger("hierarchy_rbac.core.authorization").debug(
        "Authorization decision.",
        extra={"event": "authorization_decision", "allowed": False},
    )

    lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    payload = json.loads(lines[-1])
    assert payload["level"] == "DEBUG"
    assert payload["logger"] == "hierarchy_rbac.core.authorization"
    assert payload["message"] == "Authorization decision."
    assert payload["event"] == "authorization_decision"
    assert payload["allowed"] is False


def test_setup_is_idempotent() -> None:
    setup_app_logging(RbacConfig())
    setup_app_logging(RbacConfig(log_json=True))

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    assert len(app_logger.handlers) == 1
    assert app_logger.propagate is False
    assert type(app_logger.handlers[0].formatter) is logging.Formatter


def test_plain_format_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    setup_app_logging(RbacConfig())

    logging.getLogger("hierarchy_rbac.reports").info("Report ready.")

    out = capsys.readouterr().out
    assert "INFO hierarchy_rbac.reports Report ready." in out


def test_json_logging_omits_standard_record_attributes(capsys: pytest.CaptureFixture[str]) -> None:
    setup_app_logging(RbacConfig(log_json=True, log_level="INFO"))

    logging.getLogger("hierarchy_rbac.cli").info("Check finished.", extra={"user_id": "anita"})

    lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    payload = json.loads(lines[-1])
    assert set(payload) == {"ts", "level", "logger", "message", "user_id"}
    assert payload["user_id"] == "anita"


def test_setup_leaves_root_logger_alone() -> None:
    root = logging.getLogger()
    root_handlers = list(root.handlers)

    setup_app_logging(RbacConfig(log_level="DEBUG"))

    assert root.handlers == root_handlers
    assert logging.getLogger(APP_LOGGER_NAME).level == logging.DEBUG
