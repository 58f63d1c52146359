from __future__ import annotations

import sys
from pathlib import Path

import pytest

APP_ROOT = Path(__file__).resolve().parents[1] / "app"
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

from hierarchy_rbac.core.config import get_config  # noqa: E402
from hierarchy_rbac.infrastructure.logging import reset_app_logging  # noqa: E402

_HRBAC_ENV_KEYS = (
    "HRBAC_ENV",
    "HRBAC_LOG_LEVEL",
    "HRBAC_LOG_JSON",
    "HRBAC_LOG_DECISIONS",
    "HRBAC_ERROR_INCLUDE_DETAILS",
    "HRBAC_HTTP_ACTION_MAP",
)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _HRBAC_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()
    reset_app_logging()
