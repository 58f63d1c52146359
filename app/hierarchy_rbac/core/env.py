from __future__ import annotations

import os

HRBAC_ENV = "HRBAC_ENV"
HRBAC_LOG_LEVEL = "HRBAC_LOG_LEVEL"
HRBAC_LOG_JSON = "HRBAC_LOG_JSON"
HRBAC_LOG_DECISIONS = "HRBAC_LOG_DECISIONS"
HRBAC_ERROR_INCLUDE_DETAILS = "HRBAC_ERROR_INCLUDE_DETAILS"
HRBAC_HTTP_ACTION_MAP = "HRBAC_HTTP_ACTION_MAP"

TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def get_env(name: str, default: str = "") -> str:
    return str(os.getenv(name, default)).strip()


def get_env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return str(raw).strip().lower() in TRUE_VALUES

