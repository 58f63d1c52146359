from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from hierarchy_rbac.core.actions import DEFAULT_HTTP_ACTION_MAP, ActionKind, parse_http_action_map
from hierarchy_rbac.core.defaults import (
    DEFAULT_DEV_ENV_NAMES,
    DEFAULT_ENV_NAME,
    DEFAULT_HTTP_ACTION_MAP_CSV,
    DEFAULT_LOG_LEVEL,
)
from hierarchy_rbac.core.env import (
    HRBAC_ENV,
    HRBAC_ERROR_INCLUDE_DETAILS,
    HRBAC_HTTP_ACTION_MAP,
    HRBAC_LOG_JSON,
    HRBAC_LOG_LEVEL,
    get_env,
    get_env_bool,
)
from hierarchy_rbac.core.errors import InvalidActionError

DEV_ENV_NAMES = set(DEFAULT_DEV_ENV_NAMES)


def _resolve_http_action_map() -> dict[str, ActionKind]:
    raw = get_env(HRBAC_HTTP_ACTION_MAP, DEFAULT_HTTP_ACTION_MAP_CSV)
    try:
        mapping = parse_http_action_map(raw)
    except InvalidActionError as exc:
        raise RuntimeError(f"{HRBAC_HTTP_ACTION_MAP} is invalid: {exc.reason}") from exc
    return mapping or dict(DEFAULT_HTTP_ACTION_MAP)


@dataclass(frozen=True)
class RbacConfig:
    env: str = DEFAULT_ENV_NAME
    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = False
    error_include_details: bool = False
    http_action_map: dict[str, ActionKind] = field(default_factory=lambda: dict(DEFAULT_HTTP_ACTION_MAP))

    @property
    def is_dev_env(self) -> bool:
        return self.env in DEV_ENV_NAMES

    @staticmethod
    def from_env() -> "RbacConfig":
        env_name = get_env(HRBAC_ENV, DEFAULT_ENV_NAME).lower() or DEFAULT_ENV_NAME
        return RbacConfig(
            env=env_name,
            log_level=get_env(HRBAC_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper() or DEFAULT_LOG_LEVEL,
            log_json=get_env_bool(HRBAC_LOG_JSON, default=False),
            error_include_details=get_env_bool(HRBAC_ERROR_INCLUDE_DETAILS, default=False),
            http_action_map=_resolve_http_action_map(),
        )


@lru_cache(maxsize=1)
def get_config() -> RbacConfig:
    return RbacConfig.from_env()
