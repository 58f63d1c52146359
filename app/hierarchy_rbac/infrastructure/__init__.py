"""Infrastructure adapters for logging."""

from hierarchy_rbac.infrastructure.logging import APP_LOGGER_NAME, reset_app_logging, setup_app_logging

__all__ = [
    "APP_LOGGER_NAME",
    "reset_app_logging",
    "setup_app_logging",
]
