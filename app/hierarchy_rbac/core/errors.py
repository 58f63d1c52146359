from __future__ import annotations

from typing import Any


class RbacError(Exception):
    """Base class for every error raised by the authorization engine."""


class InvalidArgumentError(RbacError, ValueError):
    """Raised when an input value is malformed.

    ``argument`` names the parameter or field that failed and ``reason``
    says why. Callers use this family to tell a malformed request apart
    from a denied one, which is a plain ``False``.
    """

    def __init__(self, argument: str, reason: str, *, value: Any = None) -> None:
        self.argument = str(argument)
        self.reason = str(reason)
        self.value = value
        super().__init__(f"{self.argument}: {self.reason}")


class InvalidUserError(InvalidArgumentError):
    """Raised when a user value or its role collection is malformed."""


class InvalidScopeError(InvalidArgumentError):
    """Raised when a scope value or one of its segments is malformed."""


class InvalidActionError(InvalidArgumentError):
    """Raised when an action is outside the closed ActionKind set."""


class MissingRequiredFieldError(InvalidArgumentError):
    """Raised when a required identifier or field is empty."""


class DuplicateActionError(RbacError, ValueError):
    """Raised when a role is granted an action it already holds."""

    def __init__(self, action: Any, *, role_id: str = "") -> None:
        self.action = action
        self.role_id = str(role_id or "")
        label = getattr(action, "value", action)
        if self.role_id:
            message = f"action {label} is already granted by role {self.role_id}"
        else:
            message = f"action {label} is listed more than once"
        super().__init__(message)
