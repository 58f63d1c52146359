from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from hierarchy_rbac.core.actions import ActionKind, validate_action
from hierarchy_rbac.core.env import HRBAC_LOG_DECISIONS, get_env_bool
from hierarchy_rbac.core.errors import InvalidUserError
from hierarchy_rbac.core.roles import User
from hierarchy_rbac.core.scope import Scope, ensure_scope

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    user_id: str
    action: ActionKind
    scope: Scope
    reason: str
    granted_by: str | None = None
    matched_scope: Scope | None = None


def _decision_logging_enabled() -> bool:
    return LOGGER.isEnabledFor(logging.DEBUG) and get_env_bool(HRBAC_LOG_DECISIONS, default=False)


def _ensure_user(value: Any) -> User:
    if not isinstance(value, User):
        raise InvalidUserError("user", f"expected a User, got {type(value).__name__}", value=value)
    return value


def decide(user: User, action: ActionKind | str, scope: Scope) -> AuthorizationDecision:
    """Evaluate one request and report which role, if any, granted it.

    Roles are tried in the user's stored order and the first grant wins.
    A denial is a normal result; only malformed input raises.
    """
    subject = _ensure_user(user)
    target = ensure_scope(scope)
    kind = validate_action(action)

    decision = AuthorizationDecision(
        allowed=False,
        user_id=subject.user_id,
        action=kind,
        scope=target,
        reason="no role grants this action on this scope",
    )
    for role in subject.roles:
        if role.authorize(kind, target):
            decision = AuthorizationDecision(
                allowed=True,
                user_id=subject.user_id,
                action=kind,
                scope=target,
                reason=f"granted by role={role.role_id}",
                granted_by=role.role_id,
                matched_scope=role.matching_scope(target),
            )
            break

    if _decision_logging_enabled():
        LOGGER.debug(
            "Authorization decision. user=%s action=%s scope=%s allowed=%s role=%s",
            decision.user_id,
            kind.value,
            target.address,
            str(decision.allowed).lower(),
            decision.granted_by or "-",
            extra={
                "event": "authorization_decision",
                "user_id": decision.user_id,
                "action": kind.value,
                "scope": target.address,
                "allowed": decision.allowed,
                "granted_by": decision.granted_by,
            },
        )
    return decision


def authorize_user(user: User, action: ActionKind | str, scope: Scope) -> bool:
    return decide(user, action, scope).allowed
