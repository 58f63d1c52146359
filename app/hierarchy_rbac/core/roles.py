from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from hierarchy_rbac.core.actions import ActionKind, action_satisfies, validate_action
from hierarchy_rbac.core.errors import (
    DuplicateActionError,
    InvalidActionError,
    InvalidScopeError,
    InvalidUserError,
    MissingRequiredFieldError,
)
from hierarchy_rbac.core.scope import Scope, ensure_scope

LOGGER = logging.getLogger(__name__)


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise MissingRequiredFieldError(field, f"{field} must be a non-empty string", value=value)
    return value


def _coerce_scope(item: Any, index: int) -> Scope:
    if isinstance(item, Scope):
        return item
    if isinstance(item, str):
        return Scope(item)
    raise InvalidScopeError(
        "scopes",
        f"entry {index} must be a Scope or a path string, got {type(item).__name__}",
        value=item,
    )


def _coerce_scopes(raw: Any) -> tuple[Scope, ...]:
    if raw is None:
        raise MissingRequiredFieldError("scopes", "at least one scope must be provided")
    if isinstance(raw, (Scope, str)):
        return (_coerce_scope(raw, 0),)
    if not isinstance(raw, (list, tuple)):
        raise InvalidScopeError(
            "scopes",
            f"expected a Scope, a path string or a list of them, got {type(raw).__name__}",
            value=raw,
        )
    if not raw:
        raise InvalidScopeError("scopes", "at least one scope must be provided", value=raw)
    return tuple(_coerce_scope(item, index) for index, item in enumerate(raw))


def _coerce_actions(raw: Any) -> frozenset[ActionKind]:
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        raw = (raw,)
    elif not isinstance(raw, Iterable):
        raise InvalidActionError(
            "actions",
            f"expected an action or a list of actions, got {type(raw).__name__}",
            value=raw,
        )
    seen: set[ActionKind] = set()
    for value in raw:
        action = validate_action(value, argument="actions")
        if action in seen:
            raise DuplicateActionError(action)
        seen.add(action)
    return frozenset(seen)


class Role:
    """A named bundle of scopes and granted actions.

    Scopes are fixed at construction. The action set is replaced wholesale
    under a lock on every mutation, so readers always see a consistent
    frozenset without locking.
    """

    def __init__(
        self,
        role_id: str,
        role_name: str,
        scopes: Scope | str | list[Scope | str] | tuple[Scope | str, ...],
        actions: Iterable[ActionKind | str] = (),
        role_description: str | None = None,
    ) -> None:
        self._role_id = _require_text(role_id, "role_id")
        self._role_name = _require_text(role_name, "role_name")
        self._role_description = role_description
        self._scopes = _coerce_scopes(scopes)
        self._actions = _coerce_actions(actions)
        self._lock = threading.Lock()

    @property
    def role_id(self) -> str:
        return self._role_id

    @property
    def role_name(self) -> str:
        return self._role_name

    @property
    def role_description(self) -> str | None:
        return self._role_description

    @property
    def scopes(self) -> tuple[Scope, ...]:
        return self._scopes

    @property
    def actions(self) -> frozenset[ActionKind]:
        return self._actions

    def add_action(self, action: ActionKind | str) -> None:
        kind = validate_action(action)
        with self._lock:
            if kind in self._actions:
                raise DuplicateActionError(kind, role_id=self._role_id)
            self._actions = self._actions | {kind}
        LOGGER.debug("Action granted. role=%s action=%s", self._role_id, kind.value)

    def remove_action(self, action: ActionKind | str) -> None:
        kind = validate_action(action)
        with self._lock:
            if kind not in self._actions:
                return
            self._actions = self._actions - {kind}
        LOGGER.debug("Action revoked. role=%s action=%s", self._role_id, kind.value)

    def matching_scope(self, scope: Scope) -> Scope | None:
        target = ensure_scope(scope)
        for owned in self._scopes:
            if owned.contains_or_equals(target):
                return owned
        return None

    def authorize(self, action: ActionKind | str, scope: Scope) -> bool:
        target = ensure_scope(scope)
        kind = validate_action(action)
        if self.matching_scope(target) is None:
            return False
        return action_satisfies(self._actions, kind)

    def __repr__(self) -> str:
        actions = ",".join(sorted(kind.value for kind in self._actions))
        scopes = ",".join(scope.path for scope in self._scopes)
        return f"Role(role_id={self._role_id!r}, scopes=[{scopes}], actions=[{actions}])"


class User:
    """An authorization subject carrying already-resolved role references."""

    def __init__(
        self,
        user_id: str,
        user_name: str | None = None,
        roles: list[Role] | tuple[Role, ...] = (),
    ) -> None:
        self._user_id = _require_text(user_id, "user_id")
        self._user_name = user_name
        if not isinstance(roles, (list, tuple)):
            raise InvalidUserError(
                "roles",
                f"roles must be a list or tuple of Role, got {type(roles).__name__}",
                value=roles,
            )
        for index, role in enumerate(roles):
            if not isinstance(role, Role):
                raise InvalidUserError(
                    "roles",
                    f"entry {index} must be a Role, got {type(role).__name__}",
                    value=role,
                )
        self._roles = tuple(roles)

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def user_name(self) -> str | None:
        return self._user_name

    @property
    def roles(self) -> tuple[Role, ...]:
        return self._roles

    def __repr__(self) -> str:
        role_ids = ",".join(role.role_id for role in self._roles)
        return f"User(user_id={self._user_id!r}, roles=[{role_ids}])"
