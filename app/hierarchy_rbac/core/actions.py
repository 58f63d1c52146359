from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from hierarchy_rbac.core.defaults import DEFAULT_HTTP_ACTION_MAP_CSV
from hierarchy_rbac.core.errors import InvalidActionError


class ActionKind(str, Enum):
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    SHARE = "SHARE"
    ALL = "ALL"

    def __str__(self) -> str:
        return self.value


ACTION_CHOICES = tuple(kind.value for kind in ActionKind)


def validate_action(value: Any, *, argument: str = "action") -> ActionKind:
    """Return the ActionKind for ``value`` or raise InvalidActionError.

    Members pass through. Strings must match a member name exactly: no case
    folding and no trimming.
    """
    if isinstance(value, ActionKind):
        return value
    if isinstance(value, str) and value in ACTION_CHOICES:
        return ActionKind(value)
    allowed = ", ".join(ACTION_CHOICES)
    raise InvalidActionError(
        argument,
        f"invalid action {value!r}; must be one of {allowed}",
        value=value,
    )


def action_satisfies(granted: Iterable[ActionKind], requested: ActionKind) -> bool:
    granted_set = granted if isinstance(granted, (set, frozenset)) else set(granted)
    return ActionKind.ALL in granted_set or requested in granted_set


def parse_http_action_map(raw: str) -> dict[str, ActionKind]:
    mapping: dict[str, ActionKind] = {}
    for token in str(raw or "").split(","):
        item = token.strip()
        if not item:
            continue
        method, sep, action = item.partition(":")
        method = method.strip().upper()
        if not sep or not method:
            raise InvalidActionError("http_action_map", f"entry {item!r} must be METHOD:ACTION", value=item)
        mapping[method] = validate_action(action.strip().upper(), argument="http_action_map")
    return mapping


DEFAULT_HTTP_ACTION_MAP = parse_http_action_map(DEFAULT_HTTP_ACTION_MAP_CSV)


def action_for_http_method(method: str, mapping: Mapping[str, ActionKind] | None = None) -> ActionKind:
    table = DEFAULT_HTTP_ACTION_MAP if mapping is None else mapping
    key = str(method or "").strip().upper()
    action = table.get(key)
    if action is None:
        raise InvalidActionError("method", f"no action is mapped to HTTP method {method!r}", value=method)
    return action
