from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from hierarchy_rbac.core.actions import ActionKind
from hierarchy_rbac.core.authorization import decide
from hierarchy_rbac.core.roles import Role, User
from hierarchy_rbac.core.scope import Scope

ROLE_GRANT_COLUMNS = ["role_id", "role_name", "scope", "depth", "actions"]
ACCESS_MATRIX_COLUMNS = ["user_id", "user_name", "action", "scope", "allowed", "granted_by"]


def role_grants_frame(roles: Iterable[Role]) -> pd.DataFrame:
    rows: list[dict[str, object]] = []
    for role in roles:
        actions = ",".join(sorted(kind.value for kind in role.actions))
        for scope in role.scopes:
            rows.append(
                {
                    "role_id": role.role_id,
                    "role_name": role.role_name,
                    "scope": scope.address,
                    "depth": scope.depth,
                    "actions": actions,
                }
            )
    if not rows:
        return pd.DataFrame(columns=ROLE_GRANT_COLUMNS)
    return pd.DataFrame(rows, columns=ROLE_GRANT_COLUMNS)


def access_matrix(
    users: Iterable[User],
    checks: Iterable[tuple[ActionKind | str, Scope]],
) -> pd.DataFrame:
    check_list = list(checks)
    rows: list[dict[str, object]] = []
    for user in users:
        for action, scope in check_list:
            decision = decide(user, action, scope)
            rows.append(
                {
                    "user_id": decision.user_id,
                    "user_name": user.user_name or "",
                    "action": decision.action.value,
                    "scope": decision.scope.address,
                    "allowed": decision.allowed,
                    "granted_by": decision.granted_by or "",
                }
            )
    if not rows:
        return pd.DataFrame(columns=ACCESS_MATRIX_COLUMNS)
    out = pd.DataFrame(rows, columns=ACCESS_MATRIX_COLUMNS)
    out["allowed"] = out["allowed"].astype(bool)
    return out
