"""Role-based authorization over arbitrarily deep resource hierarchies."""

from hierarchy_rbac.core.actions import ActionKind, validate_action
from hierarchy_rbac.core.authorization import AuthorizationDecision, authorize_user, decide
from hierarchy_rbac.core.errors import (
    DuplicateActionError,
    InvalidActionError,
    InvalidArgumentError,
    InvalidScopeError,
    InvalidUserError,
    MissingRequiredFieldError,
    RbacError,
)
from hierarchy_rbac.core.roles import Role, User
from hierarchy_rbac.core.scope import Scope
from hierarchy_rbac.core.signatures import scope_from_levels, scope_from_signature, signature_for_scope

__all__ = [
    "ActionKind",
    "AuthorizationDecision",
    "DuplicateActionError",
    "InvalidActionError",
    "InvalidArgumentError",
    "InvalidScopeError",
    "InvalidUserError",
    "MissingRequiredFieldError",
    "RbacError",
    "Role",
    "Scope",
    "User",
    "authorize_user",
    "decide",
    "scope_from_levels",
    "scope_from_signature",
    "signature_for_scope",
    "validate_action",
]
