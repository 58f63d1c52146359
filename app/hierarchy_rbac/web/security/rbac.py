"""
Request guards for FastAPI handlers.

The embedding application resolves the current principal into a ``User``
and stores it on ``request.state.user``; the guard maps the HTTP method to an
action, parses the scope from a path parameter and asks the engine.
"""

from collections.abc import Callable
from functools import wraps

from fastapi import HTTPException, Request

from hierarchy_rbac.core.actions import ActionKind, action_for_http_method, validate_action
from hierarchy_rbac.core.authorization import decide
from hierarchy_rbac.core.config import get_config
from hierarchy_rbac.core.defaults import DEFAULT_SCOPE_PATH_PARAM
from hierarchy_rbac.core.errors import InvalidArgumentError, InvalidScopeError
from hierarchy_rbac.core.scope import Scope


def _find_request(args: tuple, kwargs: dict) -> Request | None:
    for arg in args:
        if isinstance(arg, Request):
            return arg
    candidate = kwargs.get("request")
    return candidate if isinstance(candidate, Request) else None


def resolve_request_scope(request: Request, scope_param: str = DEFAULT_SCOPE_PATH_PARAM) -> Scope:
    raw = request.path_params.get(scope_param)
    if raw is None:
        raise InvalidScopeError(scope_param, "path parameter is missing")
    return Scope.parse(str(raw))


def require_access(
    action: ActionKind | str | None = None,
    scope_param: str = DEFAULT_SCOPE_PATH_PARAM,
) -> Callable:
    """
    Decorator enforcing a scope grant on an async endpoint.

    Usage:
        @router.delete("/resources/{scope_path:path}")
        @require_access()
        async def delete_resource(request: Request, scope_path: str):
            ...

    Raises:
        HTTPException: 401 without a user, 400 on malformed input,
        403 when no role grants the request.
    """
    fixed_action = validate_action(action) if action is not None else None

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)
            if request is None:
                raise HTTPException(
                    status_code=500,
                    detail="Request object not found - cannot verify access",
                )

            user = getattr(request.state, "user", None)
            if user is None:
                raise HTTPException(status_code=401, detail="User not authenticated")

            try:
                requested = fixed_action or action_for_http_method(
                    request.method,
                    get_config().http_action_map,
                )
                decision = decide(user, requested, resolve_request_scope(request, scope_param))
            except InvalidArgumentError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc

            if not decision.allowed:
                raise HTTPException(
                    status_code=403,
                    detail=f"Access denied: {decision.action.value} on {decision.scope.address}",
                )

            request.state.authorization = decision
            return await func(*args, **kwargs)

        return wrapper

    return decorator
