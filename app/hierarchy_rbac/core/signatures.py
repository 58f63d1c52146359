"""
Fixed-depth target signatures.

Older integrations address resources with four fixed slots,
``tenant/workspace/job/discussion``, where ``*`` marks "everything at this
level". A trailing run of wildcards is the same thing as a shorter scope, so
these helpers translate signatures to and from :class:`Scope`.
"""

from __future__ import annotations

from hierarchy_rbac.core.defaults import FIXED_SIGNATURE_DEPTH, SCOPE_SEPARATOR, SCOPE_WILDCARD
from hierarchy_rbac.core.errors import InvalidScopeError, MissingRequiredFieldError
from hierarchy_rbac.core.scope import Scope, ensure_scope


def _concrete_prefix(levels: list[str | None], *, source: object) -> list[str]:
    concrete: list[str] = []
    wildcard_seen = False
    for index, level in enumerate(levels):
        if level is None or level in ("", SCOPE_WILDCARD):
            wildcard_seen = True
            continue
        if wildcard_seen:
            raise InvalidScopeError(
                "signature",
                f"level {index} ({level!r}) follows a wildcard; wildcards may only trail",
                value=source,
            )
        concrete.append(level)
    return concrete


def scope_from_signature(signature: str) -> Scope:
    if not isinstance(signature, str) or not signature:
        raise InvalidScopeError("signature", "a non-empty signature string is required", value=signature)
    levels: list[str | None] = list(signature.split(SCOPE_SEPARATOR))
    concrete = _concrete_prefix(levels, source=signature)
    if not concrete:
        raise InvalidScopeError("signature", "the first level must be concrete", value=signature)
    return Scope(concrete)


def scope_from_levels(
    tenant: str,
    workspace: str | None = None,
    job: str | None = None,
    discussion: str | None = None,
) -> Scope:
    if not tenant or tenant == SCOPE_WILDCARD:
        raise MissingRequiredFieldError("tenant", "tenant must be provided", value=tenant)
    levels = [tenant, workspace, job, discussion]
    return Scope(_concrete_prefix(levels, source=levels))


def signature_for_scope(scope: Scope, depth: int = FIXED_SIGNATURE_DEPTH) -> str:
    scope = ensure_scope(scope)
    if scope.depth > depth:
        raise InvalidScopeError(
            "scope",
            f"{scope.address} has {scope.depth} levels; fixed signatures hold {depth}",
            value=scope,
        )
    padding = [SCOPE_WILDCARD] * (depth - scope.depth)
    return SCOPE_SEPARATOR.join([*scope.segments, *padding])
