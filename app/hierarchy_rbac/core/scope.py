"""
Resource scope addressing.

A scope names one node of a resource hierarchy and, transitively, the whole
subtree below it. Depth is unbounded, e.g. ``scope://InGen/Engineering/job789``
or ``scope://animalia/chordata/mammalia``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from hierarchy_rbac.core.defaults import SCOPE_SEPARATOR, SCOPE_URI_SCHEME
from hierarchy_rbac.core.errors import InvalidScopeError

SCOPE_URI_PREFIX = f"{SCOPE_URI_SCHEME}://"


def _coerce_segments(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        if not raw:
            raise InvalidScopeError("scope", "at least one segment is required", value=raw)
        parts = raw.split(SCOPE_SEPARATOR)
    elif isinstance(raw, Sequence):
        parts = list(raw)
        for part in parts:
            if isinstance(part, str) and SCOPE_SEPARATOR in part:
                raise InvalidScopeError(
                    "scope",
                    f"segment {part!r} must not contain {SCOPE_SEPARATOR!r}",
                    value=raw,
                )
    else:
        raise InvalidScopeError(
            "scope",
            f"expected a path string or a sequence of segments, got {type(raw).__name__}",
            value=raw,
        )

    if not parts:
        raise InvalidScopeError("scope", "at least one segment is required", value=raw)
    for index, part in enumerate(parts):
        if not isinstance(part, str):
            raise InvalidScopeError(
                "scope",
                f"segment {index} must be a string, got {type(part).__name__}",
                value=raw,
            )
        if not part:
            raise InvalidScopeError("scope", f"segment {index} is empty", value=raw)
    return tuple(parts)


@dataclass(frozen=True)
class Scope:
    """Immutable hierarchy address.

    Built from a slash-delimited string (``Scope("InGen/HR")``) or a list of
    segments taken verbatim (``Scope(["InGen", "HR"])``).
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", _coerce_segments(self.segments))

    @classmethod
    def of(cls, *segments: str) -> "Scope":
        return cls(list(segments))

    @classmethod
    def parse(cls, address: str) -> "Scope":
        if isinstance(address, str) and address.startswith(SCOPE_URI_PREFIX):
            address = address[len(SCOPE_URI_PREFIX):]
        return cls(address)

    @property
    def address(self) -> str:
        return SCOPE_URI_PREFIX + SCOPE_SEPARATOR.join(self.segments)

    @property
    def path(self) -> str:
        return SCOPE_SEPARATOR.join(self.segments)

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def parent(self) -> "Scope | None":
        if len(self.segments) == 1:
            return None
        return Scope(self.segments[:-1])

    def child(self, segment: str) -> "Scope":
        return Scope([*self.segments, segment])

    def contains_or_equals(self, other: "Scope") -> bool:
        """True when ``other`` is this node or lies anywhere beneath it.

        Compared segment by segment, so ``job1`` never covers ``job12``.
        """
        if not isinstance(other, Scope):
            raise InvalidScopeError(
                "scope",
                f"expected a Scope, got {type(other).__name__}",
                value=other,
            )
        own = self.segments
        if len(other.segments) < len(own):
            return False
        return other.segments[: len(own)] == own

    def __str__(self) -> str:
        return self.address


def ensure_scope(value: Any, *, argument: str = "scope") -> Scope:
    if not isinstance(value, Scope):
        raise InvalidScopeError(
            argument,
            f"expected a Scope, got {type(value).__name__}",
            value=value,
        )
    return value
