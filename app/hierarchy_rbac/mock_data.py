from __future__ import annotations

from hierarchy_rbac.core.actions import ActionKind
from hierarchy_rbac.core.roles import Role, User
from hierarchy_rbac.core.scope import Scope


def roles() -> dict[str, Role]:
    return {
        "IngenAdmin": Role(
            "IngenAdmin",
            "IngenAdmin",
            Scope.of("InGen"),
            [ActionKind.ALL],
            role_description="Admin role with all permissions for InGen tenant",
        ),
        "IngenEnggHM": Role(
            "IngenEnggHM",
            "IngenEngineeringHiringManager",
            Scope.of("InGen", "Engineering", "job789"),
            [ActionKind.READ, ActionKind.CREATE, ActionKind.UPDATE, ActionKind.DELETE],
            role_description="Hiring manager for the InGen Engineering job789 pipeline",
        ),
        "IngenEnggTAM": Role(
            "IngenEnggTAM",
            "IngenEngineeringTalentAcquisitionManager",
            [Scope.of("InGen", "Engineering"), Scope.of("InGen", "HR")],
            [ActionKind.ALL],
            role_description="Talent acquisition manager across InGen Engineering and HR",
        ),
        "IngenInterviewer1": Role(
            "IngenInterviewer1",
            "IngenInterviewer",
            Scope.of("InGen", "Engineering", "job789", "Interview1"),
            [ActionKind.READ, ActionKind.UPDATE],
            role_description="Interviewer for the first job789 interview",
        ),
        "IngenInterviewer2": Role(
            "IngenInterviewer2",
            "IngenInterviewer",
            Scope.of("InGen", "Engineering", "job789", "Interview2"),
            [ActionKind.READ, ActionKind.UPDATE],
            role_description="Interviewer for the second job789 interview",
        ),
    }


def users(role_index: dict[str, Role] | None = None) -> dict[str, User]:
    index = role_index if role_index is not None else roles()
    return {
        "anita": User("anita", "Anita", [index["IngenEnggHM"]]),
        "bala": User("bala", "Bala", [index["IngenAdmin"]]),
        "charu": User("charu", "Charu", [index["IngenEnggTAM"]]),
        "deepak": User("deepak", "Deepak", [index["IngenInterviewer1"]]),
        "esha": User("esha", "Esha", [index["IngenInterviewer2"], index["IngenEnggTAM"]]),
    }


def checks() -> list[tuple[ActionKind, Scope]]:
    return [
        (ActionKind.READ, Scope.of("InGen", "Engineering", "job789", "Interview1")),
        (ActionKind.DELETE, Scope.of("InGen", "Engineering", "job789", "Interview1")),
        (ActionKind.CREATE, Scope.of("InGen", "Engineering", "job789", "Interview2")),
        (ActionKind.SHARE, Scope.of("InGen", "Engineering", "job789", "Interview2")),
        (ActionKind.DELETE, Scope.of("InGen", "HR", "job555", "discussion999")),
        (ActionKind.UPDATE, Scope.of("InGen", "HR", "job555", "discussion999")),
    ]
