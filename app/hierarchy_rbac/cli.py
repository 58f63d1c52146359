from __future__ import annotations

import argparse
import logging
import sys

from hierarchy_rbac import mock_data
from hierarchy_rbac.core.actions import ACTION_CHOICES
from hierarchy_rbac.core.authorization import decide
from hierarchy_rbac.core.errors import InvalidArgumentError
from hierarchy_rbac.core.scope import Scope
from hierarchy_rbac.core.signatures import scope_from_signature
from hierarchy_rbac.infrastructure.logging import setup_app_logging
from hierarchy_rbac.reports import access_matrix, role_grants_frame

LOGGER = logging.getLogger(__name__)

EXIT_ALLOWED = 0
EXIT_DENIED = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hierarchy-rbac",
        description="Evaluate role grants over a resource hierarchy using the bundled demo users.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("demo", help="Print the access matrix for the demo requests.")
    commands.add_parser("grants", help="Print the scope and action grants of every demo role.")

    check = commands.add_parser("check", help="Evaluate a single request for one demo user.")
    check.add_argument("--user", required=True, help="Demo user id (e.g. anita).")
    check.add_argument("--action", required=True, help=f"One of {', '.join(ACTION_CHOICES)}.")
    target = check.add_mutually_exclusive_group(required=True)
    target.add_argument("--scope", help="Slash path or scope:// address of the target resource.")
    target.add_argument(
        "--signature",
        help="Fixed-depth tenant/workspace/job/discussion signature; trailing levels may be '*'.",
    )
    return parser


def _run_check(user_id: str, action: str, scope_path: str | None, signature: str | None = None) -> int:
    users = mock_data.users()
    user = users.get(user_id)
    if user is None:
        print(f"user: unknown demo user {user_id!r}; choose from {', '.join(sorted(users))}", file=sys.stderr)
        return EXIT_INVALID
    try:
        target = scope_from_signature(signature) if signature is not None else Scope.parse(scope_path)
        decision = decide(user, action, target)
    except InvalidArgumentError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_INVALID
    verdict = "ALLOWED" if decision.allowed else "DENIED"
    print(f"{verdict}: {decision.user_id} {decision.action.value} {decision.scope.address} ({decision.reason})")
    return EXIT_ALLOWED if decision.allowed else EXIT_DENIED


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_app_logging()

    if args.command == "check":
        return _run_check(args.user, args.action, args.scope, args.signature)

    if args.command == "grants":
        frame = role_grants_frame(mock_data.roles().values())
    else:
        frame = access_matrix(mock_data.users().values(), mock_data.checks())
    LOGGER.debug("Report rendered. command=%s rows=%s", args.command, len(frame))
    print(frame.to_string(index=False))
    return EXIT_ALLOWED


if __name__ == "__main__":
    raise SystemExit(main())
