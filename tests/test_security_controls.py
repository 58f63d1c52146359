from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

APP_ROOT = Path(__file__).resolve().parents[1] / "app"
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

from hierarchy_rbac import mock_data
from hierarchy_rbac.core.actions import ActionKind
from hierarchy_rbac.core.errors import DuplicateActionError, InvalidScopeError
from hierarchy_rbac.web.http.errors import normalize_exception, register_exception_handlers
from hierarchy_rbac.web.security.rbac import require_access


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    users = mock_data.users()

    @app.middleware("http")
    async def _attach_user(request: Request, call_next):
        user_id = request.headers.get("x-user")
        request.state.user = users.get(user_id) if user_id else None
        return await call_next(request)

    @app.get("/resources/{scope_path:path}")
    @require_access()
    async def _read(request: Request, scope_path: str) -> dict[str, bool | str | None]:
        decision = request.state.authorization
        return {"ok": True, "granted_by": decision.granted_by}

    @app.delete("/resources/{scope_path:path}")
    @require_access()
    async def _delete(request: Request, scope_path: str) -> dict[str, bool]:
        return {"ok": True}

    @app.post("/share/{scope_path:path}")
    @require_access(ActionKind.SHARE)
    async def _share(request: Request, scope_path: str) -> dict[str, bool]:
        return {"ok": True}

    return app


def test_granted_request_passes_through() -> None:
    client = TestClient(_build_app())

    response = client.get("/resources/InGen/Engineering/job789/Interview1", headers={"x-user": "anita"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "granted_by": "IngenEnggHM"}


def test_http_method_selects_the_action() -> None:
    client = TestClient(_build_app())

    allowed = client.delete("/resources/InGen/Engineering/job789/Interview1", headers={"x-user": "anita"})
    denied = client.delete("/resources/InGen/Engineering/job789/Interview1", headers={"x-user": "deepak"})

    assert allowed.status_code == 200
    assert denied.status_code == 403
    payload = denied.json()
    assert payload["ok"] is False
    assert payload["error"]["code"] == "FORBIDDEN"


def test_explicit_action_overrides_method() -> None:
    client = TestClient(_build_app())

    assert client.post("/share/InGen/HR/job555", headers={"x-user": "charu"}).status_code == 200
    assert client.post("/share/InGen/HR/job555", headers={"x-user": "anita"}).status_code == 403


def test_missing_user_is_unauthorized() -> None:
    client = TestClient(_build_app())

    response = client.get("/resources/InGen")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_unmapped_method_is_bad_request(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HRBAC_HTTP_ACTION_MAP", "POST:CREATE")
    client = TestClient(_build_app())

    response = client.get("/resources/InGen", headers={"x-user": "bala"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_error_details_are_opt_in(monkeypatch: pytest.MonkeyPatch) -> None:
    client = TestClient(_build_app())
    hidden = client.get("/resources/InGen/HR", headers={"x-user": "deepak"}).json()
    assert "details" not in hidden["error"]

    from hierarchy_rbac.core.config import get_config

    monkeypatch.setenv("HRBAC_ERROR_INCLUDE_DETAILS", "true")
    get_config.cache_clear()
    shown = client.get("/resources/InGen/HR", headers={"x-user": "deepak"}).json()
    assert shown["error"]["details"]["reason"].startswith("Access denied: READ on scope://InGen/HR")


def test_request_id_is_echoed() -> None:
    client = TestClient(_build_app())

    response = client.get("/resources/InGen", headers={"x-request-id": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"
    assert response.json()["request_id"] == "req-42"


def test_normalize_rbac_errors() -> None:
    bad_scope = normalize_exception(InvalidScopeError("scope", "segment 1 is empty"))
    duplicate = normalize_exception(DuplicateActionError(ActionKind.READ, role_id="R1"))
    unknown = normalize_exception(KeyError("boom"))

    assert (bad_scope.status_code, bad_scope.code) == (400, "BAD_REQUEST")
    assert bad_scope.details == {"argument": "scope", "reason": "segment 1 is empty", "type": "InvalidScopeError"}
    assert (duplicate.status_code, duplicate.code) == (409, "CONFLICT")
    assert duplicate.details == {"role_id": "R1", "action": "READ"}
    assert (unknown.status_code, unknown.code) == (500, "INTERNAL_SERVER_ERROR")


def test_invalid_argument_raised_in_handler_renders_bad_request() -> None:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def _boom() -> None:
        raise InvalidScopeError("scope", "at least one segment is required")

    response = TestClient(app).get("/boom")

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "scope: at least one segment is required"
