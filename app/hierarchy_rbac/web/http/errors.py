from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hierarchy_rbac.core.config import get_config
from hierarchy_rbac.core.errors import DuplicateActionError, InvalidArgumentError

LOGGER = logging.getLogger(__name__)

ERROR_CODE_BAD_REQUEST = "BAD_REQUEST"
ERROR_CODE_CONFLICT = "CONFLICT"
ERROR_CODE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_CODE_FORBIDDEN = "FORBIDDEN"
ERROR_CODE_INTERNAL = "INTERNAL_SERVER_ERROR"

_STATUS_CODES = {
    400: ERROR_CODE_BAD_REQUEST,
    401: ERROR_CODE_UNAUTHORIZED,
    403: ERROR_CODE_FORBIDDEN,
    404: ERROR_CODE_NOT_FOUND,
    409: ERROR_CODE_CONFLICT,
}


@dataclass(frozen=True)
class ApiErrorSpec:
    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None


def request_id_from_request(request: Request) -> str:
    request_id = str(getattr(request.state, "request_id", "") or "").strip()
    if request_id:
        return request_id
    from_header = str(request.headers.get("x-request-id", "")).strip()
    return from_header or "-"


def build_api_error_payload(
    *,
    code: str,
    message: str,
    request_id: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "ok": False,
        "error": {
            "code": str(code),
            "message": str(message),
        },
        "request_id": str(request_id or "-"),
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if details and get_config().error_include_details:
        payload["error"]["details"] = details
    return payload


def api_error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    request_id = request_id_from_request(request)
    payload = build_api_error_payload(
        code=code,
        message=message,
        request_id=request_id,
        details=details,
    )
    return JSONResponse(payload, status_code=int(status_code), headers={"X-Request-ID": request_id})


def normalize_exception(exc: Exception) -> ApiErrorSpec:
    if isinstance(exc, InvalidArgumentError):
        return ApiErrorSpec(
            status_code=400,
            code=ERROR_CODE_BAD_REQUEST,
            message=str(exc),
            details={"argument": exc.argument, "reason": exc.reason, "type": exc.__class__.__name__},
        )

    if isinstance(exc, DuplicateActionError):
        return ApiErrorSpec(
            status_code=409,
            code=ERROR_CODE_CONFLICT,
            message=str(exc),
            details={"role_id": exc.role_id, "action": str(getattr(exc.action, "value", exc.action))},
        )

    if isinstance(exc, StarletteHTTPException):
        status_code = int(exc.status_code)
        return ApiErrorSpec(
            status_code=status_code,
            code=_STATUS_CODES.get(status_code, ERROR_CODE_INTERNAL),
            message=str(exc.detail or "HTTP request failed."),
            details={"reason": str(exc.detail or "")},
        )

    return ApiErrorSpec(
        status_code=500,
        code=ERROR_CODE_INTERNAL,
        message="An unexpected error occurred.",
        details={"reason": str(exc), "type": exc.__class__.__name__},
    )


def register_exception_handlers(app: FastAPI) -> None:
    async def _render(request: Request, exc: Exception) -> JSONResponse:
        spec = normalize_exception(exc)
        log_fn = LOGGER.warning if spec.status_code < 500 else LOGGER.exception
        log_fn(
            "API request failed. code=%s status=%s path=%s method=%s",
            spec.code,
            spec.status_code,
            request.url.path,
            request.method,
            extra={
                "event": "api_error",
                "request_id": request_id_from_request(request),
                "error_code": spec.code,
                "status_code": int(spec.status_code),
                "method": request.method,
                "path": str(request.url.path),
            },
        )
        return api_error_response(
            request,
            status_code=spec.status_code,
            code=spec.code,
            message=spec.message,
            details=spec.details,
        )

    app.add_exception_handler(InvalidArgumentError, _render)
    app.add_exception_handler(DuplicateActionError, _render)
    app.add_exception_handler(StarletteHTTPException, _render)
