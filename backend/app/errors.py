"""
Exception handlers producing the ``{success: false, message, code, details}``
envelope the frontend expects.

Routes convert domain exceptions with ``to_http_exception()``; the handlers
below also catch anything that escapes a route unconverted.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import DomainException, ServiceException

logger = logging.getLogger(__name__)

_DEFAULT_MESSAGES = {
    400: "Bad request",
    401: "Not authenticated",
    403: "Access denied",
    404: "Not found",
    405: "Method not allowed",
    409: "Conflict",
    422: "Unprocessable request",
    500: "An error occurred processing your request",
}


def _envelope(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if code:
        body["code"] = code
    if details:
        body["details"] = jsonable_encoder(details)
    return body


def _parse_detail(detail: Any) -> tuple[Optional[str], Optional[str], Optional[Any]]:
    if isinstance(detail, dict):
        code = detail.get("code") if isinstance(detail.get("code"), str) else None
        message = detail.get("message") or detail.get("detail")
        detail_text = message if isinstance(message, str) else None
        return detail_text, code, detail.get("details")
    if isinstance(detail, str):
        return detail, None, None
    if detail is None:
        return None, None, None
    return str(detail), None, None


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = str(first.get("msg", "Invalid request"))
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


def _http_response(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail_text, code, details = _parse_detail(exc.detail)
    message = detail_text or _DEFAULT_MESSAGES.get(exc.status_code, "Error")
    return JSONResponse(
        _envelope(message, code, details),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        if isinstance(exc, ServiceException):
            logger.error(
                "Service failure on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
        return _http_response(request, exc.to_http_exception())

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _http_response(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _http_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            _envelope(
                _first_validation_message(exc),
                "VALIDATION_ERROR",
                {
                    "errors": [
                        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                        for err in exc.errors()
                    ]
                },
            ),
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            _envelope(_DEFAULT_MESSAGES[500], "INTERNAL_SERVER_ERROR"),
            status_code=500,
        )
