"""Centralized JSON (RFC 7807) error handling for the API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from instagram.core.extensions import jwt
from instagram.core.logger import ensure_request_id
from instagram.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    ServiceError,
    TokenError,
)

log = logging.getLogger(__name__)

STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    415: "unsupported_media_type",
    422: "unprocessable_entity",
    500: "internal_server_error",
    503: "service_unavailable",
}


def _as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build an RFC 7807 Problem Details dict.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param details: Optional safe, structured details.
    :returns: Problem+JSON dictionary carrying the correlation ``request_id``.
    :rtype: dict
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def _problem_response(problem: dict[str, Any]) -> Response:
    """Return ``problem`` as a response with the ``application/problem+json`` type."""
    resp = jsonify(problem)
    resp.status_code = int(problem["status"])
    resp.mimetype = "application/problem+json"
    return resp


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier. Defaults to ``"bad_request"``.
    details : dict[str, Any] | None, optional
        Optional structured payload included in the response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return _as_problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details or None,
        )


class BadRequest(APIError):
    """400 for requests missing required arguments."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code="bad_request")


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    """409 for uniqueness collisions."""

    def __init__(self, message: str = "Conflict", *, field: str | None = None) -> None:
        details = {"field": field} if field else None
        super().__init__(
            message, status_code=HTTPStatus.CONFLICT, code="conflict", details=details
        )


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map a framework-agnostic service error onto its HTTP counterpart.

    :param exc: Error raised by the service layer.
    :returns: The :class:`APIError` to render.
    """
    if isinstance(exc, InvalidArgumentError):
        return BadRequest(str(exc))
    if isinstance(exc, AuthenticationError | TokenError):
        return Unauthorized(str(exc))
    if isinstance(exc, NotFoundError):
        return NotFound(str(exc))
    if isinstance(exc, ConflictError):
        return Conflict(str(exc), field=getattr(exc, "field", None))
    return APIError(str(exc) or exc.__class__.__name__)


def _log_problem(kind: str, problem: dict[str, Any], *, exc_info: bool = False) -> None:
    status = int(problem["status"])
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "%s: code=%s detail=%s",
        kind,
        problem["code"],
        problem["detail"],
        extra={"status": status},
        exc_info=exc_info,
    )


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees RFC 7807 responses for all handled errors, including the
      bearer-token failures raised by ``flask-jwt-extended``.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        problem = err.to_problem()
        _log_problem("APIError", problem)
        return _problem_response(problem)

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        problem = translate_service_error(err).to_problem()
        _log_problem(err.__class__.__name__, problem)
        return _problem_response(problem)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = STATUS_CODES.get(status, "error")
        message = (err.description or code.replace("_", " ").capitalize()).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        problem = _as_problem(status=status, code=code, message=message)
        _log_problem("HTTPException", problem)
        return _problem_response(problem)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        problem = _as_problem(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Validation failed",
            details={"errors": err.messages},
        )
        _log_problem("ValidationError", problem)
        return _problem_response(problem)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Raw DB messages stay in the logs
        problem = _as_problem(
            status=HTTPStatus.CONFLICT, code="conflict", message="Resource conflict"
        )
        _log_problem("IntegrityError", problem, exc_info=True)
        return _problem_response(problem)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        problem = _as_problem(
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            code="service_unavailable",
            message="Service temporarily unavailable",
        )
        _log_problem("OperationalError", problem, exc_info=True)
        return _problem_response(problem)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        problem = _as_problem(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
            message="Unexpected error",
        )
        _log_problem("Unhandled exception", problem, exc_info=True)
        return _problem_response(problem)

    # -------------------- Bearer token failures --------------------

    def _token_problem(message: str) -> Response:
        problem = _as_problem(
            status=HTTPStatus.UNAUTHORIZED, code="unauthorized", message=message
        )
        _log_problem("TokenRejected", problem)
        return _problem_response(problem)

    @jwt.unauthorized_loader
    def _missing_token(reason: str) -> Response:
        return _token_problem(reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str) -> Response:
        return _token_problem(f"Invalid token: {reason}")

    @jwt.expired_token_loader
    def _expired_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]) -> Response:
        return _token_problem("Token has expired.")


__all__ = [
    "APIError",
    "BadRequest",
    "Conflict",
    "NotFound",
    "Unauthorized",
    "init_app",
    "translate_service_error",
]
