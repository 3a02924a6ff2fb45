"""Shared API helpers for responses, auth guards and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import verify_jwt_in_request

from instagram.core.extensions import (
    get_dummy_password_hash,
    get_password_hasher,
    get_token_codec,
)
from instagram.services.auth import AuthService
from instagram.services.users import UserService

F = TypeVar("F", bound=Callable[..., Any])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def text_response(body: str, *, status: int = 200) -> Response:
    """Return a ``text/plain`` response."""

    return Response(body, status=status, mimetype="text/plain")


def require_auth(func: F) -> F:
    """Ensure the request carries a valid bearer token issued at sign-in."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


def build_user_service() -> UserService:
    """Return a :class:`UserService` wired to the app's password hasher."""

    return UserService(get_password_hasher())


def build_auth_service() -> AuthService:
    """Return an :class:`AuthService` wired to the app's hasher and token codec."""

    return AuthService(
        get_password_hasher(),
        get_token_codec(),
        dummy_hash=get_dummy_password_hash(),
    )
