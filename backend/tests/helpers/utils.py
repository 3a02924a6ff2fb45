"""Tiny helpers shared across test modules."""

from __future__ import annotations

from typing import Any


def user_payload(**overrides: Any) -> dict[str, Any]:
    """Return a valid sign-up/update body in wire (camelCase) format."""
    payload: dict[str, Any] = {
        "id": None,
        "fullName": "João Silva",
        "username": "joao123",
        "email": "joao@email.com",
        "password": "password123",
    }
    payload.update(overrides)
    return payload


def problem(resp) -> dict[str, Any]:
    """Assert ``resp`` is an RFC 7807 problem and return its body."""
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["status"] == resp.status_code
    assert body["request_id"]
    return body
