"""Expose the application factory at package level.

Provide convenient access to :func:`instagram.factory.create_app` so callers
can ``from instagram import create_app`` (e.g. ``gunicorn 'instagram:create_app()'``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
