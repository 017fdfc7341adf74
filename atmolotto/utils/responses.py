"""Helpers for the JSON response envelope shared by every endpoint."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def ok(data: Any, status_code: int = 200, **meta: Any) -> tuple[Response, int]:
    """Success response.

    Extra keyword arguments (e.g. ``pagination``) are placed next to ``data``.
    """

    body: dict[str, Any] = {"success": True, "data": data, "error": None}
    body.update(meta)
    return jsonify(body), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> tuple[Response, int]:
    """Error response."""

    return (
        jsonify(
            {
                "success": False,
                "data": None,
                "error": {"code": code, "message": message, "details": details},
            }
        ),
        status_code,
    )
