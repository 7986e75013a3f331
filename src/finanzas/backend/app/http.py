"""JSON problem payloads returned by the error handlers and blueprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload of the form ``{"error", "message", "fields"}``."""

    error: str
    status: int
    message: str | None = None
    fields: Mapping[str, str] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.fields:
            payload["fields"] = dict(self.fields)
        return payload

    def to_response(self) -> tuple[Any, int]:
        """Return a Flask ``(response, status)`` tuple."""

        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    fields: Mapping[str, str] | None = None,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse`, dropping empty field mappings."""

    return ProblemResponse(
        error=error,
        status=status,
        message=message,
        fields=dict(fields or {}),
    )


def not_found(message: str) -> tuple[Any, int]:
    """Shortcut for the 404 payload used by the configuration routes."""

    return problem_response("not_found", status=404, message=message).to_response()


__all__ = ["ProblemResponse", "not_found", "problem_response"]
