"""Exceptions raised by the Freebase client."""

from __future__ import annotations

from typing import Any, Optional


class FreebaseError(Exception):
    """Base class for every error raised by this package."""


class ServiceError(FreebaseError):
    """A failure reported by the Freebase service (or a session standing in for it).

    Mirrors the API error envelope ``{"code": ..., "message": ..., "errors": [...]}``.
    """

    def __init__(
        self,
        code: int,
        message: str,
        errors: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_response(cls, envelope: dict[str, Any]) -> ServiceError:
        """Build an error from a decoded ``{"error": {...}}`` body or its inner dict."""
        error = envelope.get("error", envelope)
        return cls(
            code=int(error.get("code", 500)),
            message=error.get("message", "Unknown error"),
            errors=error.get("errors"),
        )
