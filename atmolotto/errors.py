"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class UnauthorizedError(AppError):
    """Missing or wrong bearer secret."""

    def __init__(self, message: str = "Unauthorized", details: Any | None = None) -> None:
        super().__init__(code="unauthorized", message=message, status_code=401, details=details)


class ConflictError(AppError):
    """Conflict (e.g., unique constraint)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class ProviderError(AppError):
    """An upstream HTTP provider timed out, failed or sent an unusable payload.

    Distinct from "no data": a provider that answers with an empty page does
    not raise.
    """

    def __init__(
        self,
        message: str = "Upstream provider error",
        provider: str | None = None,
        details: Any | None = None,
        code: str = "provider_error",
    ) -> None:
        super().__init__(code=code, message=message, status_code=502, details=details)
        self.provider = provider


class RandomProviderError(ProviderError):
    """random.org request failed or returned a short/malformed answer."""

    def __init__(self, message: str = "Random number provider error", details: Any | None = None) -> None:
        super().__init__(
            message=message,
            provider="random.org",
            details=details,
            code="random_provider_error",
        )
