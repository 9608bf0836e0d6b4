"""
Typed errors surfaced to API callers.

Every error renders as ``{"error": true, "message": ...}`` with the HTTP
status carried on the exception. Messages are in Swedish, matching the
public API.
"""

from typing import Any, Optional


class LuhnLabError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        extra: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra or {}
        self.headers = headers
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": True, "message": self.message, **self.extra}


class InvalidApiKeyError(LuhnLabError):
    """API key is unknown or not tied to an active plan."""

    status_code = 401

    def __init__(self):
        super().__init__("Ogiltig API-nyckel.")


class PlanFeatureError(LuhnLabError):
    """Requested feature is not included in the caller's plan."""

    status_code = 403


class InvalidInputError(LuhnLabError):
    """Malformed request payload or parameters."""

    status_code = 400


class SimulatedStatusError(LuhnLabError):
    """Caller asked for an error response to exercise their error handling."""

    def __init__(self, status_code: int):
        super().__init__(
            "Simulerat fel från Luhn.se",
            status_code=status_code,
            extra={"code": status_code},
        )
