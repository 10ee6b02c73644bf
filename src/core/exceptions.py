from __future__ import annotations
from typing import Any


class APIError(Exception):
    def __init__(self, *, message: str, code: str, status: int, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.errors = errors
        self.extra = extra or {}


class BadRequestError(APIError):
    """Malformed input or failed proof of ownership. Never retried."""

    def __init__(self, *, message: str, code: str = "BAD_REQUEST", errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=400, errors=errors, extra=extra)


class DomainConflictError(APIError):
    def __init__(self, *, message: str, code: str, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=409, errors=errors, extra=extra)


class BadGatewayError(APIError):
    """An upstream call failed. Not retried: the upstream call is not idempotent."""

    def __init__(self, *, message: str, code: str = "BAD_GATEWAY", errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=502, errors=errors, extra=extra)
