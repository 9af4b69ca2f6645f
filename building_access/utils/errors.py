# building_access/utils/errors.py
"""
API error types. Raised by services/routers, rendered by the exception
handler in main.py as {"success": false, "message": ..., "error": ...}.
"""

from typing import Optional


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_response(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ValidationError(ApiError):
    """Missing or malformed query/path parameter."""
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class ServerError(ApiError):
    """Store or writer failure — the underlying message is echoed in `error`."""
    status_code = 500
