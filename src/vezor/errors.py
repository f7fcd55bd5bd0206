"""Vezor API Error Types"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class VezorError(Exception):
    """Base exception for all Vezor SDK errors."""

    code: str = "VEZOR_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary format."""
        return {
            "ok": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "status_code": self.status_code,
            }
        }


class AuthError(VezorError):
    """Authentication failed or token expired (401)."""
    code = "AUTHENTICATION_FAILED"


class PermissionError(VezorError):
    """Permission denied (403)."""
    code = "PERMISSION_DENIED"


class NotFoundError(VezorError):
    """Resource not found (404)."""
    code = "NOT_FOUND"


class ValidationError(VezorError):
    """Request rejected as invalid (400)."""
    code = "VALIDATION_ERROR"


class APIError(VezorError):
    """Any other non-2xx response."""
    code = "API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status_code=status_code)
        self.response = response or {}


# HTTP status to exception class mapping
STATUS_ERROR_MAP: Dict[int, type] = {
    400: ValidationError,
    401: AuthError,
    403: PermissionError,
    404: NotFoundError,
}


def _parse_error_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


def raise_for_status(response: httpx.Response) -> None:
    """
    Raise the matching VezorError for a non-2xx response.

    The message comes from the JSON body's ``error`` field, then its
    ``message`` field, then the raw body text, then ``HTTP <status>``.

    Args:
        response: The HTTP response to check

    Raises:
        AuthError: On 401
        PermissionError: On 403
        NotFoundError: On 404
        ValidationError: On 400
        APIError: On any other non-2xx status
    """
    if response.is_success:
        return

    status = response.status_code
    body = _parse_error_body(response)
    message = (
        body.get("error")
        or body.get("message")
        or response.text
        or f"HTTP {status}"
    )

    logger.warning("Vezor API error %s", status)

    error_class = STATUS_ERROR_MAP.get(status)
    if error_class is None:
        raise APIError(message, status_code=status, response=body)
    raise error_class(message, status_code=status)
