"""
Exceptions raised by webutils.

HTTP-facing errors extend FastAPI's HTTPException with standardized error
codes so they render as consistent API error responses. The remaining
errors are plain Python exceptions for programming and configuration
mistakes.

Example:
    from webutils.utils import BadRequestException

    @app.get("/items")
    async def list_items(lng: str):
        if lng not in ("en", "de"):
            raise BadRequestException("Unsupported language", code="BAD_LANGUAGE")
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """
    Base API exception with error code support.

    Provides consistent error response format across the API.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}

        if code:
            detail["code"] = code

        if details is not None:
            detail["details"] = details

        super().__init__(
            status_code=status_code,
            detail=detail,
            headers=headers,
        )

    @property
    def message(self) -> str:
        return self.detail["message"]


class BadRequestException(APIException):
    """400 Bad Request - Invalid input or malformed request."""

    def __init__(
        self,
        message: str = "Bad request",
        code: str = "BAD_REQUEST",
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(400, message, code, details, headers)


class InvariantError(Exception):
    """A condition that must always hold did not."""


class LanguageDetectorConfigError(ValueError):
    """The language detector was configured in a way it cannot honour."""


class CookieDecodeError(ValueError):
    """A cookie payload could not be decoded."""
