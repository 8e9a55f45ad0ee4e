"""
Utilities module - Exceptions and invariant assertions.
"""

from webutils.utils.exceptions import (
    APIException,
    BadRequestException,
    InvariantError,
    LanguageDetectorConfigError,
    CookieDecodeError,
)
from webutils.utils.invariant import invariant, invariant_response

__all__ = [
    "APIException",
    "BadRequestException",
    "InvariantError",
    "LanguageDetectorConfigError",
    "CookieDecodeError",
    "invariant",
    "invariant_response",
]
