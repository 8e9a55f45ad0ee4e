"""
Web request utilities.

This package provides small, independent helpers for FastAPI/Starlette
applications:

- i18n: Server-side language detection, locale parsing, sessions, middleware
- http: Cookie helpers and request URL utilities
- format: Byte sizes and execution timing
- text: Typographic quotes and string helpers
- time: Relative time formatting
- utils: Exceptions and invariant assertions
- config: Settings class
"""

from webutils.i18n import (
    DetectionStrategy,
    LanguageDetector,
    LanguageDetectorOptions,
    LanguageMiddleware,
    InMemorySessionStorage,
    get_client_locales,
    parse_accept_language,
)
from webutils.http import LanguageCookie, get_clean_url, create_domain
from webutils.format import format_bytes, measure
from webutils.text import typographic_quotes, truncate_text
from webutils.time import time_ago
from webutils.utils import (
    APIException,
    BadRequestException,
    InvariantError,
    LanguageDetectorConfigError,
    CookieDecodeError,
    invariant,
    invariant_response,
)
from webutils.config import I18nSettings

__all__ = [
    # i18n
    "DetectionStrategy",
    "LanguageDetector",
    "LanguageDetectorOptions",
    "LanguageMiddleware",
    "InMemorySessionStorage",
    "get_client_locales",
    "parse_accept_language",
    # HTTP
    "LanguageCookie",
    "get_clean_url",
    "create_domain",
    # Format
    "format_bytes",
    "measure",
    # Text
    "typographic_quotes",
    "truncate_text",
    # Time
    "time_ago",
    # Utils
    "APIException",
    "BadRequestException",
    "InvariantError",
    "LanguageDetectorConfigError",
    "CookieDecodeError",
    "invariant",
    "invariant_response",
    # Config
    "I18nSettings",
]
