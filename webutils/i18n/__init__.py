"""
Internationalization module - Language detection and locale helpers.
"""

from webutils.i18n.language_detector import (
    DetectionStrategy,
    LanguageDetector,
    LanguageDetectorOptions,
)
from webutils.i18n.locale import (
    parse_accept_language,
    is_valid_locale,
    canonicalize_locale,
    get_client_locales,
)
from webutils.i18n.session import Session, InMemorySessionStorage
from webutils.i18n.middleware import LanguageMiddleware

__all__ = [
    "DetectionStrategy",
    "LanguageDetector",
    "LanguageDetectorOptions",
    "parse_accept_language",
    "is_valid_locale",
    "canonicalize_locale",
    "get_client_locales",
    "Session",
    "InMemorySessionStorage",
    "LanguageMiddleware",
]
