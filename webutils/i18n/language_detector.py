"""
Server-side language detection.

Detects the user's preferred language from an incoming request by trying a
configured sequence of strategies and falling back to a default language.

Example:
    from webutils.i18n import LanguageDetector, LanguageDetectorOptions
    from webutils.http import LanguageCookie

    detector = LanguageDetector(
        LanguageDetectorOptions(
            supported_languages=["en", "de"],
            fallback_language="en",
            cookie=LanguageCookie("lng"),
        )
    )

    @app.get("/")
    async def index(request: Request):
        language = await detector.detect(request)
"""

import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlsplit

from pydantic import BaseModel, ConfigDict, Field

from webutils.config.base_settings import I18nSettings
from webutils.http.cookie import LanguageCookie
from webutils.i18n.locale import get_client_locales, parse_accept_language
from webutils.utils.exceptions import LanguageDetectorConfigError

logger = logging.getLogger(__name__)

Candidate = Union[str, List[str], Tuple[str, ...], None]


class DetectionStrategy(str, Enum):
    """Where a candidate language is read from."""

    URL_PATH = "urlPath"
    COOKIE = "cookie"
    SESSION = "session"
    SEARCH_PARAMS = "searchParams"
    HEADER = "header"


DEFAULT_ORDER: Tuple[DetectionStrategy, ...] = (
    DetectionStrategy.URL_PATH,
    DetectionStrategy.COOKIE,
    DetectionStrategy.SESSION,
    DetectionStrategy.SEARCH_PARAMS,
    DetectionStrategy.HEADER,
)


class LanguageDetectorOptions(BaseModel):
    """Immutable configuration for a LanguageDetector."""

    model_config = ConfigDict(frozen=True)

    supported_languages: Tuple[str, ...] = Field(
        ..., min_length=1, description="Languages the application can serve"
    )
    fallback_language: str = Field(
        ..., description="Language used when no strategy finds a supported one"
    )
    cookie: Optional[Any] = Field(
        default=None, description="Cookie codec exposing parse(cookie_header)"
    )
    session_storage: Optional[Any] = Field(
        default=None, description="Session storage exposing get_session(cookie_header)"
    )
    session_key: str = "lng"
    search_param_key: str = "lng"
    order: Tuple[DetectionStrategy, ...] = DEFAULT_ORDER


async def maybe_await(value: Any) -> Any:
    """Await `value` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


class LanguageDetector:
    """
    Detects the preferred language of a request.

    Strategies run in `options.order`; the first one producing a supported
    language wins. A strategy that fails or finds nothing usable hands over
    to the next one, and `fallback_language` is returned when all of them
    come up empty.
    """

    def __init__(self, options: LanguageDetectorOptions):
        """
        Initialize LanguageDetector.

        Args:
            options: Detection configuration

        Raises:
            LanguageDetectorConfigError: If the order relies solely on a
                session or cookie that was not provided
        """
        self._options = options
        self._ensure_session_available()
        self._ensure_cookie_available()

        self._strategies: Dict[
            DetectionStrategy, Callable[[Any], Awaitable[Optional[str]]]
        ] = {
            DetectionStrategy.URL_PATH: self._from_url_path,
            DetectionStrategy.COOKIE: self._from_cookie,
            DetectionStrategy.SESSION: self._from_session,
            DetectionStrategy.SEARCH_PARAMS: self._from_search_params,
            DetectionStrategy.HEADER: self._from_header,
        }

    @classmethod
    def from_settings(
        cls,
        settings: I18nSettings,
        cookie: Optional[Any] = None,
        session_storage: Optional[Any] = None,
    ) -> "LanguageDetector":
        """
        Build a detector from environment settings.

        Args:
            settings: Loaded I18nSettings
            cookie: Cookie codec; built from the LANGUAGE_COOKIE_* settings
                when omitted and the order uses cookies
            session_storage: Optional session storage

        Returns:
            Configured LanguageDetector
        """
        order = settings.get_detection_order()

        if cookie is None and DetectionStrategy.COOKIE.value in order:
            cookie = LanguageCookie(
                settings.LANGUAGE_COOKIE_NAME,
                secrets=settings.get_cookie_secrets(),
                secure=settings.is_production(),
                max_age=settings.LANGUAGE_COOKIE_MAX_AGE,
            )

        options = LanguageDetectorOptions(
            supported_languages=settings.get_supported_languages(),
            fallback_language=settings.DEFAULT_LANGUAGE,
            cookie=cookie,
            session_storage=session_storage,
            session_key=settings.LANGUAGE_SESSION_KEY,
            search_param_key=settings.LANGUAGE_SEARCH_PARAM_KEY,
            order=order,
        )
        return cls(options)

    @property
    def options(self) -> LanguageDetectorOptions:
        return self._options

    async def detect(self, request: Any) -> str:
        """
        Detect the language for a request.

        Args:
            request: Object exposing `url` and `headers`, such as a FastAPI
                Request

        Returns:
            A supported language code, or the fallback language
        """
        for method in self._options.order:
            language = await self._strategies[method](request)
            if language:
                logger.debug(f"Language '{language}' detected from {method.value}")
                return language

        return self._options.fallback_language

    def _ensure_session_available(self) -> None:
        order = self._options.order
        if (
            len(order) == 1
            and order[0] is DetectionStrategy.SESSION
            and self._options.session_storage is None
        ):
            raise LanguageDetectorConfigError(
                "You need a session_storage if you want to only get the language from the session"
            )

    def _ensure_cookie_available(self) -> None:
        order = self._options.order
        if (
            len(order) == 1
            and order[0] is DetectionStrategy.COOKIE
            and self._options.cookie is None
        ):
            raise LanguageDetectorConfigError(
                "You need a cookie if you want to only get the language from the cookie"
            )

    # ─────────────────────────────────────────────────────────────────
    # Strategies
    # ─────────────────────────────────────────────────────────────────

    async def _from_url_path(self, request: Any) -> Optional[str]:
        path = urlsplit(str(request.url)).path
        segments = [segment for segment in path.split("/") if segment]
        if not segments:
            return None
        return self._from_supported(segments[0])

    async def _from_search_params(self, request: Any) -> Optional[str]:
        query = urlsplit(str(request.url)).query
        key = self._options.search_param_key
        for name, value in parse_qsl(query, keep_blank_values=True):
            if name == key:
                return self._from_supported(value)
        return None

    async def _from_cookie(self, request: Any) -> Optional[str]:
        cookie = self._options.cookie
        if cookie is None:
            return None

        try:
            language = await maybe_await(cookie.parse(request.headers.get("Cookie")))
        except Exception as e:
            logger.debug(f"Ignoring unreadable language cookie: {e}")
            return None

        if not isinstance(language, str) or not language:
            return None
        return self._from_supported(language)

    async def _from_session(self, request: Any) -> Optional[str]:
        storage = self._options.session_storage
        if storage is None:
            return None

        try:
            session = await maybe_await(storage.get_session(request.headers.get("Cookie")))
            language = session.get(self._options.session_key)
        except Exception as e:
            logger.debug(f"Ignoring unreadable session: {e}")
            return None

        if not language:
            return None
        return self._from_supported(language)

    async def _from_header(self, request: Any) -> Optional[str]:
        locales = get_client_locales(request)
        if not locales:
            return None
        return self._from_supported(locales)

    def _from_supported(self, language: Candidate) -> Optional[str]:
        """
        Pick the first supported language out of a candidate value.

        Args:
            language: A language code, a comma-separated list with optional
                q= weights, or a list of codes in preference order

        Returns:
            The first supported code, or None if none is supported
        """
        if not language:
            return None

        if isinstance(language, (list, tuple)):
            language = ",".join(str(item) for item in language)
        elif not isinstance(language, str):
            return None

        supported = self._options.supported_languages
        parsed = parse_accept_language(
            language,
            validate=lambda locale: locale if locale in supported else None,
        )
        return parsed[0] if parsed else None
