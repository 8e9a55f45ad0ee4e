"""
Language middleware for request-scoped language detection.

Attaches the detected language to requests.
"""

import logging
from typing import Callable, Optional

from fastapi import Request

from webutils.i18n.language_detector import LanguageDetector, maybe_await

logger = logging.getLogger(__name__)


class LanguageMiddleware:
    """
    FastAPI middleware that runs a LanguageDetector for every request.
    Attaches request.state.language to all requests.

    Usage:
        app.middleware("http")(LanguageMiddleware(detector))
    """

    def __init__(
        self,
        detector: LanguageDetector,
        persist_cookie: bool = False,
    ):
        """
        Initialize LanguageMiddleware.

        Args:
            detector: Detector used to pick the request language
            persist_cookie: Write the detected language back to the
                detector's cookie so later requests find it there
        """
        self._detector = detector
        self._persist_cookie = persist_cookie

    async def __call__(self, request: Request, call_next: Callable):
        """
        Middleware function that attaches language to request.

        Attaches:
            - request.state.language: detected language code
        """
        language = await self._detector.detect(request)
        request.state.language = language

        response = await call_next(request)

        set_cookie = await self._language_cookie(request, language)
        if set_cookie:
            response.headers.append("Set-Cookie", set_cookie)

        return response

    async def _language_cookie(self, request: Request, language: str) -> Optional[str]:
        """
        Build the Set-Cookie value persisting the language, if one is needed.

        Returns:
            Set-Cookie header value, or None when persistence is off or the
            request already carries the same language
        """
        cookie = self._detector.options.cookie
        if not self._persist_cookie or cookie is None:
            return None

        try:
            current = await maybe_await(cookie.parse(request.headers.get("Cookie")))
        except Exception as e:
            logger.debug(f"Replacing unreadable language cookie: {e}")
            current = None

        if current == language:
            return None

        logger.debug(f"Persisting language '{language}' to cookie")
        return await maybe_await(cookie.serialize(language))
