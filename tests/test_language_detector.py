"""Unit tests for LanguageDetector strategy ordering and fallbacks."""

import pytest
from pydantic import ValidationError
from unittest.mock import AsyncMock, MagicMock

from webutils.config import I18nSettings
from webutils.http import LanguageCookie
from webutils.i18n import (
    DetectionStrategy,
    InMemorySessionStorage,
    LanguageDetector,
    LanguageDetectorOptions,
)
from webutils.utils import LanguageDetectorConfigError


def make_detector(base, **overrides):
    return LanguageDetector(LanguageDetectorOptions(**{**base, **overrides}))


# ─────────────────────────────────────────────────────────────────
# Single strategies
# ─────────────────────────────────────────────────────────────────


class TestDetectStrategies:

    @pytest.mark.asyncio
    async def test_detects_from_search_params(self, supported_options, make_request):
        detector = make_detector(supported_options)

        language = await detector.detect(make_request("https://example.com?lng=de"))

        assert language == "de"

    @pytest.mark.asyncio
    async def test_detects_from_url_path(self, supported_options, make_request):
        detector = make_detector(supported_options)

        language = await detector.detect(make_request("https://example.com/de/about"))

        assert language == "de"

    @pytest.mark.asyncio
    async def test_detects_from_cookie(self, supported_options, make_request, mock_cookie):
        detector = make_detector(supported_options, cookie=mock_cookie)
        request = make_request("https://example.com", {"Cookie": "lng=de"})

        language = await detector.detect(request)

        assert language == "de"
        mock_cookie.parse.assert_awaited_once_with("lng=de")

    @pytest.mark.asyncio
    async def test_detects_from_session(
        self, supported_options, make_request, make_session_storage
    ):
        storage = make_session_storage("de")
        detector = make_detector(supported_options, session_storage=storage)

        language = await detector.detect(make_request())

        assert language == "de"
        storage.get_session.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_detects_from_accept_language_header(self, supported_options, make_request):
        detector = make_detector(supported_options)
        request = make_request(
            "https://example.com", {"Accept-Language": "de,en;q=0.9,en;q=0.8"}
        )

        assert await detector.detect(request) == "de"

    @pytest.mark.asyncio
    async def test_header_skips_unsupported_languages(self, supported_options, make_request):
        detector = make_detector(supported_options)
        request = make_request(
            "https://example.com", {"Accept-Language": "fr-FR,de;q=0.9,en;q=0.8"}
        )

        assert await detector.detect(request) == "de"

    @pytest.mark.asyncio
    async def test_header_prefers_higher_quality(self, supported_options, make_request):
        detector = make_detector(supported_options, order=["header"])
        request = make_request(
            "https://example.com", {"Accept-Language": "de;q=0.5,en;q=0.9"}
        )

        assert await detector.detect(request) == "en"

    @pytest.mark.asyncio
    async def test_custom_search_param_key(self, supported_options, make_request):
        detector = make_detector(supported_options, search_param_key="locale")

        assert await detector.detect(make_request("https://example.com?locale=de")) == "de"
        assert await detector.detect(make_request("https://example.com?lng=de")) == "en"

    @pytest.mark.asyncio
    async def test_custom_session_key(self, supported_options, make_request):
        session = MagicMock()
        session.get = MagicMock(side_effect=lambda key: "de" if key == "language" else None)
        storage = MagicMock()
        storage.get_session = AsyncMock(return_value=session)
        detector = make_detector(
            supported_options, session_storage=storage, session_key="language"
        )

        assert await detector.detect(make_request()) == "de"

    @pytest.mark.asyncio
    async def test_accepts_synchronous_cookie_codec(self, supported_options, make_request):
        cookie = MagicMock()
        cookie.parse = MagicMock(return_value="de")
        detector = make_detector(supported_options, cookie=cookie)

        assert await detector.detect(make_request()) == "de"


# ─────────────────────────────────────────────────────────────────
# Fallbacks and failures
# ─────────────────────────────────────────────────────────────────


class TestDetectFallbacks:

    @pytest.mark.asyncio
    async def test_falls_back_when_nothing_is_supported(self, supported_options, make_request):
        detector = make_detector(supported_options)
        request = make_request(
            "https://example.com", {"Accept-Language": "fr-FR,es-ES;q=0.9"}
        )

        assert await detector.detect(request) == "en"

    @pytest.mark.asyncio
    async def test_falls_back_without_any_signal(self, supported_options, make_request):
        detector = make_detector(supported_options)

        assert await detector.detect(make_request()) == "en"

    @pytest.mark.asyncio
    async def test_invalid_search_param_falls_back(self, supported_options, make_request):
        detector = make_detector(supported_options)

        language = await detector.detect(make_request("https://example.com?lng=invalid-code"))

        assert language == "en"

    @pytest.mark.asyncio
    async def test_fallback_need_not_be_supported(self, make_request):
        detector = make_detector(
            {"supported_languages": ["de", "fr"], "fallback_language": "en"}
        )

        assert await detector.detect(make_request()) == "en"

    @pytest.mark.asyncio
    async def test_cookie_error_falls_back(
        self, supported_options, make_request, failing_cookie
    ):
        detector = make_detector(supported_options, cookie=failing_cookie)
        request = make_request("https://example.com", {"Cookie": "lng=de"})

        assert await detector.detect(request) == "en"

    @pytest.mark.asyncio
    async def test_cookie_error_hands_over_to_next_strategy(
        self, supported_options, make_request, failing_cookie
    ):
        detector = make_detector(
            supported_options, cookie=failing_cookie, order=["cookie", "header"]
        )
        request = make_request(
            "https://example.com", {"Cookie": "lng=de", "Accept-Language": "de"}
        )

        assert await detector.detect(request) == "de"

    @pytest.mark.asyncio
    async def test_session_error_hands_over_to_next_strategy(
        self, supported_options, make_request
    ):
        storage = MagicMock()
        storage.get_session = AsyncMock(side_effect=RuntimeError("store offline"))
        detector = make_detector(
            supported_options, session_storage=storage, order=["session", "header"]
        )
        request = make_request("https://example.com", {"Accept-Language": "de"})

        assert await detector.detect(request) == "de"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, "", 42, {"lng": "de"}])
    async def test_non_string_cookie_values_are_ignored(
        self, supported_options, make_request, value
    ):
        cookie = MagicMock()
        cookie.parse = AsyncMock(return_value=value)
        detector = make_detector(supported_options, cookie=cookie)

        assert await detector.detect(make_request()) == "en"

    @pytest.mark.asyncio
    async def test_unsupported_value_does_not_stop_detection(
        self, supported_options, make_request
    ):
        detector = make_detector(supported_options, order=["urlPath", "header"])
        request = make_request("https://example.com/fr/", {"Accept-Language": "de"})

        assert await detector.detect(request) == "de"


# ─────────────────────────────────────────────────────────────────
# Ordering
# ─────────────────────────────────────────────────────────────────


class TestDetectOrder:

    @pytest.mark.asyncio
    async def test_earlier_strategy_wins(self, supported_options, make_request):
        detector = make_detector(supported_options, order=["urlPath", "header"])
        request = make_request("https://example.com/en/", {"Accept-Language": "de"})

        assert await detector.detect(request) == "en"

    @pytest.mark.asyncio
    async def test_reversed_order_changes_winner(self, supported_options, make_request):
        detector = make_detector(supported_options, order=["header", "urlPath"])
        request = make_request("https://example.com/en/", {"Accept-Language": "de"})

        assert await detector.detect(request) == "de"

    @pytest.mark.asyncio
    async def test_later_strategies_do_not_run_after_a_match(
        self, supported_options, make_request, mock_cookie
    ):
        detector = make_detector(
            supported_options, cookie=mock_cookie, order=["searchParams", "cookie"]
        )

        assert await detector.detect(make_request("https://example.com?lng=en")) == "en"
        mock_cookie.parse.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_strategies_missing_from_order_are_skipped(
        self, supported_options, make_request
    ):
        detector = make_detector(supported_options, order=["header"])

        assert await detector.detect(make_request("https://example.com/de/?lng=de")) == "en"

    @pytest.mark.asyncio
    async def test_list_valued_session_uses_first_supported(
        self, supported_options, make_request, make_session_storage
    ):
        detector = make_detector(
            supported_options, session_storage=make_session_storage(["de", "en"])
        )

        assert await detector.detect(make_request()) == "de"

    @pytest.mark.asyncio
    async def test_list_valued_session_skips_unsupported(
        self, supported_options, make_request, make_session_storage
    ):
        detector = make_detector(
            supported_options, session_storage=make_session_storage(["fr", "de"])
        )

        assert await detector.detect(make_request()) == "de"

    @pytest.mark.asyncio
    async def test_detection_is_repeatable(self, supported_options, make_request, mock_cookie):
        detector = make_detector(supported_options, cookie=mock_cookie)
        request = make_request(
            "https://example.com/fr?lng=xx", {"Accept-Language": "en;q=0.1,de;q=0.2"}
        )

        first = await detector.detect(request)
        second = await detector.detect(request)

        assert first == second == "de"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url,headers",
        [
            ("https://example.com/", {}),
            ("https://example.com/xx/yy", {"Accept-Language": "*"}),
            ("https://example.com/?lng=", {"Accept-Language": "q=0.5"}),
            ("https://example.com/de-CH/", {"Accept-Language": "de-CH;q=abc"}),
            ("https://example.com/?lng=en;q=0", {}),
            ("https://example.com/EN/", {"Accept-Language": ",,;"}),
        ],
    )
    async def test_result_is_always_supported_or_fallback(
        self, supported_options, make_request, url, headers
    ):
        detector = make_detector(supported_options)

        language = await detector.detect(make_request(url, headers))

        assert language in {"en", "de"}


# ─────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────


class TestConfiguration:

    def test_session_only_order_requires_session_storage(self, supported_options):
        with pytest.raises(LanguageDetectorConfigError, match="session_storage"):
            make_detector(supported_options, order=["session"])

    def test_cookie_only_order_requires_cookie(self, supported_options):
        with pytest.raises(LanguageDetectorConfigError, match="cookie"):
            make_detector(supported_options, order=["cookie"])

    def test_session_only_order_with_storage_is_valid(self, supported_options):
        detector = make_detector(
            supported_options, order=["session"], session_storage=InMemorySessionStorage()
        )

        assert detector.options.order == (DetectionStrategy.SESSION,)

    def test_cookie_only_order_with_cookie_is_valid(self, supported_options):
        detector = make_detector(supported_options, order=["cookie"], cookie=LanguageCookie())

        assert detector.options.order == (DetectionStrategy.COOKIE,)

    def test_missing_capability_is_fine_with_other_strategies(self, supported_options):
        detector = make_detector(supported_options, order=["session", "header"])

        assert len(detector.options.order) == 2

    def test_default_order(self, supported_options):
        options = LanguageDetectorOptions(**supported_options)

        assert [method.value for method in options.order] == [
            "urlPath",
            "cookie",
            "session",
            "searchParams",
            "header",
        ]
        assert options.session_key == "lng"
        assert options.search_param_key == "lng"

    def test_unknown_strategy_is_rejected(self, supported_options):
        with pytest.raises(ValidationError):
            LanguageDetectorOptions(**supported_options, order=["geoip"])

    def test_supported_languages_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            LanguageDetectorOptions(supported_languages=[], fallback_language="en")

    def test_options_are_immutable(self, supported_options):
        options = LanguageDetectorOptions(**supported_options)

        with pytest.raises(ValidationError):
            options.fallback_language = "de"

    @pytest.mark.asyncio
    async def test_from_settings(self, make_request):
        settings = I18nSettings(
            _env_file=None,
            DEFAULT_LANGUAGE="sv",
            SUPPORTED_LANGUAGES="sv, en",
            LANGUAGE_DETECTION_ORDER="searchParams,header",
            LANGUAGE_SEARCH_PARAM_KEY="language",
        )

        detector = LanguageDetector.from_settings(settings)

        assert detector.options.supported_languages == ("sv", "en")
        assert await detector.detect(make_request("https://example.com?language=en")) == "en"
        assert await detector.detect(make_request("https://example.com/en/")) == "sv"

    @pytest.mark.asyncio
    async def test_from_settings_builds_language_cookie(self, make_request):
        settings = I18nSettings(
            _env_file=None,
            LANGUAGE_DETECTION_ORDER="cookie,header",
            LANGUAGE_COOKIE_NAME="site_lng",
            LANGUAGE_COOKIE_SECRETS="s3cret",
        )
        cookie = LanguageCookie("site_lng", secrets=["s3cret"])
        set_cookie = await cookie.serialize("de")

        detector = LanguageDetector.from_settings(settings)
        request = make_request(headers={"Cookie": set_cookie.split(";")[0]})

        assert isinstance(detector.options.cookie, LanguageCookie)
        assert detector.options.cookie.name == "site_lng"
        assert detector.options.cookie.is_signed
        assert await detector.detect(request) == "de"

    def test_from_settings_skips_cookie_when_unused(self):
        settings = I18nSettings(_env_file=None, LANGUAGE_DETECTION_ORDER="header")

        detector = LanguageDetector.from_settings(settings)

        assert detector.options.cookie is None

    def test_from_settings_keeps_explicit_cookie(self):
        cookie = MagicMock()

        detector = LanguageDetector.from_settings(I18nSettings(_env_file=None), cookie=cookie)

        assert detector.options.cookie is cookie
