"""
Settings for language detection and the helpers around it.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from webutils.config import I18nSettings

    class Settings(I18nSettings):
        # App-specific settings
        SENTRY_DSN: str = ""

    settings = Settings()
    print(settings.get_supported_languages())
"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


DETECTION_STRATEGIES = ("urlPath", "cookie", "session", "searchParams", "header")


class I18nSettings(BaseSettings):
    """
    Base settings class for language detection.

    Automatically loads values from environment variables.
    """

    # ==========================================================================
    # Internationalization
    # ==========================================================================
    DEFAULT_LANGUAGE: str = "en"
    SUPPORTED_LANGUAGES: str = "en,de"  # Comma-separated

    # ==========================================================================
    # Detection
    # ==========================================================================
    LANGUAGE_DETECTION_ORDER: str = ",".join(DETECTION_STRATEGIES)
    LANGUAGE_SESSION_KEY: str = "lng"
    LANGUAGE_SEARCH_PARAM_KEY: str = "lng"

    # ==========================================================================
    # Language Cookie
    # ==========================================================================
    LANGUAGE_COOKIE_NAME: str = "lng"
    LANGUAGE_COOKIE_SECRETS: str = ""  # Comma-separated, newest first
    LANGUAGE_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 365

    # ==========================================================================
    # Environment
    # ==========================================================================
    ENVIRONMENT: str = "development"  # development, staging, production

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def get_supported_languages(self) -> List[str]:
        """Parse SUPPORTED_LANGUAGES into a list."""
        return [lang.strip() for lang in self.SUPPORTED_LANGUAGES.split(",") if lang.strip()]

    def get_detection_order(self) -> List[str]:
        """Parse LANGUAGE_DETECTION_ORDER into a list of strategy names."""
        return [
            method.strip()
            for method in self.LANGUAGE_DETECTION_ORDER.split(",")
            if method.strip()
        ]

    def get_cookie_secrets(self) -> List[str]:
        """Parse LANGUAGE_COOKIE_SECRETS into a list."""
        return [
            secret.strip()
            for secret in self.LANGUAGE_COOKIE_SECRETS.split(",")
            if secret.strip()
        ]

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Validate that the language settings are usable.

        Raises:
            ValueError: If any setting is missing or invalid
        """
        errors = []

        if not self.get_supported_languages():
            errors.append("SUPPORTED_LANGUAGES must list at least one language")

        order = self.get_detection_order()
        unknown = [method for method in order if method not in DETECTION_STRATEGIES]
        if unknown:
            errors.append(
                f"LANGUAGE_DETECTION_ORDER has unknown strategies: {', '.join(unknown)}"
            )

        if not order:
            errors.append("LANGUAGE_DETECTION_ORDER must name at least one strategy")

        if self.is_production() and "cookie" in order and not self.get_cookie_secrets():
            errors.append(
                "LANGUAGE_COOKIE_SECRETS is required in production when detecting from cookies"
            )

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
