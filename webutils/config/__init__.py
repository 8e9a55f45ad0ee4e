"""
Configuration module - Settings class for environment configuration.
"""

from webutils.config.base_settings import I18nSettings

__all__ = ["I18nSettings"]
