"""Configuration module - public API.

Centralized configuration using Pydantic BaseSettings.

Exports:
    Settings: Main settings class
    I18nSettings: Translation catalog settings

Example:
    ```python
    from jupii_i18n.providers import get_settings

    settings = get_settings()
    prefix = settings.i18n.CATALOG_PREFIX
    ```
"""

from jupii_i18n.configuration.settings import I18nSettings, Settings

__all__ = ["Settings", "I18nSettings"]
