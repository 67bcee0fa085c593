"""Jupii i18n configuration settings - main aggregator."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jupii_i18n.configuration.base import FeatureSettings

DEFAULT_TRANSLATIONS_DIR = Path(__file__).resolve().parents[1] / "locales"


class I18nSettings(FeatureSettings):
    """Translation catalog configuration.

    Environment Variables:
        TRANSLATIONS_DIR: Directory holding the ``.ts`` catalogs
            (default: the packaged ``locales`` directory)
        CATALOG_PREFIX: File name prefix of the catalogs (default: harbour-jupii)
        LOCALE: Explicit UI locale, e.g. ``de_DE`` (default: from environment)
        SOURCE_LANGUAGE: Language the source strings are written in (default: en)
        INCLUDE_UNFINISHED: Serve non-empty unfinished translations (default: True)
        CACHE_CATALOGS: Keep parsed catalogs in memory (default: True)

    Example:
        ```python
        from jupii_i18n.providers import get_settings

        settings = get_settings()
        translations_dir = settings.i18n.TRANSLATIONS_DIR
        ```
    """

    TRANSLATIONS_DIR: Path = Field(
        default=DEFAULT_TRANSLATIONS_DIR, alias="TRANSLATIONS_DIR"
    )
    CATALOG_PREFIX: str = Field(default="harbour-jupii", alias="CATALOG_PREFIX")
    LOCALE: Optional[str] = Field(default=None, alias="LOCALE")
    SOURCE_LANGUAGE: str = Field(default="en", alias="SOURCE_LANGUAGE")
    INCLUDE_UNFINISHED: bool = Field(default=True, alias="INCLUDE_UNFINISHED")
    CACHE_CATALOGS: bool = Field(default=True, alias="CACHE_CATALOGS")

    @field_validator("LOCALE", mode="before")
    @classmethod
    def validate_locale(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty LOCALE as unset."""
        if v is None or not str(v).strip():
            return None
        return str(v).strip()


class Settings(BaseSettings):
    """Jupii i18n configuration settings - main aggregator.

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for build tracking

    Example:
        ```python
        from jupii_i18n.configuration import Settings

        settings = Settings()
        if settings.i18n.INCLUDE_UNFINISHED:
            ...
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    i18n: I18nSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        if "i18n" not in kwargs:
            kwargs["i18n"] = I18nSettings()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
