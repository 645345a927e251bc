"""
Environment-aware configuration settings for the process XML filters.

Supports dev, test, and prod environments with appropriate defaults.
"""

import logging
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Supported deployment environments."""

    DEV = "dev"
    TEST = "test"
    PROD = "prod"


class XMLSettings(BaseSettings):
    """Settings for writing process XML documents."""

    model_config = SettingsConfigDict(env_prefix="PROCESS_XML_")

    pretty_print: bool = Field(default=True, description="Indent exported documents")
    indent: str = Field(default="  ", description="Indentation used when pretty printing")
    encoding: str = Field(
        default="unicode",
        description="Encoding passed to ElementTree.tostring ('unicode' returns str)",
    )


class FilterSettings(BaseSettings):
    """Settings for the XML filter chain."""

    model_config = SettingsConfigDict(env_prefix="FILTERS_")

    automodel_enabled: bool = Field(
        default=True,
        description="Register the AutoModel tagger in the default registry",
    )
    fail_on_error: bool = Field(
        default=False,
        description="Raise FilterError when a filter fails instead of logging it",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Process XML Filters")
    environment: Environment = Field(default=Environment.DEV)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Sub-settings
    xml: XMLSettings = Field(default_factory=XMLSettings)
    filters: FilterSettings = Field(default_factory=FilterSettings)

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str | Environment) -> Environment:
        """Validate and convert environment string to enum."""
        if isinstance(v, Environment):
            return v
        return Environment(v.lower())

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEV

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TEST

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PROD


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
