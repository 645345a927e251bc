"""Configuration management."""

from process_xml.config.settings import (
    Environment,
    Settings,
    configure_logging,
    get_settings,
)

__all__ = ["Environment", "Settings", "configure_logging", "get_settings"]
