"""Configuration."""

from currency_window.config.settings import Settings, DEFAULT_CBR_URL

__all__ = ["Settings", "DEFAULT_CBR_URL"]
