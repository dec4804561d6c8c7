"""Configuration adapters."""

from gasph.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
