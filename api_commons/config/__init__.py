"""Configuration module."""

from api_commons.config.settings import CommonsSettings

__all__ = ["CommonsSettings"]
