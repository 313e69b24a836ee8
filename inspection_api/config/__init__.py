"""
Configuration module for the inspection API.

Provides centralized configuration using Pydantic Settings with environment variable support.
"""

from inspection_api.config.settings import Settings, get_settings


__all__ = ['Settings', 'get_settings']
