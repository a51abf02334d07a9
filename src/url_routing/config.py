"""
Configuration management for url-routing.

This module provides RoutingSettings, which holds client configuration
with support for environment variables, .env files, and sensible defaults.

Environment variables are automatically loaded with URL_ROUTING_ prefix.
Example: URL_ROUTING_TRANSPORT=aiohttp
"""

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class RoutingSettings(BaseSettings):
    """
    Configuration settings for RoutingClient with environment variable support.

    This class automatically loads configuration from:
    - Environment variables (with URL_ROUTING_ prefix)
    - .env files
    - Default values for optional settings

    Example:
        # From environment
        export URL_ROUTING_BASE_URL=https://api.example.com
        export URL_ROUTING_TIMEOUT=60.0

        # In code
        settings = RoutingSettings()
    """

    base_url: str | None = None
    timeout: float = 30.0
    transport: str = "httpx"  # default, can be 'aiohttp' or 'requests'
    key_decoding_strategy: str = "use_default_keys"
    cache_ttl: int = 60

    model_config = SettingsConfigDict(
        env_prefix="URL_ROUTING_", env_file=".env", extra="ignore"
    )
