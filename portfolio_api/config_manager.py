"""
API Configuration Manager

Provides typed access to the portfolio API settings held by the shared config system.
"""

import os
from typing import Optional

from portfolio_config import get_config


class APIConfig:
    """API-specific configuration wrapper with convenience methods."""

    def __init__(self):
        self.config = get_config()

        required_keys = [
            "api.base_url",
            "cors.allowed_origins",
            "internal.postgres_url",
            "limits.related.max_results",
        ]

        try:
            self.config.validate_required_keys(required_keys)
        except KeyError as e:
            raise RuntimeError(f"Missing required API configuration: {e}")

    # API Settings
    @property
    def base_url(self) -> str:
        return self.config.get("api.base_url")

    @property
    def title(self) -> str:
        return self.config.get("api.title", "Portfolio API")

    @property
    def description(self) -> str:
        return self.config.get("api.description", "")

    @property
    def version(self) -> str:
        return self.config.get("api.version", "0.1.0")

    @property
    def cors_origins(self) -> list:
        return self.config.get("cors.allowed_origins")

    # Database
    @property
    def database_url(self) -> str:
        return os.getenv("DATABASE_URL") or self.config.get("internal.postgres_url")

    # Related content limits
    @property
    def related_default_limit(self) -> int:
        return self.config.get("limits.related.default_results", 5)

    @property
    def related_max_limit(self) -> int:
        return self.config.get("limits.related.max_results")

    @property
    def related_max_workers(self) -> int:
        return self.config.get("limits.related.max_workers", 8)

    @property
    def related_cache_control(self) -> str:
        max_age = self.config.get("http.cache.related.max_age", 300)
        stale = self.config.get("http.cache.related.stale_while_revalidate", 600)
        return f"public, s-maxage={max_age}, stale-while-revalidate={stale}"

    # Logging
    @property
    def log_level(self) -> str:
        return self.config.get("logging.level", "INFO")

    @property
    def sqlalchemy_log_level(self) -> str:
        return self.config.get("logging.sqlalchemy_level", "WARNING")


_api_config: Optional[APIConfig] = None


def get_api_config() -> APIConfig:
    """Get the global API configuration instance."""
    global _api_config
    if _api_config is None:
        _api_config = APIConfig()
    return _api_config


def reset_api_config() -> None:
    global _api_config
    _api_config = None
