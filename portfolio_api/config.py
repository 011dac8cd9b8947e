"""
API Configuration using centralized configuration system.
"""

from dotenv import load_dotenv

from .config_manager import get_api_config

load_dotenv()


class Settings:
    """Settings facade that always reads through the current API config."""

    @property
    def _api_config(self):
        return get_api_config()

    @property
    def database_url(self) -> str:
        return self._api_config.database_url

    @property
    def related_default_limit(self) -> int:
        return self._api_config.related_default_limit

    @property
    def related_max_limit(self) -> int:
        return self._api_config.related_max_limit

    @property
    def related_max_workers(self) -> int:
        return self._api_config.related_max_workers

    @property
    def related_cache_control(self) -> str:
        return self._api_config.related_cache_control


# Global settings instance
settings = Settings()
