"""Runtime settings read from ``WSDEPS_*`` environment variables."""

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_LOG_LEVEL, ENV_PREFIX, MANIFEST_FILENAME

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    log_level: LogLevel = DEFAULT_LOG_LEVEL
    log_format: Literal["text", "json"] = "text"
    workspace_root: Optional[str] = None
    manifest_name: str = MANIFEST_FILENAME

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: Any) -> Any:
        """Accept level names in any case (``debug`` as well as ``DEBUG``)."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Drop the cached settings so environment changes are picked up."""
    get_settings.cache_clear()
