"""
Application settings.

Values come from environment variables prefixed ``OSRM_ISOCHRONES_`` (or a
``.env`` file), e.g. ``OSRM_ISOCHRONES_OSRM_SERVER=http://localhost:5000/``.
Settings are read once per process via :func:`get_settings`; the core never
reads them itself, they are passed in explicitly.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from osrm_isochrones.core.models import DEFAULT_RESOLUTION, DEFAULT_SPEED_KMH
from osrm_isochrones.datasources.osrm.client import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_PROFILE,
    DEFAULT_SERVER,
    OSRMConfig,
)


class Settings(BaseSettings):
    """Process-wide defaults."""

    model_config = SettingsConfigDict(
        env_prefix="OSRM_ISOCHRONES_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "osrm-isochrones"
    app_env: str = "development"
    debug: bool = False

    osrm_server: str = DEFAULT_SERVER
    osrm_profile: str = DEFAULT_PROFILE
    table_batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1)
    request_timeout: float = Field(default=30, gt=0)

    speed_kmh: float = Field(default=DEFAULT_SPEED_KMH, gt=0)
    grid_resolution: int = Field(default=DEFAULT_RESOLUTION, ge=2)

    data_dir: Path = Path("data")
    cache_ttl_hours: float = Field(default=0, ge=0)

    def osrm_config(self, profile: str | None = None, server: str | None = None) -> OSRMConfig:
        """Sampler configuration, optionally overriding profile/server."""
        return OSRMConfig(
            server_url=server or self.osrm_server,
            profile=profile or self.osrm_profile,
            batch_size=self.table_batch_size,
            timeout=self.request_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the cached process settings."""
    return Settings()
