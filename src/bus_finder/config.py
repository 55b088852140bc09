"""Runtime settings, read from the environment or a .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Bus finder settings. Every field maps to a BUS_FINDER_* variable."""

    model_config = SettingsConfigDict(
        env_prefix="BUS_FINDER_",
        env_file=".env",
        extra="ignore",
    )

    routes_file: Path | None = None  # default: bundled data/routes.json
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    # Client side
    base_url: str = "http://localhost:3000"
    request_timeout: float = 30.0
    debounce_ms: int = 300

    @property
    def debounce_delay(self) -> float:
        """Debounce delay in seconds."""
        return self.debounce_ms / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
