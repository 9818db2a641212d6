"""Application configuration helpers.

Credentials are only ever read from the environment: `GOOGLE_MAPS_API_KEY` is a
billable key and must never be hardcoded. A `.env` file in the working
directory is honoured for local development.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = "Mobile_Food_Facility_Permit.csv"


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str
    data_path: str = DEFAULT_DATA_PATH
    host: str = "localhost"
    port: int = 8080
    lookup_timeout: float = 10.0
    lookup_workers: int = 1
    strict_load: bool = False


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_maps_api_key = os.getenv("GOOGLE_MAPS_API_KEY", "").strip()
    data_path = os.getenv("FOODTRUCKS_DATA_PATH") or DEFAULT_DATA_PATH
    host = os.getenv("FOODTRUCKS_HOST") or "localhost"
    port = int(os.getenv("PORT", "8080"))
    lookup_timeout = float(os.getenv("FOODTRUCKS_LOOKUP_TIMEOUT", "10"))
    lookup_workers = max(1, int(os.getenv("FOODTRUCKS_LOOKUP_WORKERS", "1")))
    strict_load = _env_flag("FOODTRUCKS_STRICT_LOAD")

    if not google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not configured; walking distance searches will fail.")

    return Settings(
        google_maps_api_key=google_maps_api_key,
        data_path=data_path,
        host=host,
        port=port,
        lookup_timeout=lookup_timeout,
        lookup_workers=lookup_workers,
        strict_load=strict_load,
    )


def require_api_key(settings: Settings) -> str:
    if not settings.google_maps_api_key:
        raise ConfigError("GOOGLE_MAPS_API_KEY must be set in the environment for distance lookups.")
    return settings.google_maps_api_key
