# storefront/client/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """
    Settings for the cart client, read from STOREFRONT_* env vars.

      - STOREFRONT_API_BASE     : API root, e.g. http://localhost:3000/api
      - STOREFRONT_STORAGE_PATH : JSON file standing in for browser localStorage
      - STOREFRONT_TIMEOUT      : request timeout in seconds (none by default)
    """

    API_BASE: str = "http://localhost:3000/api"
    STORAGE_PATH: Path = Path(".sushii_storage.json")
    TIMEOUT: float | None = None

    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=".env", extra="ignore")


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
