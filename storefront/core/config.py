# storefront/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    All values have defaults, a bare checkout runs as-is.

    Optional env vars (.env):
      - DATA_DIR   : directory holding products.json / orders.json / messages.json
      - PUBLIC_DIR : static front-end served at "/" when it exists
      - PORT       : HTTP port (default 3000)
    """

    PROJECT_NAME: str = "Sushii API"
    API_PREFIX: str = "/api"

    # Flat JSON collections
    DATA_DIR: Path = Path("data")
    PUBLIC_DIR: Path = Path("public")

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def products_file(self) -> Path:
        return self.DATA_DIR / "products.json"

    @property
    def orders_file(self) -> Path:
        return self.DATA_DIR / "orders.json"

    @property
    def messages_file(self) -> Path:
        return self.DATA_DIR / "messages.json"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
