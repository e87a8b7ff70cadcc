from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Clara"
    DEBUG: bool = False

    # Upstream zkSync node
    UPSTREAM_URL: str = "https://mainnet.era.zksync.io"
    UPSTREAM_TIMEOUT_SECONDS: float | None = None

    # Listener
    HOST: str = "127.0.0.1"
    PORT: int = 7000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

@lru_cache()
def get_settings() -> Settings:
    return Settings()
