from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    api_base: str = "http://localhost:8080"
    request_timeout: Optional[float] = None
    close_delay: float = 0.4
    currency_symbol: str = "R$"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="STOCK_UI_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("api_base")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
