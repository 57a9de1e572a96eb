from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    telegram_token: SecretStr = Field(SecretStr("TEST_TOKEN"), alias="TELEGRAM_TOKEN")
    timezone: str = Field("UTC", alias="TIMEZONE")
    sleep_onset_minutes: int = Field(14, alias="SLEEP_ONSET_MINUTES")
    sleep_cycle_minutes: int = Field(90, alias="SLEEP_CYCLE_MINUTES")
    wake_cycles: int = Field(6, alias="WAKE_CYCLES")
    clock_format: Literal["12h", "24h"] = Field("12h", alias="CLOCK_FORMAT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
