# ─────────────────────────────────────────────────────────────────
# config.py — Agent Settings
#
# Every tunable comes from the environment (prefix OUTAGE_) or an
# optional .env file next to this module, e.g.
#
#   OUTAGE_DEFAULT_EXPIRY_SEC=450
#   OUTAGE_DEAD_CHECK_INTERVAL_SEC=30
#   OUTAGE_VERBOSE=true
#   OUTAGE_LOG_LEVEL=DEBUG
# ─────────────────────────────────────────────────────────────────

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cache import DEFAULT_ASSET_EXPIRATION_TIME_SEC

ENV_FILE_PATH = Path(__file__).parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="OUTAGE_",
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # TTL given to a newly tracked asset until its metrics narrow it
    default_expiry_sec: int = Field(default=DEFAULT_ASSET_EXPIRATION_TIME_SEC, ge=1)

    # How often the agent asks the cache for dead assets
    dead_check_interval_sec: int = Field(default=30, ge=1)

    verbose: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
