# src/recordrepo/config.py

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Settings for the mapper/repository layer (Pydantic v2).

    Read from the environment with the RECORDREPO_ prefix, or from .env:
      RECORDREPO_LOG_LEVEL, RECORDREPO_LOG_JSON,
      RECORDREPO_DATABASE_URL, RECORDREPO_DATABASE_ECHO
    """

    # ------------------------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------------------------
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=False)

    # ------------------------------------------------------------------------------------
    # Database (SQLAlchemy store gateway)
    # ------------------------------------------------------------------------------------
    DATABASE_URL: str = Field(
        default="sqlite+pysqlite:///:memory:",
        description="Sync SQLAlchemy URL used by create_database_engine",
    )
    DATABASE_ECHO: bool = Field(default=False)

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    # ------------------------------------------------------------------------------------
    # Pydantic v2 settings config
    # ------------------------------------------------------------------------------------
    model_config = {
        "env_prefix": "RECORDREPO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",          # don't crash on unrelated env keys
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
