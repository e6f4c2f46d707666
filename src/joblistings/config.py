# src/joblistings/config.py
"""
Runtime settings, read from environment variables.

The CLI calls `load_dotenv()` before this runs, so a `.env` file in the
project root works the same as exported variables.
"""

from __future__ import annotations

import os

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from joblistings.errors import ConfigError

DEFAULT_RANGE = "Sheet1"
DEFAULT_TIMEOUT = 20.0
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_VAR = "JOBLISTINGS_LOG_LEVEL"


class Settings(BaseSettings):
    # blank variables count as unset
    model_config = SettingsConfigDict(frozen=True, populate_by_name=True, env_ignore_empty=True)

    spreadsheet_id: str = Field(default="", validation_alias="SHEETS_SPREADSHEET_ID")
    sheet_range: str = Field(default=DEFAULT_RANGE, validation_alias="SHEETS_RANGE")
    api_key: str = Field(default="", validation_alias="SHEETS_API_KEY")
    # path to a Google service account JSON; enables the gspread fallback
    service_account_file: str = Field(default="", validation_alias="SHEETS_SERVICE_ACCOUNT_FILE")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, validation_alias="SHEETS_TIMEOUT")
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias=LOG_LEVEL_VAR)

    @field_validator("log_level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


def load_settings() -> Settings:
    """Build Settings from the environment, turning validation errors into ConfigError."""
    try:
        return Settings()
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise ConfigError(f"Invalid environment settings: {problems}") from e


def log_level_from_env() -> str:
    # read on its own so offline commands work with a broken SHEETS_* setup
    return (os.getenv(LOG_LEVEL_VAR) or DEFAULT_LOG_LEVEL).upper()
