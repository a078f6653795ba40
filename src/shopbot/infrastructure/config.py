"""Runtime settings read from the environment.

``SHOPBOT_ENV`` and ``SHOPBOT_DATA_DIR`` carry the project prefix;
``LOG_LEVEL`` is read unprefixed and defaults by environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SHOPBOT_",
        extra="ignore",
        populate_by_name=True,
    )

    env: str = "development"
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )

    @field_validator("env", mode="before")
    @classmethod
    def normalize_env(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def default_log_level(self) -> "Settings":
        level = self.log_level or _LEVELS_BY_ENV.get(self.env, "INFO")
        self.log_level = level.upper()
        return self

    @property
    def json_logs(self) -> bool:
        return self.env in ("production", "staging")
