from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Project-wide configuration loaded from environment variables (.env optional).

    Every variable is read with the ``EVSTATS_`` prefix, e.g.
    ``EVSTATS_LOG_LEVEL=DEBUG``.
    """

    LOG_LEVEL: str = Field("INFO", description="Level of the stderr Loguru sink")
    LOG_DIR: str = Field("logs", description="Directory for rotating log files")
    LOG_TO_FILE: bool = Field(False, description="Also write evstats.log / debug.log under LOG_DIR")

    model_config = {
        "env_file": ".env",
        "env_prefix": "EVSTATS_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}; got {value!r}")
        return level


settings = Settings()
