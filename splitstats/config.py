import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_PASSWORD: str = ""
    REDIS_SOCKET_TIMEOUT: float = 5.0

    # Statistics
    SIGNIFICANCE_LEVEL: float = 0.05  # Alpha

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @field_validator("SIGNIFICANCE_LEVEL")
    @classmethod
    def check_significance_level(cls, v):
        if not 0 < v < 1:
            raise ValueError(f"SIGNIFICANCE_LEVEL must be between 0 and 1, got {v}")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
