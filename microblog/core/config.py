"""Microblog Configuration - environment-sourced, immutable settings."""

from functools import lru_cache
from typing import Literal
from urllib.parse import quote

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Process configuration.

    Built once at startup and handed to the application factory and to every
    service constructor. The object is frozen so nothing can mutate it after
    the first request has been served.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app_name: str = "Microblog"
    app_version: str = "0.1.0"
    debug: bool = False

    # Token signing. Changing it invalidates every outstanding token.
    secret_key: str = Field(..., description="Symmetric HS256 signing secret")

    # Registration policy
    minimum_password_length: int = Field(8, ge=1)
    maximum_password_length: int = Field(128, ge=1)

    # Argon2id cost parameters
    argon2_time_cost: int = Field(3, ge=1)
    argon2_memory_cost: int = Field(65536, ge=8, description="KiB")
    argon2_parallelism: int = Field(4, ge=1)

    # Relational store
    database_url: str | None = None
    database_user: str = "postgres"
    database_pass: str = "postgres"
    database_name: str = "microblog"
    database_host: str = "localhost"
    db_pool_size: int = 10
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    # Revocation store
    redis_addr: str = "localhost:6379"
    redis_pass: str | None = None
    redis_db: int = 0

    # Deadline applied to every individual store call
    store_timeout_seconds: float = Field(5.0, gt=0)

    # HTTP
    listen_address: str = "0.0.0.0:8000"
    cors_origin: str = "http://localhost:3000"
    cookie_secure: bool = False
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["structured", "dev"] = "dev"

    @field_validator("secret_key")
    @classmethod
    def _secret_key_length(cls, value: str) -> str:
        if len(value) < 16:
            raise ValueError("SECRET_KEY must be at least 16 characters")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        return value

    @model_validator(mode="after")
    def _password_bounds(self) -> "Settings":
        if self.maximum_password_length < self.minimum_password_length:
            raise ValueError("MAXIMUM_PASSWORD_LENGTH must be >= MINIMUM_PASSWORD_LENGTH")
        return self

    @property
    def effective_database_url(self) -> str:
        """SQLAlchemy URL, preferring DATABASE_URL over the individual parts."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_pass}"
            f"@{self.database_host}/{self.database_name}"
        )

    @property
    def redis_url(self) -> str:
        """Connection URL for the revocation store; the password is percent-encoded."""
        auth = f":{quote(self.redis_pass, safe='')}@" if self.redis_pass else ""
        return f"redis://{auth}{self.redis_addr}/{self.redis_db}"

    @property
    def listen_host_port(self) -> tuple[str, int]:
        host, _, port = self.listen_address.rpartition(":")
        return host or "0.0.0.0", int(port)


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return Settings()
