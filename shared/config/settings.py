"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageMode(str, Enum):
    """Storage backend behind the repositories."""

    POSTGRES = "postgres"
    MEMORY = "memory"


class PostgresSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(env_prefix="POSTGRES_")

    host: str = "localhost"
    port: int = 5432
    user: str = "coaching"
    password: SecretStr = SecretStr("coaching_dev_password")
    db: str = "english_coaching"
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def async_url(self) -> str:
        """Generate async SQLAlchemy connection URL."""
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.db}"


class StorageSettings(BaseSettings):
    """Repository backend selection."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    mode: StorageMode = StorageMode.POSTGRES


# Accepted outside production only.
DEV_JWT_SECRET = "development-only-jwt-secret-change-me-0123456789"


class JWTSettings(BaseSettings):
    """JWT authentication configuration."""

    model_config = SettingsConfigDict(env_prefix="JWT_")

    secret_key: SecretStr = SecretStr(DEV_JWT_SECRET)
    algorithm: str = "HS256"
    expire_hours: int = Field(default=24, gt=0)

    @field_validator("secret_key")
    @classmethod
    def secret_long_enough(cls, v: SecretStr) -> SecretStr:
        """Reject signing secrets shorter than 32 characters."""
        if len(v.get_secret_value()) < 32:
            raise ValueError("JWT secret key must be at least 32 characters")
        return v


class PasswordSettings(BaseSettings):
    """Password policy and Argon2 cost parameters."""

    model_config = SettingsConfigDict(env_prefix="PASSWORD_")

    min_length: int = Field(default=8, ge=1)
    time_cost: int = Field(default=2, ge=1)
    memory_cost: int = Field(default=19456, ge=8, description="KiB")
    parallelism: int = Field(default=1, ge=1)


class AdminSettings(BaseSettings):
    """Bootstrap administrator account, seeded by scripts/init_databases.py."""

    model_config = SettingsConfigDict(env_prefix="ADMIN_")

    email: str | None = None
    password: SecretStr | None = None
    display_name: str = "Administrator"


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Storage
    storage: StorageSettings = Field(default_factory=StorageSettings)
    postgres: PostgresSettings = Field(default_factory=PostgresSettings)

    # Authentication
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    password: PasswordSettings = Field(default_factory=PasswordSettings)
    admin: AdminSettings = Field(default_factory=AdminSettings)

    # Security
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @model_validator(mode="after")
    def require_jwt_secret_in_production(self) -> "Settings":
        """Production must set JWT_SECRET_KEY explicitly."""
        if (
            self.environment == Environment.PRODUCTION
            and self.jwt.secret_key.get_secret_value() == DEV_JWT_SECRET
        ):
            raise ValueError("JWT_SECRET_KEY must be set in production")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
