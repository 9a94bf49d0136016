#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for every
microkit component. The Settings object is assembled once at startup and
handed to component constructors; components never read os.environ
themselves.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _strip(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class MongoSettings(BaseSettings):
    """
    MongoDB configuration for the connection provider.

    MONGO_IS_COSMOSDB marks the restricted variant (no server-side count).
    """

    MONGO_URL: str | None = Field(default=None, description="MongoDB connection URL")
    MONGO_DB: str | None = Field(default=None, description="Database name")
    MONGO_IS_COSMOSDB: bool = Field(default=False, description="Backend is Cosmos DB (restricted)")
    MONGO_TLS: bool | None = Field(default=None, description="Use TLS")
    MONGO_TLS_INSECURE: bool | None = Field(default=None, description="Relax TLS constraints")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class NatsSettings(BaseSettings):
    """
    NATS configuration for client, listeners and publishers.

    POD_NAME is the client name; NATS_GROUP is the deployment group used as
    durable name and queue group of every listener.
    """

    NATS_URL: str | None = Field(default=None, description="NATS server URL")
    POD_NAME: str | None = Field(default=None, description="Client name (Kubernetes pod)")
    NATS_GROUP: str | None = Field(default=None, description="Durable subscriber group")
    NATS_STREAM: str | None = Field(default=None, description="JetStream stream name (optional)")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class RedisSettings(BaseSettings):
    """Redis configuration for the cache."""

    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    Usage:
        from microkit.core.config import get_settings

        settings = get_settings()
        mongo_url = settings.mongo.MONGO_URL
        group = settings.nats.NATS_GROUP
    """

    # MongoDB settings
    MONGO_URL: str | None = Field(default=None, description="MongoDB connection URL")
    MONGO_DB: str | None = Field(default=None, description="Database name")
    MONGO_IS_COSMOSDB: bool = Field(default=False, description="Backend is Cosmos DB (restricted)")
    MONGO_TLS: bool | None = Field(default=None, description="Use TLS")
    MONGO_TLS_INSECURE: bool | None = Field(default=None, description="Relax TLS constraints")

    # NATS settings
    NATS_URL: str | None = Field(default=None, description="NATS server URL")
    POD_NAME: str | None = Field(default=None, description="Client name (Kubernetes pod)")
    NATS_GROUP: str | None = Field(default=None, description="Durable subscriber group")
    NATS_STREAM: str | None = Field(default=None, description="JetStream stream name (optional)")

    # Redis settings
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")

    # Logging settings
    LOG_LEVEL: str | None = Field(default=None, description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    LOCAL_DEVELOPMENT: bool = Field(default=False, description="Running on a developer machine")

    @field_validator(
        "MONGO_URL", "MONGO_DB", "NATS_URL", "POD_NAME", "NATS_GROUP", "NATS_STREAM",
        mode="before",
    )
    @classmethod
    def strip_strings(cls, v):
        """Trim whitespace; blank values count as unset."""
        return _strip(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        v = _strip(v)
        if v is None:
            return None
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}")
        return v.upper()

    @property
    def effective_log_level(self) -> str:
        """LOG_LEVEL if set, DEBUG under local development, INFO otherwise."""
        if self.LOG_LEVEL:
            return self.LOG_LEVEL
        return "DEBUG" if self.LOCAL_DEVELOPMENT else "INFO"

    # Nested configuration views
    @property
    def mongo(self) -> MongoSettings:
        """Get MongoDB settings."""
        return MongoSettings(
            MONGO_URL=self.MONGO_URL,
            MONGO_DB=self.MONGO_DB,
            MONGO_IS_COSMOSDB=self.MONGO_IS_COSMOSDB,
            MONGO_TLS=self.MONGO_TLS,
            MONGO_TLS_INSECURE=self.MONGO_TLS_INSECURE,
        )

    @property
    def nats(self) -> NatsSettings:
        """Get NATS settings."""
        return NatsSettings(
            NATS_URL=self.NATS_URL,
            POD_NAME=self.POD_NAME,
            NATS_GROUP=self.NATS_GROUP,
            NATS_STREAM=self.NATS_STREAM,
        )

    @property
    def redis(self) -> RedisSettings:
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
        )

    @property
    def logging(self) -> LoggingSettings:
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.effective_log_level,
            LOG_FORMAT=self.LOG_FORMAT,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
    )


# Global settings instance (lazy singleton)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance.

    Intended for application startup code, which passes the values on to
    component constructors.

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing and after load_env()).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
