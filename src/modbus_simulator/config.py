"""
Application configuration using Pydantic Settings.

Environment-driven configuration with validation and type safety.
"""

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server Configuration
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_config_file: Optional[str] = Field(default=None, alias="LOG_CONFIG_FILE")

    # Redis Configuration
    redis_host: str = Field(default="localhost", alias="REDIS_HOST")
    redis_port: int = Field(default=6379, alias="REDIS_PORT")
    redis_db: int = Field(default=0, alias="REDIS_DB")
    redis_password: str | None = Field(default=None, alias="REDIS_PASSWORD")
    redis_socket_timeout: float = Field(default=5.0, alias="REDIS_SOCKET_TIMEOUT")
    redis_socket_connect_timeout: float = Field(default=5.0, alias="REDIS_SOCKET_CONNECT_TIMEOUT")
    redis_max_connections: int = Field(default=50, alias="REDIS_MAX_CONNECTIONS")
    redis_decode_responses: bool = Field(default=True, alias="REDIS_DECODE_RESPONSES")
    redis_health_check_interval: int = Field(default=30, alias="REDIS_HEALTH_CHECK_INTERVAL")

    # Cache Configuration
    cache_default_ttl: int = Field(default=3600, alias="CACHE_DEFAULT_TTL")  # 1 hour default
    cache_key_prefix: str = Field(default="modbus_simulator", alias="CACHE_KEY_PREFIX")
    register_cache_ttl: int = Field(default=86400, alias="REGISTER_CACHE_TTL")  # 24 hours, cleared on writes

    # Database Configuration
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")
    postgres_db: str = Field(default="modbus_simulator", alias="POSTGRES_DB")
    postgres_user: str = Field(default="modbus_user", alias="POSTGRES_USER")
    postgres_password: str = Field(default="modbus_password", alias="POSTGRES_PASSWORD")
    database_pool_size: int = Field(default=10, alias="DATABASE_POOL_SIZE")
    database_max_overflow: int = Field(default=20, alias="DATABASE_MAX_OVERFLOW")
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")

    @property
    def database_url(self) -> str:
        """Build the async database URL (DATABASE_URL wins over the PostgreSQL parts)."""
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    # Store Configuration
    connection_name_max_length: int = Field(default=100, alias="CONNECTION_NAME_MAX_LENGTH")
    slave_name_max_length: int = Field(default=100, alias="SLAVE_NAME_MAX_LENGTH")
    auto_port_base: int = Field(default=501, alias="AUTO_PORT_BASE")  # first auto-assigned port is base + 1

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True


# Global settings instance
settings = Settings()
