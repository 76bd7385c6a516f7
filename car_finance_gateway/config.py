"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage
    storage_backend: Literal["file", "database", "memory"] = "file"
    data_file_path: str = "data/car-financing-data.json"
    database_url: str = "sqlite:///./car-financing.db"

    # Service
    service_name: str = "car-finance-gateway"
    log_level: str = "INFO"

    # MCP server
    mcp_server_name: str = "car-financing-data"
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
