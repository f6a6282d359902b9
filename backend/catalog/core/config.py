"""
Core configuration module for the Benefits Catalog service.
Settings are read from environment variables / .env with sensible defaults.
"""

from pydantic_settings import BaseSettings
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Defaults run a self-contained SQLite catalog.
    """

    # Application
    app_name: str = "Benefits Catalog"
    app_version: str = "1.0.0"
    environment: str = "production"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./benefits.db"
    database_pool_size: int = 10
    database_max_overflow: int = 20
    database_pool_recycle: int = 1800  # Recycle connections after 30 min
    database_pool_pre_ping: bool = True
    seed_on_startup: bool = True

    # API Configuration
    api_prefix: str = "/api/v1"
    api_host: str = "0.0.0.0"
    api_port: int = 8890
    api_workers: int = 4

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # CORS - restrict to known frontend origins (extend via .env)
    cors_origins: list = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8081"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list = ["GET", "OPTIONS"]
    cors_allow_headers: list = ["Content-Type", "Accept", "Accept-Language"]

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_benefits: str = "120/minute"
    rate_limit_detail: str = "240/minute"
    rate_limit_health: str = "1000/minute"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
