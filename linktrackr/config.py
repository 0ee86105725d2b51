from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False  # Starlette debug mode replaces 500 handlers with tracebacks

    # Application
    app_name: str = "LinkTrackr"
    app_version: str = "1.0.0"

    # Auth (tokens are issued by the external account service)
    secret_key: str = "your-secret-key-here-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Server
    host: str = "127.0.0.1"
    port: int = 5001
    cors_origins: List[str] = ["http://localhost:5173"]
    trust_proxy_headers: bool = False  # Read client IP from X-Forwarded-For

    # Database
    database_url: str = "sqlite:///./linktrackr.db"

    # Short links
    base_url: Optional[str] = None  # Falls back to the request's base URL
    short_id_length: int = 7
    short_id_max_retries: int = 5  # Redraws after the first collision

    # Cache settings
    cache_backend: str = "memory"  # Options: "memory", "redis", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: Optional[int] = None  # Seconds; None keeps entries until deleted

    # Logging
    log_json: bool = True

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
