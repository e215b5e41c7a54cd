"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Event Share"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./eventshare.db"

    # Object storage (S3 or any S3-compatible endpoint)
    s3_bucket_name: str = "eventshare-media"
    s3_region: str = "us-east-1"
    s3_endpoint_url: str = ""  # Empty means AWS
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_public_base_url: str = ""  # Overrides https://{bucket}.s3.amazonaws.com
    storage_root: str = "events/shared"


settings = Settings()
