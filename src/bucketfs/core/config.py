"""Configuration management for bucketfs."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "bucketfs"
    otel_exporter_endpoint: str = "http://localhost:4317"

    # Lifetime of the throwaway signed URL used to derive public URLs
    public_url_ttl_seconds: int = 3600
    list_max_keys: int = 1000

    model_config = {
        "env_prefix": "BUCKETFS_",
        "case_sensitive": False,
    }


settings = Settings()
