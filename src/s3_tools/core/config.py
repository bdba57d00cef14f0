"""Configuration management for s3-tools."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "WARNING"
    otel_enabled: bool = False
    otel_service_name: str = "s3-tools"
    otel_exporter_endpoint: str = "http://localhost:4317"

    model_config = {
        "env_prefix": "S3_TOOLS_",
        "env_file": ".env",
        "extra": "ignore",
        "case_sensitive": False,
    }


settings = Settings()
