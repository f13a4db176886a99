"""
Scripture QA Service - Application Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix SQA_ for Scripture QA Service

Dataset sources accept either an http(s) URL or a local file path.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with SQA_ prefix.
    Example: SQA_QURAN_SOURCE=https://cdn.example.org/quran.csv
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8085

    # Application metadata
    service_name: str = "scripture-qa-service"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Dataset sources (URL or path)
    quran_source: str = "data/quran.csv"
    hadith_source: str = "data/hadith.csv"
    dataset_timeout: float = 30.0
    dataset_max_retries: int = 3
    dataset_retry_delay: float = 1.0

    # Optional YAML vocabulary; built-in defaults when unset
    vocabulary_path: str | None = None

    # Caller-side retry policy for failed queries
    query_max_retries: int = 2
    query_retry_delay: float = 1.0

    model_config = SettingsConfigDict(
        env_prefix="SQA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
