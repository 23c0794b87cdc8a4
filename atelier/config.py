"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    postgres_host: str = "postgres"
    postgres_port: int = 5432
    postgres_user: str = "atelier"
    postgres_password: str = "changeme"
    postgres_db: str = "atelier_db"
    # Full URI override (e.g. sqlite:// for local runs and tests)
    sqlalchemy_database_uri: Optional[str] = None

    # Redis
    redis_url: str = "redis://redis:6379/0"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True

    # Celery
    celery_broker_url: str = "redis://redis:6379/0"
    celery_result_backend: str = "redis://redis:6379/0"

    # Compositor (external watermark / room visualization service)
    compositor_url: str = "http://compositor:9000/generate-images"
    compositor_api_key: Optional[str] = None
    compositor_timeout_seconds: float = 30.0

    # Derivative tasks
    derivative_max_attempts: int = 5
    derivative_retry_base_seconds: int = 30
    derivative_poll_interval_seconds: int = 60
    derivative_poll_batch_size: int = 50
    # Tasks stuck in processing longer than this are handed back to the poller
    derivative_processing_timeout_seconds: int = 600

    # Logging
    log_level: str = "INFO"

    # Environment
    environment: str = "development"

    @property
    def database_url(self) -> str:
        """Build database URL."""
        if self.sqlalchemy_database_uri:
            return self.sqlalchemy_database_uri
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
