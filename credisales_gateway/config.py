"""Configuration management using Pydantic Settings"""

from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="CREDISALES_", extra="ignore"
    )

    # Credit-sales backend
    backend_api_base: str = "http://localhost:3000"
    backend_api_token: str | None = None

    # Service
    service_name: str = "credisales-gateway"
    log_level: str = "INFO"
    timezone: str = "America/Caracas"  # calendar day used to anchor generated schedules

    # HTTP Client
    http_timeout_seconds: float = 5.0
    backend_max_retries: int = 3
    backend_backoff_base: float = 0.5  # Exponential backoff base in seconds

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


settings = Settings()
