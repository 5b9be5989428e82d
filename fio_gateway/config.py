"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Fio API
    fio_api_base: str = "https://fioapi.fio.cz"
    fio_token: str = ""

    # Service
    service_name: str = "fio-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 30.0


settings = Settings()
