"""
Application Settings

Loaded from environment variables prefixed with PAYMENT_INSTRUCTIONS_
(or a local .env file).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment"""

    model_config = SettingsConfigDict(
        env_prefix="PAYMENT_INSTRUCTIONS_",
        env_file=".env",
        extra="ignore",
    )

    # ======================
    # Application
    # ======================
    service_name: str = "payment-instructions"
    app_version: str = "1.0.0"
    cors_allow_origins: list[str] = ["*"]

    # ======================
    # Logging
    # ======================
    log_level: str = "INFO"
    log_json: bool = False

    # ======================
    # Tracing
    # ======================
    otel_enabled: bool = False
    otel_service_name: str = "payment-instructions"


settings = Settings()
