"""
Application settings using Pydantic BaseSettings.
"""

from typing import List, Optional, Union

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "RepairConnect Job Workflow Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: Union[str, List[str]] = "*"
    PUBLIC_BASE_URL: str = "http://localhost:8080"
    FRONTEND_BASE_URL: str = "http://localhost:3000"

    # Database
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    DATABASE_URL: Optional[str] = Field(None, validate_default=True)
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False

    # Security
    JWT_SECRET_KEY: str = "your-jwt-secret-key-here-change-in-production"
    ALGORITHM: str = "HS256"

    # Payments
    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_WEBHOOK_SECRET: Optional[str] = None
    PAYMENT_GATEWAY_TIMEOUT_SECONDS: float = 10.0
    PAYMENT_RETRY_AFTER_SECONDS: int = 30
    INVOICE_DEFAULT_CURRENCY: str = "USD"
    INVOICE_DEBUG_ENABLED: bool = False
    INVOICE_DEBUG_SECRET: Optional[str] = None

    # Media storage
    MEDIA_ROOT: str = "uploads"
    MEDIA_URL_PREFIX: str = "/uploads"
    MEDIA_MAX_BYTES: int = 5 * 1024 * 1024

    # Background workers
    BACKGROUND_WORKERS_ENABLED: bool = True
    SWEEP_INTERVAL_SECONDS: int = 3600
    SWEEP_RETENTION_HOURS: int = 24
    SWEEP_BATCH_SIZE: int = 100
    SWEEP_INCLUDE_CANCELLED: bool = False
    NOTIFICATION_RETRY_INTERVAL_SECONDS: int = 30
    NOTIFICATION_MAX_RETRIES: int = 5
    NOTIFICATION_OUTBOX_MAX_SIZE: int = 10000

    # Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    CELERY_TASK_TIME_LIMIT: int = 600  # 10 minutes
    CELERY_TASK_SOFT_TIME_LIMIT: int = 480  # 8 minutes

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        return ["*"]

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        if isinstance(v, str):
            return v
        # Build from individual components if DATABASE_URL is not provided
        user = info.data.get("POSTGRES_USER") or "repairconnect"
        password = info.data.get("POSTGRES_PASSWORD") or "repairconnect"
        host = info.data.get("POSTGRES_SERVER") or "localhost"
        db = info.data.get("POSTGRES_DB") or "repairconnect"
        return f"postgresql+asyncpg://{user}:{password}@{host}:5432/{db}"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("INVOICE_DEFAULT_CURRENCY")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a three-letter ISO 4217 code")
        return v.upper()

    @property
    def debug_payments_allowed(self) -> bool:
        """Debug pay links are only honoured outside production."""
        return self.INVOICE_DEBUG_ENABLED and self.ENVIRONMENT != "production"

    @property
    def payment_gateway_configured(self) -> bool:
        return bool(self.STRIPE_SECRET_KEY)

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


# Global settings instance
settings = Settings()
