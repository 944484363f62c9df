from enum import Enum
from functools import lru_cache
from typing import Annotated, List

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class AmountPolicy(str, Enum):
    """How to treat a booking whose amount breakdown has no total."""

    LENIENT = "lenient"  # invoice a zero amount
    STRICT = "strict"  # reject the booking


class StorageBackend(str, Enum):
    S3 = "s3"
    LOCAL = "local"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = Field(default="HyperInvoice Service")
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )

    booking_service_base_url: AnyHttpUrl = Field(
        default="https://hyper-render-prod.onrender.com"
    )
    booking_service_timeout: float = Field(
        default=10.0
    )
    booking_service_token: str | None = Field(
        default=None
    )
    use_mock_data: bool = Field(
        default=False
    )

    amount_policy: AmountPolicy = Field(
        default=AmountPolicy.LENIENT
    )
    issuer_name: str = Field(default="HyperInvoice")
    default_currency: str = Field(default="INR")
    template_name: str = Field(default="invoice.html")

    storage_backend: StorageBackend = Field(
        default=StorageBackend.S3
    )
    storage_namespace: str = Field(default="invoices")
    storage_force_download: bool = Field(default=True)
    storage_public_base_url: str | None = Field(
        default=None
    )
    aws_s3_bucket: str | None = Field(default=None)
    aws_region: str = Field(default="ap-south-1")
    aws_access_key_id: str | None = Field(default=None)
    aws_secret_access_key: str | None = Field(default=None)
    local_storage_path: str = Field(default="/tmp/hyperinvoice")

    persist_invoices: bool = Field(default=True)
    database_url: str = Field(default="sqlite:///./invoices.db")

    model_config = SettingsConfigDict(
        env_prefix="HYPERINVOICE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("storage_namespace", mode="after")
    def _strip_namespace(cls, value: str) -> str:
        return value.strip("/")

    @field_validator("storage_public_base_url", mode="after")
    def _strip_public_url(cls, value: str | None) -> str | None:
        return value.rstrip("/") if value else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
