from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    email_from: str | None = None
    email_pass: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    webhook_paid: str | None = None
    webhook_free: str | None = None
    webhook_timeout_seconds: float | None = None
    host: str = "0.0.0.0"
    port: int = 3000
    store_ttl_seconds: int = 3600
    cancel_expiry_on_overwrite: bool = False
    currency_symbol: str = "₹"
    store_name: str = "Finest Store"
    health_message: str = "✅ Finest backend is running"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
