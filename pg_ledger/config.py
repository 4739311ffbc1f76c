"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./pg_ledger.db"

    # Service
    service_name: str = "pg-ledger"
    log_level: str = "INFO"

    # Billing
    rent_due_day: int = 5  # Day of month rent falls due
    recent_payments_limit: int = 5  # Payments listed on the billing overview
    ledger_include_unbilled: bool = True  # List residents without a billable room as N/A rows


settings = Settings()
