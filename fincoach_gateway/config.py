"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "fincoach-gateway"
    log_level: str = "INFO"

    # Profile defaults applied when the caller leaves a field out
    default_risk_tolerance: str = "moderate"
    default_retirement_age: int = 65

    # Investable amount = max(savings balance * fraction, minimum)
    investable_savings_fraction: float = 0.8
    minimum_investable_amount: float = 1000.0


settings = Settings()
