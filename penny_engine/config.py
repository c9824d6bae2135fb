"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables (PENNY_*)"""

    model_config = SettingsConfigDict(
        env_prefix="PENNY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Service
    service_name: str = "penny-engine"
    log_level: str = "INFO"

    # Streak tracking
    streak_history_days: int = 90

    # Recommendations
    savings_plan_days: int = 30
    price_verification_confidence: float = 0.8

    # Affordability result
    price_range_spread: float = 0.2  # +/- 20% around the estimate

    # Transaction preview
    amount_review_confidence: float = 0.8
    category_review_confidence: float = 0.7


settings = Settings()
