"""
Application configuration
Read from environment variables (and an optional .env file)
"""
from decimal import Decimal
from typing import List, Optional
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Front Desk"
    DEBUG: bool = False

    # Database (store endpoint and credentials)
    DATABASE_URL: str = "sqlite:///./frontdesk.db"

    # JWT sessions
    SECRET_KEY: str = "frontdesk-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720

    # Hotel / receipts
    HOTEL_NAME: str = "MIYAKY HOTEL & SUITES"
    HOTEL_LOGO_URL: Optional[str] = "https://imgur.com/a5YN48Z.jpg"
    CURRENCY_SYMBOL: str = "₦"
    VAT_RATE: Decimal = Decimal("0.075")

    # Auto-checkout sweep
    AUTO_CHECKOUT_ENABLED: bool = True
    AUTO_CHECKOUT_INTERVAL_MINUTES: int = 5

    CORS_ORIGINS: List[str] = ["*"]

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
