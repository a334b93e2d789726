"""Module: config."""

from pydantic_settings import BaseSettings

# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # Primary SQLAlchemy connection string for the backend database.
    database_url: str = "sqlite:///./groomdesk.db"
    # Browser origins allowed to call the API (booking portal dev servers).
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:8080",
    ]
    log_level: str = "INFO"

    # Loyalty: one point per this many currency units actually paid.
    loyalty_spend_per_point: int = 10
    loyalty_card_prefix: str = "PG"

    min_password_length: int = 6

    # Back-office account created by the seed script.
    admin_email: str = "admin@groomdesk.local"
    admin_password: str = "change-me-admin"

    # Configure pydantic-settings to also load values from local .env file.
    class Config:
        env_file = ".env"

# Global settings instance imported by app modules at runtime.
settings = Settings()
