"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "fooddelivery API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./fooddelivery.db")
    default_country: str = getenv("DEFAULT_COUNTRY", "Pakistan")
    lock_timeout_seconds: float = float(getenv("LOCK_TIMEOUT_SECONDS", "10"))
    strict_status_transitions: bool = getenv("STRICT_STATUS_TRANSITIONS", "0") == "1"
    lock_items_on_terminal_orders: bool = getenv("LOCK_ITEMS_ON_TERMINAL_ORDERS", "1") == "1"
    seed_demo_data: bool = getenv("SEED_DEMO_DATA", "0") == "1"


settings: Settings = Settings()
