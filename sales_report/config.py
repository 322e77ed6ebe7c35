"""
Runtime settings, read from environment variables or a local .env file.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    LOG_LEVEL: str = "INFO"

    # "profit" ranks sellers by profit; "input_order" keeps the seller list order
    RANKING_MODE: str = "profit"
    # "by_profit" pays a flat amount per rank; "share_of_profit" pays a percentage of profit
    BONUS_STRATEGY: str = "by_profit"
    TOP_PRODUCTS_LIMIT: int = Field(default=10, ge=0, le=10)

    # load the demo data set when the HTTP service starts
    SEED_ON_STARTUP: bool = True


settings = Settings()
