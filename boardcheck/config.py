"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Monday.com API (token and board are required when a request runs)
    monday_api_token: str = ""
    monday_deals_board_id: str = ""
    monday_api_url: str = "https://api.monday.com/v2"
    # Column values are queried as column { title }, available from 2023-10 on
    monday_api_version: str = "2024-10"

    # Column the sync config maps the deal stage to, and the column the
    # webhook integration reads status changes from
    current_stage_column_id: str = "deal_stage"
    webhook_stage_column_id: str = "color_mktrw6k3"

    # Number of items sampled for current status values
    sample_item_limit: int = 3

    # Include the traceback in 500 responses
    expose_error_stack: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
