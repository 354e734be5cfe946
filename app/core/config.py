"""Application configuration via environment variables."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Application
    app_name: str = "Event Planner"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./event_planner.db"

    # Tokens
    jwt_secret: str = ""  # Required; the app refuses to start without it
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 30

    # Generative AI backend
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Who may add/modify guests and tasks: "permissive" (any signed-in user)
    # or "owner" (event owner only)
    guest_task_policy: Literal["permissive", "owner"] = "permissive"

    # Logging
    log_dir: Path = Path.home() / ".logs" / "event-planner"
    log_level: str = "INFO"


settings = Settings()
