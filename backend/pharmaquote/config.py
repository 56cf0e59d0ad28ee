"""Application configuration module."""

from pathlib import Path
from pydantic_settings import BaseSettings

# Project root, resolved relative to this file
_THIS_DIR = Path(__file__).parent  # backend/pharmaquote/
_BACKEND_ROOT = _THIS_DIR.parent  # backend/
_PROJECT_ROOT = _BACKEND_ROOT.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # Backend Configuration
    backend_host: str = "localhost"
    backend_port: int = 8000
    backend_debug: bool = False

    # Organization settings API (empty: built-in defaults only)
    settings_api_url: str = ""
    settings_api_timeout: float = 10.0
    settings_cache_ttl: float = 30.0

    # Draft quotes
    draft_ttl: int = 3600
    max_drafts: int = 200
    min_items: int = 1

    # Preview totals
    charges_tax_percent: float = 18.0
    advance_payment_ratio: float = 0.35

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": str(_ENV_FILE),
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
