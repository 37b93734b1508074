"""Configuration management for bookart.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_SECRET_KEY = "change-me-in-production"


def _default_database_url() -> str:
    db_path = Path.home() / ".bookart" / "bookart.db"
    return f"sqlite:///{db_path}"


@dataclass
class Config:
    """Application configuration."""

    # Database
    database_url: str

    # Auth
    secret_key: str
    token_ttl: int  # seconds

    # Logging
    log_level: str

    # Server
    host: str
    port: int

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            database_url=os.environ.get("BOOKART_DATABASE_URL", _default_database_url()),
            secret_key=os.environ.get("BOOKART_SECRET_KEY", DEFAULT_SECRET_KEY),
            token_ttl=int(os.environ.get("BOOKART_TOKEN_TTL", str(7 * 24 * 3600))),
            log_level=os.environ.get("BOOKART_LOG_LEVEL", "INFO").upper(),
            host=os.environ.get("BOOKART_HOST", "127.0.0.1"),
            port=int(os.environ.get("BOOKART_PORT", "5000")),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.secret_key == DEFAULT_SECRET_KEY:
            errors.append("BOOKART_SECRET_KEY is not set; tokens are signed with the default key")

        if self.token_ttl <= 0:
            errors.append(f"BOOKART_TOKEN_TTL must be positive, got {self.token_ttl}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
