"""Signage configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class SignageConfig(BaseSettings):
    """Display configuration loaded from environment variables.

    Settings are loaded from SIGNAGE_* environment variables with sensible
    defaults. For local development, create a .env file in the project root.
    """

    # Snapshot sources
    data_file: str = Field(
        default="data/signage.json",
        description="Admin data file (JSON export format) read on every reload",
    )
    snapshot_url: str = Field(
        default="",
        description="Optional HTTP endpoint serving the same JSON; wins over data_file",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for snapshot HTTP requests",
    )

    # Clock
    timezone: str = Field(
        default="Europe/Berlin",
        description="IANA timezone of the facility's wall clock",
    )
    tick_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Interval between content selections in the display loop",
    )

    # Logging
    display_id: str = Field(
        default="",
        description="Name of this screen, attached to every log event",
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "SIGNAGE_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: SignageConfig | None = None


def get_config() -> SignageConfig:
    """Get the signage configuration singleton.

    Returns:
        SignageConfig: Signage configuration instance
    """
    global _config
    if _config is None:
        _config = SignageConfig()
    return _config
