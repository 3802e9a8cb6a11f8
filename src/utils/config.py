"""
Configuration management for the Recipe ARR application.

This module handles:
- Database path and URL configuration
- Environment-specific configuration (development vs. production)
- Display settings (currency, amount decimals)
- Logging level

Environment variables:
    RECIPE_ARR_ENV: "production" (default) or "development"
    RECIPE_ARR_DB_PATH: Explicit SQLite database file path
    RECIPE_ARR_DB_URL: Full SQLAlchemy URL (takes precedence over the path)
    RECIPE_ARR_DB_TIMEOUT: SQLite busy timeout in seconds (default 30)
    RECIPE_ARR_CURRENCY: Currency code used for display (default IDR)
    RECIPE_ARR_AMOUNT_DECIMALS: Decimals shown for amounts (default 2)
    RECIPE_ARR_LOG_LEVEL: Logging level name (default INFO)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .constants import (
    AMOUNT_DISPLAY_DECIMALS,
    APP_DIR_NAME,
    APP_NAME,
    APP_VERSION,
    CURRENCY_FORMATS,
    DATABASE_FILENAME,
    DATABASE_VERSION,
    DEFAULT_CURRENCY,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "RECIPE_ARR_"
VALID_ENVIRONMENTS = ("production", "development")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _int_from_env(name: str, default: int, minimum: int = 0, maximum: Optional[int] = None) -> int:
    """Read an integer setting, falling back to the default with a warning."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {name} value '{raw}', using default {default}")
        return default
    if value < minimum or (maximum is not None and value > maximum):
        logger.warning(f"Invalid {name} value '{raw}' (out of range), using default {default}")
        return default
    return value


class Config:
    """
    Application configuration manager.

    Handles database location, environment settings and display options.
    Values are read from the environment once, at construction.
    """

    def __init__(self, environment: str = "production"):
        """
        Initialize configuration.

        Args:
            environment: Environment mode - 'production' or 'development'
        """
        if environment not in VALID_ENVIRONMENTS:
            logger.warning(f"Unknown environment '{environment}', using 'production'")
            environment = "production"
        self.environment = environment

        if environment == "development":
            self._base_dir = self._get_project_data_dir()
        else:
            self._base_dir = self._get_user_documents_dir()

        db_path = os.environ.get(f"{ENV_PREFIX}DB_PATH")
        self._database_path = Path(db_path) if db_path else self._base_dir / DATABASE_FILENAME
        self._database_url_override = os.environ.get(f"{ENV_PREFIX}DB_URL") or None

        self._db_timeout = _int_from_env(f"{ENV_PREFIX}DB_TIMEOUT", 30, minimum=1)
        self._amount_decimals = _int_from_env(
            f"{ENV_PREFIX}AMOUNT_DECIMALS", AMOUNT_DISPLAY_DECIMALS, minimum=0, maximum=10
        )
        self._currency = self._read_currency()
        self._log_level = self._read_log_level()

    def _get_project_data_dir(self) -> Path:
        """Path to the project's data/ directory (development)."""
        project_root = Path(__file__).parent.parent.parent
        return project_root / "data"

    def _get_user_documents_dir(self) -> Path:
        """Path to the app folder inside the user's Documents directory (production)."""
        return Path.home() / "Documents" / APP_DIR_NAME

    def _read_currency(self) -> str:
        name = f"{ENV_PREFIX}CURRENCY"
        raw = os.environ.get(name)
        if not raw:
            return DEFAULT_CURRENCY
        code = raw.strip().upper()
        if code not in CURRENCY_FORMATS:
            logger.warning(f"Invalid {name} value '{raw}', using default {DEFAULT_CURRENCY}")
            return DEFAULT_CURRENCY
        return code

    def _read_log_level(self) -> str:
        name = f"{ENV_PREFIX}LOG_LEVEL"
        raw = os.environ.get(name)
        if not raw:
            return "INFO"
        level = raw.strip().upper()
        if level not in VALID_LOG_LEVELS:
            logger.warning(f"Invalid {name} value '{raw}', using default INFO")
            return "INFO"
        return level

    def ensure_directories(self) -> None:
        """Create the database directory if it doesn't exist."""
        if self._database_url_override is None:
            self._database_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def app_name(self) -> str:
        return APP_NAME

    @property
    def app_version(self) -> str:
        return APP_VERSION

    @property
    def database_version(self) -> str:
        return DATABASE_VERSION

    @property
    def database_path(self) -> Path:
        """Full path to the database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy database URL.

        Returns:
            RECIPE_ARR_DB_URL if set, else a sqlite URL for database_path
        """
        if self._database_url_override:
            return self._database_url_override
        db_path_str = str(self._database_path).replace("\\", "/")
        return f"sqlite:///{db_path_str}"

    @property
    def db_timeout(self) -> int:
        return self._db_timeout

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def amount_decimals(self) -> int:
        return self._amount_decimals

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def database_exists(self) -> bool:
        """True if the database file exists."""
        return self._database_path.exists()

    def __repr__(self) -> str:
        return f"Config(environment='{self.environment}', database_url='{self.database_url}')"


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    RECIPE_ARR_ENV or defaults to production. Ignored if
                    singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get(f"{ENV_PREFIX}ENV", "production")
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None


def configure_logging(config: Optional[Config] = None) -> None:
    """Configure root logging from the configured level."""
    config = config or get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
