"""
Runtime configuration for the Pricing Tracker.

The environment (``production``, ``development`` or ``test``) decides where
the SQLite file lives:

- production: ``~/Documents/PricingTracker/pricing_tracker.db``
- development: ``<project>/data/pricing_tracker.db``
- test: an in-memory database

``PRICING_TRACKER_ENV`` picks the environment and ``PRICING_TRACKER_DB_URL``
replaces the URL outright.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .constants import APP_NAME, APP_VERSION, DATABASE_FILENAME

ENV_VARIABLE = "PRICING_TRACKER_ENV"
DB_URL_VARIABLE = "PRICING_TRACKER_DB_URL"
VALID_ENVIRONMENTS = ("production", "development", "test")
MEMORY_URL = "sqlite:///:memory:"

logger = logging.getLogger(__name__)


def _documents_dir() -> Path:
    return Path(os.path.expanduser("~")) / "Documents"


class Config:
    """Where the database lives for one environment."""

    app_name = APP_NAME
    app_version = APP_VERSION

    def __init__(self, environment: str = "production", database_url: Optional[str] = None):
        """
        Args:
            environment: 'production', 'development' or 'test'
            database_url: SQLAlchemy URL that overrides the computed one
                (falls back to PRICING_TRACKER_DB_URL)

        Raises:
            ValueError: If the environment is not one of VALID_ENVIRONMENTS
        """
        if environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"Unknown environment '{environment}'. "
                f"Expected one of: {', '.join(VALID_ENVIRONMENTS)}"
            )

        self.environment = environment
        self._url_override = database_url or os.environ.get(DB_URL_VARIABLE)

        if environment == "development":
            data_dir = Path(__file__).resolve().parents[2] / "data"
        else:
            data_dir = _documents_dir() / "PricingTracker"
        self._database_path = data_dir / DATABASE_FILENAME

    @property
    def database_path(self) -> Path:
        """Location of the SQLite file (unused for in-memory or overridden URLs)."""
        return self._database_path

    @property
    def database_url(self) -> str:
        if self._url_override:
            return self._url_override
        if self.environment == "test":
            return MEMORY_URL
        return "sqlite:///" + self._database_path.as_posix()

    @property
    def uses_file_database(self) -> bool:
        url = self.database_url
        return url.startswith("sqlite:///") and ":memory:" not in url

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def ensure_directories(self) -> None:
        """Create the folder holding the database file, if one is used."""
        if self.uses_file_database:
            self._database_path.parent.mkdir(parents=True, exist_ok=True)

    def database_exists(self) -> bool:
        return self._database_path.exists()

    def __repr__(self) -> str:
        return f"Config(environment='{self.environment}', database_url='{self.database_url}')"


_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Return the shared Config, creating it on first call.

    The first call fixes the environment: ``environment`` if given, else
    PRICING_TRACKER_ENV, else production. Later calls asking for a
    different environment get the existing instance and a warning.
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = Config(environment or os.environ.get(ENV_VARIABLE, "production"))
    elif environment is not None and environment != _config_instance.environment:
        logger.warning(
            f"get_config('{environment}') ignored: singleton already exists "
            f"for environment '{_config_instance.environment}'"
        )

    return _config_instance


def reset_config() -> None:
    """Forget the shared Config so the next get_config() builds a new one."""
    global _config_instance
    _config_instance = None


def get_database_url() -> str:
    return get_config().database_url
