"""
Configuration settings for the relational store.

Values are read from environment variables with fallback to defaults so a
deployment can change the URN domain or log level without code changes.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_URN_DOMAIN = "pp"


@dataclass(frozen=True)
class StoreConfig:
    """Configuration for record construction."""

    urn_domain: str = DEFAULT_URN_DOMAIN  # Domain segment used when minting resource URNs
    log_level: str = "WARNING"

    def __post_init__(self):
        if not self.urn_domain or not self.urn_domain.strip():
            raise ValueError("urn_domain cannot be empty")
        if ":" in self.urn_domain:
            raise ValueError(f"urn_domain cannot contain ':', got {self.urn_domain!r}")
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ValueError(f"log_level must be a logging level name such as 'DEBUG', got {self.log_level!r}")

    @classmethod
    def from_environment(cls) -> 'StoreConfig':
        """
        Create configuration from environment variables with fallback to defaults.

        Environment variables:
        - RELATIONAL_STORE_URN_DOMAIN
        - RELATIONAL_STORE_LOG_LEVEL
        """
        return cls(
            urn_domain=os.getenv('RELATIONAL_STORE_URN_DOMAIN', DEFAULT_URN_DOMAIN).strip(),
            log_level=os.getenv('RELATIONAL_STORE_LOG_LEVEL', 'WARNING').upper(),
        )


_config: Optional[StoreConfig] = None


def get_config() -> StoreConfig:
    """Get the process-wide configuration, loading it on first access."""
    global _config
    if _config is None:
        _config = StoreConfig.from_environment()
        logger.debug(f"Loaded store configuration: {_config}")
    return _config


def reset_config() -> None:
    """Drop the cached configuration (useful for testing)."""
    global _config
    _config = None


def configure_logging(level: Optional[str] = None) -> None:
    """
    Apply a log level to the package logger.

    Args:
        level: Level name such as "DEBUG". Defaults to the configured log_level.
    """
    level_name = (level or get_config().log_level).upper()
    logging.getLogger('relational_store').setLevel(level_name)
