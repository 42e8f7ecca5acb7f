#!/usr/bin/env python3
"""
Configuration Management for the Home Ledger

Handles environment-based configuration with a JSON project document as a
fallback for the data directory. Supports multiple environments (development,
test, production).
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PROJECT_CONFIG_FILENAME = "project_configuration.json"


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class DisplayConfig:
    """Table rendering settings handed to the formatting layer."""

    column_padding: int = 2
    amount_decimals: int = 2
    currency_symbol: str = ""
    concept_separator: str = " / "


@dataclass
class Config:
    """
    Main configuration class for the ledger.

    Loads configuration from environment variables, falling back to the
    ``base_path`` entry of the JSON project configuration for the data
    directory.
    """

    environment: Environment
    data_dir: Path
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("LEDGER_ENV", "development"))

        if env == Environment.TEST:
            default_dir = Path(tempfile.gettempdir()) / "test_homeledger"
        else:
            default_dir = _data_dir_from_project_file() or Path("./data")

        data_dir = Path(os.getenv("LEDGER_DATA_DIR", str(default_dir))).expanduser().resolve()

        display = DisplayConfig(
            column_padding=int(os.getenv("LEDGER_COLUMN_PADDING", "2")),
            amount_decimals=int(os.getenv("LEDGER_AMOUNT_DECIMALS", "2")),
            currency_symbol=os.getenv("LEDGER_CURRENCY_SYMBOL", ""),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            display=display,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.display.column_padding < 0:
            errors.append("Column padding must be non-negative")
        if not 0 <= self.display.amount_decimals <= 8:
            errors.append("Amount decimals must be between 0 and 8")
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary for display."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                result[field_name] = dict(field_value.__dict__)
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _data_dir_from_project_file() -> Path | None:
    """Read ``base_path`` from the JSON project configuration, if present."""
    config_file = Path(os.getenv("LEDGER_PROJECT_CONFIG", PROJECT_CONFIG_FILENAME))
    if not config_file.exists():
        return None

    with open(config_file, encoding="utf-8") as f:
        data = json.load(f)

    base_path = data.get("base_path") if isinstance(data, dict) else None
    if not base_path:
        raise ValueError(f"'base_path' missing from project configuration: {config_file}")
    return Path(base_path)


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir
