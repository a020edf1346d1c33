"""YAML configuration file loading with Pydantic validation."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from sysdive.errors import SysdiveError

from .models import ReportConfig


class ConfigError(SysdiveError):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")
    return data


def load_report_config(path: Path | None = None) -> ReportConfig:
    """Load and validate the report configuration.

    Args:
        path: YAML file to read, or None for the defaults.

    Returns:
        Validated ReportConfig.

    Raises:
        ConfigError: If validation fails.
    """
    if path is None:
        return ReportConfig()

    data = load_yaml(path)
    try:
        return ReportConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e
