"""
Zep Relay YAML Configuration

Loading of ~/.zep-relay/config.yaml.
"""

from pathlib import Path

import yaml

from zep_relay.configs.logging import get_logger
from zep_relay.configs.paths import get_data_path
from zep_relay.exceptions import ConfigurationError

logger = get_logger("config")


def get_config_path() -> Path:
    """Get the path to config.yaml."""
    return get_data_path() / "config.yaml"


def load_yaml_config(path: Path | None = None) -> dict:
    """
    Load configuration from config.yaml.

    Args:
        path: Explicit file to read. Defaults to get_config_path().

    Returns:
        Configuration dictionary (empty if file doesn't exist)

    Raises:
        ConfigurationError: File exists but is not a YAML mapping
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return {}

    try:
        content = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Expected a mapping at top level of {config_path}")
    logger.debug(f"Loaded config from {config_path}")
    return content

