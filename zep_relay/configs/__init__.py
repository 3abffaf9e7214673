"""
Zep Relay Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from zep_relay.configs.logging import get_logger, setup_logging

# Paths
from zep_relay.configs.paths import get_data_path

# Constants
from zep_relay.configs.constants import TIMEOUTS, get_timeout

# YAML config
from zep_relay.configs.yaml_config import get_config_path, load_yaml_config

# Settings
from zep_relay.configs.settings import RelaySettings, load_settings

# Note: services.py is NOT imported here to avoid circular imports.
# Services should be imported directly: from zep_relay.configs.services import ...

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Paths
    "get_data_path",
    # Constants
    "TIMEOUTS",
    "get_timeout",
    # YAML config
    "get_config_path",
    "load_yaml_config",
    # Settings
    "RelaySettings",
    "load_settings",
]
