"""
Zep Relay Data Paths

Location of the relay's data directory (config file and logs).
"""

import os
from pathlib import Path

DEFAULT_DATA_PATH = Path.home() / ".zep-relay"


def get_data_path() -> Path:
    """Get the relay data directory path.

    Uses ZEP_RELAY_DATA_PATH when set, otherwise ~/.zep-relay.
    """
    data_path = os.environ.get("ZEP_RELAY_DATA_PATH")
    if data_path:
        return Path(data_path).expanduser()
    return DEFAULT_DATA_PATH
