"""Where sassd keeps its configuration.

Compiled stylesheets live in the configured ``dest`` directory, never here;
the home directory only holds ``config/sassd.yaml``.

Contract:
- Inputs: Environment variables (SASSD_HOME, SASSD_CONFIG_DIR)
- Outputs: Resolved Path objects
- Side Effects: Creates the config directory if it doesn't exist
"""

import os
from pathlib import Path

DEFAULT_HOME = ".sassd"


def _resolve(value: str) -> Path:
    return Path(value).expanduser().resolve()


def get_home_dir() -> Path:
    """Get SASSD_HOME (default: ./.sassd), with ~ expanded."""
    return _resolve(os.environ.get("SASSD_HOME", DEFAULT_HOME))


def get_config_dir() -> Path:
    """Get the directory holding sassd.yaml.

    SASSD_CONFIG_DIR replaces $SASSD_HOME/config when set, so a project can
    keep its sassd.yaml next to its stylesheets.
    """
    override = os.environ.get("SASSD_CONFIG_DIR")
    config_dir = _resolve(override) if override else get_home_dir() / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
