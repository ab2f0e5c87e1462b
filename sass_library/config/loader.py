"""Configuration loading for sassd.

This module handles loading configuration from YAML files
and environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: SassSettings objects
- Side Effects: Creates default config file if missing
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from .settings import SassSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# sassd configuration
# Environment variables (SASSD_*) take precedence over this file

# Sass sources and compiled output
# src: "./styles"
# dest: "./public"
# prefix: "/static"

# Compile behavior
force: false
response: false
debug: false
output_style: "nested"
single_flight: false
# include_paths:
#   - "./node_modules"

# Server settings
host: "127.0.0.1"
port: 8421
log_level: "info"
workers: 1
mount_static: true
"""


def get_config_path() -> Path:
    """Get path to config file.

    Returns:
        Path to sassd.yaml in config directory

    Example:
        >>> config_path = get_config_path()
        >>> assert config_path.name == "sassd.yaml"
    """
    return get_config_dir() / "sassd.yaml"


def create_default_config() -> None:
    """Create default config file if it doesn't exist."""
    config_path = get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return

    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")


def load_config(config_path: Path | None = None) -> SassSettings:
    """Load sassd configuration from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables should be prefixed with SASSD_ (e.g., SASSD_SRC).

    Args:
        config_path: Optional config file path (default: sassd.yaml in config dir)

    Returns:
        Validated settings

    Raises:
        ValueError: If the config file is not valid YAML
    """
    if config_path is None:
        config_path = get_config_path()
        if not config_path.exists():
            create_default_config()

    yaml_settings = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_settings = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        logger.debug(f"Loaded config from {config_path}")

    if not isinstance(yaml_settings, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")

    # Only pass YAML values that don't have corresponding env vars
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"SASSD_{key.upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    settings = SassSettings(**filtered_yaml)

    logger.info(
        f"sassd configuration loaded: src={settings.src}, dest={settings.dest_dir}, "
        f"host={settings.host}, port={settings.port}"
    )

    return settings
