"""Entry point for running sassd.

``python -m sassd`` serves the directories named in sassd.yaml (or SASSD_*
variables). The app is built by uvicorn's factory hook so every worker reads
configuration itself.
"""

import logging
import sys

import uvicorn

from sass_library.config import get_config_path
from sass_library.config import load_config

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the sassd daemon.

    Exits with status 1 when no src directory is configured, before any
    worker starts.
    """
    try:
        config = load_config()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if not config.src:
        logger.error(f"No src directory configured; set src in {get_config_path()} or SASSD_SRC")
        sys.exit(1)

    logger.info(f"Compiling {config.src} -> {config.output_dir} on {config.host}:{config.port}")

    try:
        uvicorn.run(
            "sassd.main:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
            workers=config.workers,
        )
    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")
        sys.exit(0)


if __name__ == "__main__":
    main()
