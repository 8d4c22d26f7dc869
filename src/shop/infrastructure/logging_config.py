"""Application logging via loguru.

- Console sink: human-readable and coloured, for live monitoring.
- File sink (optional): serialized JSON with rotation, for later analysis.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure application logging.

    Args:
        log_level: Minimum level for the console sink (DEBUG, INFO, WARNING, ERROR).
        log_file: JSON log file; no file sink when None.
        rotation_size: Maximum size of the file before rotation (e.g. "10 MB").
        retention_count: Number of rotated files to keep.
    """
    logger.remove()
    logger.configure(extra={"component": "shop"})

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format="{message}",
            serialize=True,
            rotation=rotation_size,
            retention=retention_count,
            compression="zip",
            enqueue=True,
        )

    logger.debug("Logging configured", log_file=str(log_file))
