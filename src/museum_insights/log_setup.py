"""Logging configuration for the analysis pipeline."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    name: str = "museum_insights",
    log_dir: Optional[Union[str, Path]] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up logging with a console handler and, when log_dir is given,
    a timestamped file handler.

    Args:
        name: Logger name (the package logger covers every module)
        log_dir: Directory for log files; console only when None
        level: Console level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(LOG_FORMAT)
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    consoles = [h for h in logger.handlers if isinstance(h, logging.StreamHandler) and h not in file_handlers]

    # Prevent duplicate handlers; repeat calls only retune the console
    if consoles:
        for h in consoles:
            h.setLevel(level)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_dir and not file_handlers:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        file_handler = logging.FileHandler(log_dir / f"{name}_{timestamp}.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
