"""
Logging Configuration
Sets up the package logger for the picker.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    namespace: str = "triadpicker"
) -> logging.Logger:
    """
    Configures the logger of the picker package.

    Library modules only ever call ``logging.getLogger(__name__)``; the
    embedding application decides whether (and where) records are printed.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        namespace: Logger to configure; records still propagate to the root.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(namespace)
    logger.setLevel(level)

    # Calling again (e.g. a second picker window) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized at level {logging.getLevelName(level)}.")
    return logger
