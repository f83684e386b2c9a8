# official_account/utils/logger.py

"""
Logger Configuration Module

Purpose:
Initializes and configures a centralized logger for the SDK.
Provides a consistent logging format and level across the API clients.

Dependencies:
- logging (standard Python library)

Expected Input: None
Expected Output: A configured logging.Logger instance.
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL = logging.INFO  # Default level, the command line can lower it

def setup_logger(name: str = 'official_account', level: int = LOG_LEVEL) -> logging.Logger:
    """
    Configures and returns a logger instance.

    Args:
        name (str): The name of the logger, typically the package name.
        level (int): The logging level (e.g., logging.INFO, logging.DEBUG).

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)

    # Prevent adding multiple handlers if called multiple times
    if not logger.handlers:
        logger.setLevel(level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger

def set_log_level(level: int, name: str = 'official_account') -> None:
    """Changes the level of an already configured logger and its handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)

# Initialize a default logger instance for easy import
log = setup_logger()
