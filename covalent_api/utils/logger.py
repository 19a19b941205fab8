"""
logger.py

This module provides centralized logging functionality for the client. It ensures
that all modules have consistent and structured logging. Logs go to the console and,
when LOG_DIR is configured, to a file for long-term storage.
"""

import logging
import os
from covalent_api.utils.config import get_config


def get_logger(name: str) -> logging.Logger:
    """
    Configures and returns a logger instance with the specified name.

    :param name: The name of the logger, typically the module name.
    :return: Configured logger instance.
    """
    config = get_config()
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Ensure no duplicate handlers are added
    if not logger.handlers:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if config.LOG_DIR:
            if not os.path.exists(config.LOG_DIR):
                os.makedirs(config.LOG_DIR)

            file_handler = logging.FileHandler(os.path.join(config.LOG_DIR, "covalent_api.log"))
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
