"""
Logging setup for Lambda handlers.

AWS Lambda installs its own handler on the root logger; locally there is
none, so a console handler is added.
"""

import logging
import os


def configure_logging() -> logging.Logger:
    """
    Configure the root logger from LOG_LEVEL (default INFO).

    Returns:
        logging.Logger: The root logger
    """
    level_name = os.environ.get('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)

    # Add console handler for local testing (AWS Lambda provides handlers automatically)
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s - %(message)s')
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
