import logging
import logging.config
import os

import yaml

from figma2theme.core.config import get_setting

settings = get_setting()

_app_logger: logging.Logger | None = None

# Load the config file
logging_file = os.path.join(os.path.dirname(__file__), "logging_config.yaml")
with open(logging_file, "rt", encoding="utf-8") as f:
    config = yaml.safe_load(f.read())


def _initialize_logging(level: str) -> None:
    logging.config.dictConfig(config)

    app_logger = logging.getLogger(settings.APP_NAME)
    for handler in app_logger.handlers + logging.root.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(level.upper())


def get_logging(level: str | None = None) -> logging.Logger:
    """Get or initialize the application logger"""
    global _app_logger

    if _app_logger and level is None:
        return _app_logger

    _initialize_logging(level or settings.LOG_LEVEL)

    _app_logger = logging.getLogger(settings.APP_NAME)
    _app_logger.setLevel(logging.DEBUG)

    return _app_logger
