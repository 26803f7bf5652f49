"""
Console logging for the admin console and its scripts.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are attached here, once, by whoever owns the process (the CLI scripts
or an embedding application).
"""

import logging
import sys

from quota_admin.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger with a single stderr handler."""
    level_name = (level or get_settings().log_level).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
