"""
Logging setup shared by the GUI and the CLI.

Everything logs under the ``screenconfigurator`` namespace; the CLI maps
``--log-level``/``--log-file`` onto ``setup_logging``.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the package logger and return it.

    Args:
        level: Threshold for the logger and every handler.
        log_file: If given, the log is also written there (overwritten per run).
    """
    logger = logging.getLogger("screenconfigurator")
    logger.setLevel(level)

    # Each CLI invocation reconfigures from scratch
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging initialized (level={logging.getLevelName(level)}, file={log_file}).")
    return logger
