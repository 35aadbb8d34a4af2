"""
Logging Configuration
Attaches handlers to the 'emfieldtorch' logger for scripts and notebooks.
Library modules only create child loggers; nothing is printed until an
application calls :func:`setup_logging`.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route emfieldtorch log records to stdout and, optionally, a file.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Logging level, e.g. logging.DEBUG to see field-line stop reasons.
        log_file: Optional path; the file is overwritten.

    Returns:
        The configured 'emfieldtorch' logger.
    """
    logger = logging.getLogger("emfieldtorch")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
