"""
Logging helpers shared by the server, CLI and verifier.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(logger: logging.Logger, log_level: int) -> logging.Logger:
    """Attach a single stream handler to ``logger`` at ``log_level``.

    Calling it twice on the same logger only updates the level.
    """
    logger.setLevel(log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)
    return logger


def get_logger(name: str, log_level: int | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if log_level is not None:
        setup_logger(logger, log_level)
    return logger
