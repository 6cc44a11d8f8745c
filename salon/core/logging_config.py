"""
Logging setup for the salon backend.

``setup_logging`` attaches a single console handler to the root logger.
Modules log through ``logging.getLogger(__name__)``.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Calling it again (tests, repeated ``create_app`` calls) keeps the
    handlers that are already attached and only adjusts the level.
    """
    logger = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)
    if logger.handlers:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
