"""Logging setup for the command-line entry point."""

import logging

_INITIALIZED = False

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "WARNING") -> None:
    """Install a console handler on the root logger.

    Only the first call has any effect.
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.addHandler(handler)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured at %s", level.upper())
