import logging


def get_logger(name=__name__, level=None):
    """Return a module logger; handlers are owned by ``setup_logging`` on the package logger."""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger

__all__ = ["get_logger"]
