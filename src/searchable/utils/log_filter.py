"""Logging suppression utilities.

Context managers for temporarily quieting loggers, used when a command wants
clean output while the registry is being configured.

Examples:
    Suppress only INFO-level messages::

        >>> with suppress_logger_level('setup_registry', logging.WARNING):
        ...     registry.configure(Post, configure_post)

    Quiet several loggers at once::

        >>> with quiet_logger(['setup_registry', 'CONFIG']):
        ...     load_application_setups()
"""

import logging
from contextlib import contextmanager


@contextmanager
def suppress_logger_level(logger_name: str | list[str], level: int):
    """Context manager to temporarily raise logger level to suppress messages.

    Args:
        logger_name: Name of logger(s) to modify. Can be a single string
            or list of strings for multiple loggers.
        level: The temporary log level to set. Messages below this level
            will be suppressed.

    Yields:
        Dictionary mapping logger names to their original levels
    """
    logger_names = [logger_name] if isinstance(logger_name, str) else logger_name

    loggers = [logging.getLogger(name) for name in logger_names]
    original_levels = {name: logger.level for name, logger in zip(logger_names, loggers)}

    for logger in loggers:
        logger.setLevel(level)

    try:
        yield original_levels
    finally:
        for name, logger in zip(logger_names, loggers):
            logger.setLevel(original_levels[name])


@contextmanager
def quiet_logger(logger_name: str | list[str]):
    """Context manager to temporarily suppress INFO-level messages from logger(s).

    Equivalent to ``suppress_logger_level(logger_name, logging.WARNING)``:
    WARNING, ERROR and CRITICAL still come through.
    """
    with suppress_logger_level(logger_name, logging.WARNING) as levels:
        yield levels


__all__ = [
    "suppress_logger_level",
    "quiet_logger",
]
