"""Configuration and Logging Utilities.

Modules:
    config: YAML configuration builder and access functions
    logger: Rich component logger
    log_filter: Logger suppression context managers
"""

from . import config, log_filter, logger

__all__ = ["config", "logger", "log_filter"]
