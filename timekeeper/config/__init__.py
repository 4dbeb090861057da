"""
Configuration module for the time-accounting engine.
"""
from .logging_config import LoggingConfig, configure_logging, reset_logging
from .settings import (
    TimekeeperConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'LoggingConfig',
    'TimekeeperConfig',
    'configure_logging',
    'get_config',
    'load_config',
    'reload_config',
    'reset_logging'
]
