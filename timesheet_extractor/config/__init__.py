"""
Configuration module for the timesheet extractor.
"""
from .logging_config import LoggingConfig, configure_logging, reset_logging
from .settings import ExtractorConfig, get_config, load_config, reload_config

__all__ = [
    'ExtractorConfig',
    'LoggingConfig',
    'configure_logging',
    'get_config',
    'load_config',
    'reload_config',
    'reset_logging',
]
