"""
Utilities Module

Configuration management, logging and optional Sentry error reporting.
"""

from covalent_api.utils.config import Config, get_config, reset_config
from covalent_api.utils.logger import get_logger
from covalent_api.utils.sentry import (
    init_sentry,
    capture_exception,
    capture_message,
    add_breadcrumb,
    close_sentry
)

__all__ = [
    'Config',
    'get_config',
    'reset_config',
    'get_logger',
    'init_sentry',
    'capture_exception',
    'capture_message',
    'add_breadcrumb',
    'close_sentry'
]
