"""
Utilities package
Common helpers and logging
"""

from .logger import (
    get_logger,
    get_request_logger,
    configure_from_settings,
    setup_logging,
    shutdown_logging,
    log_performance,
    get_current_log_file,
    RequestLogAdapter
)
from .helpers import (
    normalize_whitespace,
    generate_request_id,
    truncate_string
)

__all__ = [
    # Logger exports
    'get_logger',
    'get_request_logger',
    'configure_from_settings',
    'setup_logging',
    'shutdown_logging',
    'log_performance',
    'get_current_log_file',
    'RequestLogAdapter',

    # Helper exports
    'normalize_whitespace',
    'generate_request_id',
    'truncate_string',
]
