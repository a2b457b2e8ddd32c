"""
Crossbell SDK utilities.

Logging, retry policy and input validation shared by the contract and
storage layers.
"""

from crossbell.utils.logging import configure_logging, get_logger, set_level
from crossbell.utils.retry import RetryConfig, calculate_delay, retry_async
from crossbell.utils.validation import (
    validate_address,
    validate_addresses,
    validate_same_length,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    # Retry
    "RetryConfig",
    "calculate_delay",
    "retry_async",
    # Validation
    "validate_address",
    "validate_addresses",
    "validate_same_length",
]
