"""
Crossbell SDK exception hierarchy.

Every error raised by the SDK derives from CrossbellError:

- ValidationError: rejected input, nothing was sent
  (ValueTooLongError, LengthMismatchError, InvalidAddressError)
- EventMatchError: receipt did not hold the expected event
  (EventNotFoundError, AmbiguousEventError)
- TransactionError: submit/confirm failures
  (WrongNetworkError, SubmissionRejectedError, RevertedError,
  TransactionTimeoutError)
- StorageError: IPFS publish/resolve failures
  (PublishFailedError, ResolveFailedError, InvalidUriError)
"""

from crossbell.errors.base import CrossbellError, ValidationError
from crossbell.errors.contract import (
    AmbiguousEventError,
    EventMatchError,
    EventNotFoundError,
    InvalidAddressError,
    LengthMismatchError,
    RevertedError,
    SubmissionRejectedError,
    TransactionError,
    TransactionTimeoutError,
    ValueTooLongError,
    WrongNetworkError,
)
from crossbell.errors.storage import (
    InvalidUriError,
    PublishFailedError,
    ResolveFailedError,
    StorageError,
)

__all__ = [
    "CrossbellError",
    # Validation
    "ValidationError",
    "ValueTooLongError",
    "LengthMismatchError",
    "InvalidAddressError",
    # Events
    "EventMatchError",
    "EventNotFoundError",
    "AmbiguousEventError",
    # Transactions
    "TransactionError",
    "WrongNetworkError",
    "SubmissionRejectedError",
    "RevertedError",
    "TransactionTimeoutError",
    # Storage
    "StorageError",
    "PublishFailedError",
    "ResolveFailedError",
    "InvalidUriError",
]
