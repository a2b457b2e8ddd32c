"""
Contract-related exceptions.

Covers input validation for contract calls, event extraction from receipts,
and the submit/confirm lifecycle of a transaction.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from crossbell.errors.base import CrossbellError, ValidationError


# ============================================================================
# Validation
# ============================================================================


class ValueTooLongError(ValidationError):
    """
    Raised when a value does not fit its fixed-width on-chain field.

    Example:
        >>> raise ValueTooLongError("a" * 40, max_bytes=32, field="link_type")
    """

    code = "VALUE_TOO_LONG"

    def __init__(
        self,
        value: str,
        *,
        max_bytes: int,
        field: Optional[str] = None,
    ) -> None:
        size = len(value.encode("utf-8"))
        super().__init__(
            f"{field or 'value'} is {size} bytes, exceeding the {max_bytes}-byte limit",
            field=field,
            details={"size_bytes": size, "max_bytes": max_bytes},
        )
        self.value = value
        self.max_bytes = max_bytes


class LengthMismatchError(ValidationError):
    """Raised when two parallel sequences must have the same length but don't."""

    code = "LENGTH_MISMATCH"

    def __init__(
        self,
        expected: int,
        actual: int,
        *,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"{field or 'sequence'} has {actual} items, expected {expected}",
            field=field,
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class InvalidAddressError(ValidationError):
    """
    Raised when an Ethereum address is malformed.

    Example:
        >>> raise InvalidAddressError("0x123", field="to_address")
    """

    code = "INVALID_ADDRESS"

    def __init__(
        self,
        address: str,
        *,
        field: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        message = f"Invalid address for {field or 'address'}: {address!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, field=field, details={"address": address})
        self.address = address
        self.reason = reason


# ============================================================================
# Event matching
# ============================================================================


class EventMatchError(CrossbellError):
    """Base class for failures extracting an event from a receipt."""

    code = "EVENT_MATCH_ERROR"

    def __init__(
        self,
        message: str,
        *,
        event_name: str,
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["event_name"] = event_name
        super().__init__(message, tx_hash=tx_hash, details=details)
        self.event_name = event_name


class EventNotFoundError(EventMatchError):
    """Raised when a receipt holds no event with the requested name."""

    code = "EVENT_NOT_FOUND"

    def __init__(self, event_name: str, *, tx_hash: Optional[str] = None) -> None:
        super().__init__(
            f"{event_name} event not found",
            event_name=event_name,
            tx_hash=tx_hash,
        )


class AmbiguousEventError(EventMatchError):
    """
    Raised when a receipt holds several events with the requested name but
    the caller asked for exactly one.
    """

    code = "AMBIGUOUS_EVENT"

    def __init__(
        self,
        event_name: str,
        count: int,
        *,
        tx_hash: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Expected one {event_name} event, found {count}",
            event_name=event_name,
            tx_hash=tx_hash,
            details={"count": count},
        )
        self.count = count


# ============================================================================
# Transaction lifecycle
# ============================================================================


class TransactionError(CrossbellError):
    """Base class for submit/confirm failures."""

    code = "TRANSACTION_ERROR"


class WrongNetworkError(TransactionError):
    """
    Raised when the signer is on another chain and switching was refused or
    is not supported.
    """

    code = "WRONG_NETWORK"

    def __init__(self, expected_chain_id: int, actual_chain_id: int) -> None:
        super().__init__(
            f"Connected to chain {actual_chain_id}, expected {expected_chain_id}",
            details={
                "expected_chain_id": expected_chain_id,
                "actual_chain_id": actual_chain_id,
            },
        )
        self.expected_chain_id = expected_chain_id
        self.actual_chain_id = actual_chain_id


class SubmissionRejectedError(TransactionError):
    """Raised when the signer or provider refuses to accept a transaction."""

    code = "SUBMISSION_REJECTED"

    def __init__(self, reason: str, *, function: Optional[str] = None) -> None:
        details: Dict[str, Any] = {"reason": reason}
        if function:
            details["function"] = function
        super().__init__(f"Submission rejected: {reason}", details=details)
        self.reason = reason


class RevertedError(TransactionError):
    """
    Raised when a call reverts, either during simulation or on-chain.

    Attributes:
        reason: Decoded revert reason, when the node returned one.
    """

    code = "REVERTED"

    def __init__(
        self,
        reason: Optional[str] = None,
        *,
        tx_hash: Optional[str] = None,
        function: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if reason:
            details["reason"] = reason
        if function:
            details["function"] = function
        super().__init__(
            f"Transaction reverted: {reason}" if reason else "Transaction reverted",
            tx_hash=tx_hash,
            details=details,
        )
        self.reason = reason


class TransactionTimeoutError(TransactionError):
    """Raised when confirmation is not observed within the configured wait."""

    code = "TRANSACTION_TIMEOUT"

    def __init__(self, tx_hash: str, timeout: float) -> None:
        super().__init__(
            f"Transaction not confirmed after {timeout}s",
            tx_hash=tx_hash,
            details={"timeout_seconds": timeout},
        )
        self.timeout = timeout
