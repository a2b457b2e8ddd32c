"""
Root of the Crossbell SDK exception hierarchy.

Each error class declares its machine-readable ``code`` once, as a class
attribute; instances add a message, the transaction hash when one exists,
and free-form ``details``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CrossbellError(Exception):
    """
    Base exception for all Crossbell SDK errors.

    Attributes:
        code: Machine-readable error code, fixed per class
        message: Human-readable description
        tx_hash: Hash of the transaction involved, if any
        details: Extra context (field names, limits, revert reasons)

    Example:
        >>> try:
        ...     await client.link.link(1, CharacterTarget(2), "follow")
        ... except CrossbellError as e:
        ...     log.warning("link failed: %s", e.to_dict())
    """

    code = "CROSSBELL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.tx_hash = tx_hash
        self.details: Dict[str, Any] = dict(details) if details else {}

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}"
        if self.tx_hash:
            # enough of the hash to find it on the explorer
            text += f" (tx {self.tx_hash[:10]}...{self.tx_hash[-4:]})"
        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, tx_hash={self.tx_hash!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form; ``tx_hash`` is omitted when there is none."""
        payload: Dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }
        if self.tx_hash:
            payload["tx_hash"] = self.tx_hash
        return payload


class ValidationError(CrossbellError):
    """
    Raised when caller input is rejected before anything is sent.

    Validation always happens before any network call, so a ValidationError
    guarantees that nothing was submitted.
    """

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.field = field
        if field:
            self.details["field"] = field
