"""
Storage-related exceptions.

Raised while publishing metadata to IPFS or resolving content URIs
back into metadata.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from crossbell.errors.base import CrossbellError


class StorageError(CrossbellError):
    """
    Base exception for content store operations.

    Example:
        >>> raise StorageError("Failed to reach the IPFS relay")
    """

    code = "STORAGE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        uri: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if uri:
            details["uri"] = uri
        super().__init__(message, details=details)
        self.uri = uri


class PublishFailedError(StorageError):
    """
    Raised when metadata could not be turned into an ``ipfs://`` URI.

    Example:
        >>> raise PublishFailedError("relay returned no url", attempts=3)
    """

    code = "PUBLISH_FAILED"

    def __init__(
        self,
        reason: str,
        *,
        attempts: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["reason"] = reason
        if attempts is not None:
            details["attempts"] = attempts
        super().__init__(f"Upload to IPFS failed: {reason}", details=details)
        self.reason = reason


class ResolveFailedError(StorageError):
    """Raised when a content URI could not be fetched or parsed as JSON."""

    code = "RESOLVE_FAILED"

    def __init__(
        self,
        uri: str,
        *,
        reason: Optional[str] = None,
        response: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if reason:
            details["reason"] = reason
        if response is not None:
            details["response"] = response[:200]

        message = f"Failed to fetch metadata from uri: {uri}"
        if reason:
            message += f" ({reason})"

        super().__init__(message, uri=uri, details=details)
        self.reason = reason


class InvalidUriError(StorageError):
    """
    Raised when a content URI is malformed or uses an unsupported scheme.

    Example:
        >>> raise InvalidUriError("ipfs://", reason="missing CID")
    """

    code = "INVALID_URI"

    def __init__(self, uri: str, *, reason: Optional[str] = None) -> None:
        message = f"Invalid content URI: {uri!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, uri=uri, details={"reason": reason} if reason else None)
        self.reason = reason
