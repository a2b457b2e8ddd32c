"""
IPFS relay store.

Uploads JSON documents through the Crossbell IPFS relay, which pins them
and answers with the ``ipfs://`` URL of the pinned content.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol

import httpx

from crossbell.errors import StorageError
from crossbell.storage.types import IpfsConfig
from crossbell.utils.logging import get_logger

_logger = get_logger(__name__)


class ContentStore(Protocol):
    """Anything that can pin bytes and answer with ``{"url": ...}``."""

    async def upload(self, content: bytes) -> Dict[str, Any]:
        ...


class IpfsRelayStore:
    """
    Content store backed by the Crossbell IPFS relay.

    Each call performs exactly one HTTP request; retrying is the caller's
    decision (see :class:`crossbell.storage.resolver.ContentResolver`).

    Example:
        ```python
        store = IpfsRelayStore(IpfsConfig())
        response = await store.upload(b'{"type":"note","content":"gm"}')
        print(response["url"])  # ipfs://Qm...
        ```
    """

    def __init__(self, config: IpfsConfig) -> None:
        self._config = config

    @property
    def upload_url(self) -> str:
        """Endpoint JSON documents are posted to."""
        return f"{self._config.relay_url.rstrip('/')}/json"

    async def upload(self, content: bytes) -> Dict[str, Any]:
        """
        Upload one JSON document.

        Args:
            content: Serialized JSON bytes

        Returns:
            The relay's JSON response, normally ``{"url": "ipfs://...", ...}``

        Raises:
            StorageError: If the relay answers with a non-2xx status or a
                non-JSON body
            httpx.TransportError: On connection-level failures
        """
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout / 1000)
        ) as client:
            response = await client.post(
                self.upload_url,
                content=content,
                headers={"Content-Type": "application/json"},
            )

            if response.status_code not in (200, 201):
                raise StorageError(
                    f"Upload failed: HTTP {response.status_code}",
                    details={"endpoint": self.upload_url},
                )

            try:
                body = response.json()
            except ValueError as e:
                raise StorageError(
                    "Relay returned a non-JSON response",
                    details={"endpoint": self.upload_url},
                ) from e

        _logger.debug(
            "Uploaded document to IPFS relay",
            extra={"size": len(content), "url": body.get("url") if isinstance(body, dict) else None},
        )
        return body
