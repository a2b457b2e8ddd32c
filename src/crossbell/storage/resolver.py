"""
Content resolver - metadata documents <-> content-addressed URIs.

On-chain ``*Uri`` fields are opaque strings pointing at off-chain JSON. This
module publishes structured metadata to IPFS and turns URIs back into
metadata, rewriting ``ipfs://`` through an HTTP gateway.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional, Type, TypeVar, overload

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from crossbell.constants import CID_V0_PATTERN, CID_V1_PATTERN, HTTP_SCHEMES, IPFS_SCHEME
from crossbell.errors import (
    InvalidUriError,
    PublishFailedError,
    ResolveFailedError,
    StorageError,
)
from crossbell.storage.ipfs_client import ContentStore, IpfsRelayStore
from crossbell.storage.types import (
    METADATA_MODELS,
    IpfsConfig,
    Metadata,
    MetadataKind,
    MetadataOrUri,
    ResolvedContent,
)
from crossbell.utils.logging import get_logger
from crossbell.utils.retry import RetryConfig, retry_async

M = TypeVar("M", bound=BaseModel)

_logger = get_logger(__name__)

_CID_V0 = re.compile(CID_V0_PATTERN)
_CID_V1 = re.compile(CID_V1_PATTERN)

DEFAULT_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    base_delay_ms=500,
    retryable_errors=(StorageError, httpx.TransportError),
)


def is_valid_cid(cid: str) -> bool:
    """Check for a CIDv0 (base58 ``Qm...``) or base32 CIDv1 (``b...``)."""
    return bool(_CID_V0.match(cid) or _CID_V1.match(cid))


def to_document(metadata: Metadata) -> Dict[str, Any]:
    """Convert a metadata model or mapping into a plain JSON-ready dict."""
    if isinstance(metadata, BaseModel):
        return metadata.model_dump(mode="json", exclude_none=True)
    return dict(metadata)


def canonical_json(metadata: Metadata) -> bytes:
    """Serialize metadata with sorted keys and minimal whitespace."""
    return json.dumps(
        to_document(metadata),
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
    ).encode("utf-8")


def tag_metadata(metadata: Metadata, kind: str) -> Metadata:
    """
    Return ``metadata`` with its ``type`` set to ``kind`` when absent.

    The caller's object is never mutated; a tagged copy is returned instead.
    """
    if isinstance(metadata, BaseModel):
        if getattr(metadata, "type", None):
            return metadata
        return metadata.model_copy(update={"type": kind})
    if metadata.get("type"):
        return metadata
    return {**metadata, "type": kind}


class ContentResolver:
    """
    Bidirectional mapping between metadata documents and content URIs.

    Uploads and fetches are idempotent, so both are retried according to the
    injected :class:`RetryConfig`.

    Example:
        ```python
        resolver = ContentResolver()

        uri = await resolver.publish(NoteMetadata(content="gm"))
        doc = await resolver.resolve(uri, model=NoteMetadata)

        resolved = await resolver.resolve_or_passthrough("ipfs://Qm...", "note")
        print(resolved.uri, resolved.metadata)  # metadata is None: not fetched
        ```
    """

    def __init__(
        self,
        store: Optional[ContentStore] = None,
        config: Optional[IpfsConfig] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        self._config = config or IpfsConfig()
        self._store = store or IpfsRelayStore(self._config)
        self._retry_config = retry_config or DEFAULT_RETRY_CONFIG

    @property
    def gateway_url(self) -> str:
        """Get configured gateway URL."""
        return self._config.gateway_url

    @property
    def retry_config(self) -> RetryConfig:
        return self._retry_config

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    async def publish(self, metadata: Metadata) -> str:
        """
        Upload a metadata document and return its ``ipfs://`` URI.

        Args:
            metadata: Metadata model or mapping

        Returns:
            Content-addressed URI

        Raises:
            PublishFailedError: If no well-formed ``ipfs://`` URI was
                obtained within the retry budget
        """
        content = canonical_json(metadata)

        async def do_publish() -> str:
            response = await self._store.upload(content)
            url = response.get("url") if isinstance(response, dict) else None
            if not isinstance(url, str) or not url.startswith(IPFS_SCHEME) or url == IPFS_SCHEME:
                raise PublishFailedError(f"store returned no ipfs url (got {url!r})")
            return url

        try:
            uri = await retry_async(do_publish, self._retry_config, operation="ipfs.publish")
        except PublishFailedError as e:
            e.details["attempts"] = self._retry_config.max_attempts
            raise
        except (StorageError, httpx.HTTPError) as e:
            raise PublishFailedError(
                str(e),
                attempts=self._retry_config.max_attempts,
            ) from e

        _logger.info("Published metadata", extra={"uri": uri, "size": len(content)})
        return uri

    # ------------------------------------------------------------------
    # Resolve
    # ------------------------------------------------------------------

    def to_gateway_url(self, uri: str) -> str:
        """
        Rewrite a content URI into a fetchable HTTP URL.

        ``ipfs://<cid>/<path>`` becomes ``<gateway>/<cid>/<path>``; http(s)
        URLs pass through unchanged.

        Raises:
            InvalidUriError: For a malformed ``ipfs://`` URI or an
                unsupported scheme
        """
        if uri.startswith(IPFS_SCHEME):
            path = uri[len(IPFS_SCHEME):]
            # ipfs://ipfs/<cid> is a common legacy spelling
            if path.startswith("ipfs/"):
                path = path[len("ipfs/"):]
            cid = path.split("/", 1)[0]
            if not cid:
                raise InvalidUriError(uri, reason="missing CID")
            if not is_valid_cid(cid):
                raise InvalidUriError(uri, reason=f"malformed CID {cid!r}")
            return f"{self._config.gateway_url.rstrip('/')}/{path}"

        if uri.startswith(HTTP_SCHEMES):
            return uri

        raise InvalidUriError(uri, reason="unsupported scheme")

    @overload
    async def resolve(self, uri: str) -> Dict[str, Any]: ...

    @overload
    async def resolve(self, uri: str, model: Type[M]) -> M: ...

    async def resolve(self, uri: str, model: Optional[Type[BaseModel]] = None) -> Any:
        """
        Fetch and parse the JSON document behind a content URI.

        Args:
            uri: ``ipfs://`` or http(s) URI
            model: Optional pydantic model to validate the document into

        Returns:
            Parsed document (dict, or ``model`` instance)

        Raises:
            InvalidUriError: If the URI is malformed
            ResolveFailedError: If the document could not be fetched or
                parsed within the retry budget
        """
        url = self.to_gateway_url(uri)

        async def do_fetch() -> Any:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout / 1000),
                follow_redirects=True,
            ) as client:
                response = await client.get(url)

            if response.status_code != 200:
                raise ResolveFailedError(uri, reason=f"HTTP {response.status_code}")

            if len(response.content) > self._config.max_download_size:
                raise ResolveFailedError(
                    uri,
                    reason=f"document exceeds {self._config.max_download_size} bytes",
                )

            try:
                return json.loads(response.text)
            except ValueError as e:
                raise ResolveFailedError(
                    uri,
                    reason="response is not valid JSON",
                    response=response.text,
                ) from e

        try:
            document = await retry_async(do_fetch, self._retry_config, operation="ipfs.resolve")
        except httpx.HTTPError as e:
            raise ResolveFailedError(uri, reason=str(e)) from e

        _logger.debug("Resolved metadata", extra={"uri": uri, "url": url})

        if model is not None:
            try:
                return model.model_validate(document)
            except ModelValidationError as e:
                raise ResolveFailedError(uri, reason=f"document does not match {model.__name__}") from e
        return document

    async def resolve_or_passthrough(
        self,
        metadata_or_uri: MetadataOrUri,
        kind: MetadataKind = "note",
        *,
        fetch_if_uri: bool = False,
    ) -> ResolvedContent:
        """
        Normalize a metadata-or-URI argument into a URI (and maybe metadata).

        - ``""`` means "no content": returns an empty URI without touching
          the network.
        - A string is a URI. It is fetched only when ``fetch_if_uri`` is set.
        - Anything else is a document: tagged with ``kind`` if it has no
          ``type`` and published.

        Args:
            metadata_or_uri: URI string or metadata document
            kind: Semantic type used for tagging and for parsing fetched documents
            fetch_if_uri: Whether to fetch the document behind a URI

        Returns:
            ResolvedContent with the URI and, when known, the metadata
        """
        if isinstance(metadata_or_uri, str):
            if metadata_or_uri == "":
                return ResolvedContent(uri="", metadata=None)

            metadata = None
            if fetch_if_uri:
                metadata = await self.resolve(metadata_or_uri, METADATA_MODELS[kind])
            return ResolvedContent(uri=metadata_or_uri, metadata=metadata)

        tagged = tag_metadata(metadata_or_uri, kind)
        uri = await self.publish(tagged)
        return ResolvedContent(uri=uri, metadata=tagged)
