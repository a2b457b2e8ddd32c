"""
Storage Module - off-chain content for on-chain URIs.

Notes, characters and linklists keep only a URI on chain; the document it
points to lives on IPFS.

Example:
    ```python
    from crossbell.storage import ContentResolver, NoteMetadata

    resolver = ContentResolver()
    uri = await resolver.publish(NoteMetadata(title="hello", content="gm"))
    note = await resolver.resolve(uri, model=NoteMetadata)
    ```
"""

from __future__ import annotations

# ============================================================================
# Clients
# ============================================================================

from crossbell.storage.ipfs_client import ContentStore, IpfsRelayStore
from crossbell.storage.resolver import (
    DEFAULT_RETRY_CONFIG,
    ContentResolver,
    canonical_json,
    is_valid_cid,
    tag_metadata,
    to_document,
)

# ============================================================================
# Types
# ============================================================================

from crossbell.storage.types import (
    METADATA_MODELS,
    BaseMetadata,
    CharacterMetadata,
    IpfsConfig,
    LinklistMetadata,
    Metadata,
    MetadataKind,
    MetadataOrUri,
    NoteAttachment,
    NoteMetadata,
    ResolvedContent,
)

__all__ = [
    # Clients
    "ContentStore",
    "IpfsRelayStore",
    "ContentResolver",
    "DEFAULT_RETRY_CONFIG",
    # Helpers
    "canonical_json",
    "is_valid_cid",
    "tag_metadata",
    "to_document",
    # Types
    "IpfsConfig",
    "BaseMetadata",
    "NoteMetadata",
    "NoteAttachment",
    "CharacterMetadata",
    "LinklistMetadata",
    "METADATA_MODELS",
    "Metadata",
    "MetadataKind",
    "MetadataOrUri",
    "ResolvedContent",
]
