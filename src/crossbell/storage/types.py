"""
Storage Types

Configuration and metadata models for the IPFS content layer. Metadata
documents are the off-chain JSON that on-chain ``*Uri`` fields point to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# IPFS Configuration
# ============================================================================

class IpfsConfig(BaseModel):
    """
    Configuration for the IPFS relay store and gateway fetches.

    Example:
        ```python
        config = IpfsConfig(gateway_url="https://ipfs.io/ipfs/")
        ```
    """

    model_config = ConfigDict(frozen=True)

    relay_url: str = Field(
        default="https://ipfs-relay.crossbell.io",
        description="IPFS relay accepting JSON uploads at <relay_url>/json",
    )
    gateway_url: str = Field(
        default="https://ipfs.crossbell.io/ipfs/",
        description="HTTP gateway that ipfs:// URIs are rewritten to",
    )
    timeout: int = Field(
        default=30000,
        ge=1000,
        description="Request timeout in milliseconds",
    )
    max_download_size: int = Field(
        default=5242880,  # 5MB
        ge=1,
        description="Maximum metadata document size in bytes",
    )


# ============================================================================
# Metadata Documents
# ============================================================================

MetadataKind = Literal["note", "character", "linklist"]
"""Semantic type tag stored in the ``type`` field of every document."""


class BaseMetadata(BaseModel):
    """Fields shared by every metadata document. Unknown keys are preserved."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = Field(
        default=None,
        description="Semantic type tag, filled in on publish when absent",
    )


class NoteAttachment(BaseModel):
    """A file or link attached to a note."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    address: Optional[str] = None
    mime_type: Optional[str] = None
    content: Optional[str] = None
    size_in_bytes: Optional[int] = None
    alt: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class NoteMetadata(BaseMetadata):
    """Content of a note."""

    title: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    tags: Optional[List[str]] = None
    sources: Optional[List[str]] = None
    external_urls: Optional[List[str]] = None
    attachments: Optional[List[NoteAttachment]] = None
    date_published: Optional[str] = None
    authors: Optional[List[str]] = None


class CharacterMetadata(BaseMetadata):
    """Profile of a character."""

    name: Optional[str] = None
    bio: Optional[str] = None
    avatars: Optional[List[str]] = None
    banners: Optional[List[Dict[str, Any]]] = None
    websites: Optional[List[str]] = None
    connected_accounts: Optional[List[str]] = None


class LinklistMetadata(BaseMetadata):
    """Description attached to a linklist."""

    name: Optional[str] = None
    description: Optional[str] = None


METADATA_MODELS: Dict[str, type] = {
    "note": NoteMetadata,
    "character": CharacterMetadata,
    "linklist": LinklistMetadata,
}

Metadata = Union[BaseMetadata, Mapping[str, Any]]
"""A structured document: a metadata model or a plain mapping."""

MetadataOrUri = Union[str, Metadata]
"""Either a content URI (``""`` meaning no content) or a document to publish."""


# ============================================================================
# Results
# ============================================================================

@dataclass(frozen=True)
class ResolvedContent:
    """
    Outcome of resolving a metadata-or-URI value.

    ``uri`` is empty only for the "no content" sentinel; ``metadata`` is
    ``None`` when the caller did not ask for the document to be fetched.
    """

    uri: str
    metadata: Optional[Metadata] = None
