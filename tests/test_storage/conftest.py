"""
Shared fixtures for storage module tests.
"""

import json
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from crossbell.storage import IpfsConfig, NoteMetadata


# =============================================================================
# Test Constants
# =============================================================================

VALID_CID_V0 = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"  # 46 chars
VALID_CID_V1 = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"  # 59 chars

GATEWAY = "https://gateway.test/ipfs/"
RELAY = "https://relay.test"


# =============================================================================
# Helper Functions for Mocking httpx
# =============================================================================


def create_mock_response(
    status_code: int = 200,
    body: Optional[Any] = None,
    content: Optional[bytes] = None,
) -> MagicMock:
    """Create a mock httpx Response from a JSON body or raw bytes."""
    if content is None:
        content = json.dumps(body).encode("utf-8") if body is not None else b""
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode("utf-8", errors="replace")
    if body is not None:
        response.json = MagicMock(return_value=body)
    else:
        response.json = MagicMock(side_effect=ValueError("not json"))
    return response


def create_mock_client(**methods: Any) -> AsyncMock:
    """Create an async-context-manager httpx.AsyncClient mock."""
    client = AsyncMock()
    for name, mock in methods.items():
        setattr(client, name, mock)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    return client


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def ipfs_config() -> IpfsConfig:
    return IpfsConfig(relay_url=RELAY, gateway_url=GATEWAY, timeout=5000)


@pytest.fixture
def note_document() -> Dict[str, Any]:
    return {
        "type": "note",
        "title": "gm",
        "content": "hello crossbell",
        "tags": ["post"],
    }


@pytest.fixture
def note_metadata() -> NoteMetadata:
    return NoteMetadata(title="gm", content="hello crossbell", tags=["post"])
