"""
Crossbell Python SDK - characters, links, notes and tips on Crossbell.

Quick Start:
    >>> from crossbell import CrossbellClient, CharacterTarget
    >>> import asyncio
    >>>
    >>> async def main():
    ...     client = CrossbellClient.from_private_key("0x...")
    ...     followed = await client.link.link(1, CharacterTarget(2), "follow")
    ...     print(f"Linklist: {followed.data} ({followed.transaction_hash})")
    ...     posted = await client.note.post(1, {"title": "gm", "content": "hello"})
    ...     print(f"Note: {posted.data.note_id}")
    ...
    >>> asyncio.run(main())

Modules:
- `contract`: CrossbellClient, transaction executor, link/note/character/tips operations
- `storage`: IPFS content resolver and metadata models
- `errors`: Exception hierarchy for SDK errors
- `utils`: Logging, retry and validation helpers
"""

from crossbell.version import __version__, __version_info__

# Client
from crossbell.contract import (
    ChainClient,
    CrossbellClient,
    TransactionExecutor,
    Web3ChainClient,
)

# Config
from crossbell.contract import NETWORKS, Network, NetworkConfig, get_network_config

# Models
from crossbell.contract import (
    AddressTarget,
    AnyUriTarget,
    CharacterTarget,
    ContractCall,
    CreateThenLinkResult,
    Erc721Target,
    EventRecord,
    LinklistTarget,
    LinkTarget,
    MintNoteResult,
    Note,
    Character,
    NoteTarget,
    PostNoteResult,
    Result,
    SetUriResult,
    TransactionReceipt,
)

# Codec and events
from crossbell.contract import decode_link_type, encode_link_type, match_event

# Storage
from crossbell.storage import (
    CharacterMetadata,
    ContentResolver,
    IpfsConfig,
    IpfsRelayStore,
    LinklistMetadata,
    NoteMetadata,
    ResolvedContent,
)

# Errors
from crossbell.errors import (
    AmbiguousEventError,
    CrossbellError,
    EventNotFoundError,
    InvalidAddressError,
    InvalidUriError,
    LengthMismatchError,
    PublishFailedError,
    ResolveFailedError,
    RevertedError,
    StorageError,
    SubmissionRejectedError,
    TransactionError,
    TransactionTimeoutError,
    ValidationError,
    ValueTooLongError,
    WrongNetworkError,
)

# Utilities
from crossbell.utils import RetryConfig, configure_logging, get_logger

__all__ = [
    "__version__",
    "__version_info__",
    # Client
    "CrossbellClient",
    "ChainClient",
    "Web3ChainClient",
    "TransactionExecutor",
    # Config
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    # Models
    "Result",
    "ContractCall",
    "EventRecord",
    "TransactionReceipt",
    "LinkTarget",
    "CharacterTarget",
    "AddressTarget",
    "AnyUriTarget",
    "Erc721Target",
    "NoteTarget",
    "LinklistTarget",
    "CreateThenLinkResult",
    "PostNoteResult",
    "MintNoteResult",
    "SetUriResult",
    "Note",
    "Character",
    # Codec and events
    "encode_link_type",
    "decode_link_type",
    "match_event",
    # Storage
    "ContentResolver",
    "IpfsRelayStore",
    "IpfsConfig",
    "NoteMetadata",
    "CharacterMetadata",
    "LinklistMetadata",
    "ResolvedContent",
    # Errors
    "CrossbellError",
    "ValidationError",
    "ValueTooLongError",
    "LengthMismatchError",
    "InvalidAddressError",
    "EventNotFoundError",
    "AmbiguousEventError",
    "TransactionError",
    "WrongNetworkError",
    "SubmissionRejectedError",
    "RevertedError",
    "TransactionTimeoutError",
    "StorageError",
    "PublishFailedError",
    "ResolveFailedError",
    "InvalidUriError",
    # Utilities
    "RetryConfig",
    "configure_logging",
    "get_logger",
]
