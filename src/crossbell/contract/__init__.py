"""
Contract Module - typed access to the Crossbell contracts.

Writes run through a TransactionExecutor guarded by a network check, their
results are pulled out of receipt events by name, and every operation
returns a Result envelope.
"""

from crossbell.contract.chain import (
    CONTRACT_ABIS,
    ChainClient,
    Web3ChainClient,
    decode_receipt_events,
    decode_revert_reason,
    load_abi,
)
from crossbell.contract.client import CrossbellClient
from crossbell.contract.codec import (
    Numberish,
    decode_link_type,
    encode_link_type,
    to_bytes,
    to_int,
)
from crossbell.contract.config import NETWORKS, Network, NetworkConfig, get_network_config
from crossbell.contract.events import EventRecord, TransactionReceipt, match_event
from crossbell.contract.executor import TransactionExecutor
from crossbell.contract.models import (
    AddressTarget,
    AnyUriTarget,
    CharacterTarget,
    ContractCall,
    CreateThenLinkResult,
    Erc721Target,
    LinklistTarget,
    LinkTarget,
    MintNoteResult,
    Note,
    Character,
    NoteTarget,
    PostNoteResult,
    Result,
    SetUriResult,
)
from crossbell.contract.network import with_network_guard
from crossbell.contract.subcontracts import (
    CharacterOperations,
    LinkOperations,
    NoteOperations,
    TargetBinding,
    TipsOperations,
    bind_target,
)

__all__ = [
    # Client
    "CrossbellClient",
    "ChainClient",
    "Web3ChainClient",
    "TransactionExecutor",
    "with_network_guard",
    # Config
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    # Codec
    "Numberish",
    "encode_link_type",
    "decode_link_type",
    "to_int",
    "to_bytes",
    # Events
    "EventRecord",
    "TransactionReceipt",
    "match_event",
    "decode_receipt_events",
    "decode_revert_reason",
    "load_abi",
    "CONTRACT_ABIS",
    # Models
    "Result",
    "ContractCall",
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
    # Operations
    "LinkOperations",
    "NoteOperations",
    "CharacterOperations",
    "TipsOperations",
    "TargetBinding",
    "bind_target",
]
