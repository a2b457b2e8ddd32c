"""
Shared fixtures for the Crossbell SDK tests.

FakeChainClient stands in for a node plus signer: it records submitted
calls, keeps link state in memory and emits the events the Entry contract
would emit, so operations can be tested end to end without a chain.
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from crossbell.contract import (
    ContractCall,
    CrossbellClient,
    EventRecord,
    TransactionReceipt,
    get_network_config,
    Network,
)
from crossbell.constants import NIL_ADDRESS
from crossbell.errors import StorageError, TransactionError
from crossbell.storage import ContentResolver
from crossbell.utils import RetryConfig


# =============================================================================
# Test Constants
# =============================================================================

CROSSBELL_CHAIN_ID = 3737

VALID_ADDRESS = "0x1234567890123456789012345678901234567890"
OTHER_ADDRESS = "0x9876543210987654321098765432109876543210"
MIXED_CASE_ADDRESS = "0xabcdefABCDEFabcdefABCDEFabcdefABCDEFabcd"

VALID_CID_V0 = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"  # 46 chars
VALID_CID_V1 = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"  # 59 chars

NO_DELAY_RETRY = RetryConfig(
    max_attempts=3,
    base_delay_ms=0,
    jitter=False,
    retryable_errors=(StorageError, httpx.TransportError),
)

NOTE_TUPLE_EMPTY = (
    b"\x00" * 32,
    b"\x00" * 32,
    "",
    "0x0000000000000000000000000000000000000000",
    "0x0000000000000000000000000000000000000000",
    "0x0000000000000000000000000000000000000000",
    False,
    False,
)


# =============================================================================
# Fakes
# =============================================================================


class FakeChainClient:
    """In-memory ChainClient.

    Links are stored per (from character, encoded link type). Every link
    type of a character gets its own linklist id, starting at 5.
    """

    def __init__(self, chain_id: int = CROSSBELL_CHAIN_ID, switch_ok: bool = True):
        self.chain_id = chain_id
        self.switch_ok = switch_ok
        self.submitted: List[ContractCall] = []
        self.switch_requests: List[int] = []
        self.receipt_lookups: List[str] = []
        self.receipts: Dict[str, TransactionReceipt] = {}
        self.links: Dict[Tuple[int, bytes], List[int]] = {}
        self.linklists: Dict[Tuple[int, bytes], int] = {}
        self.linklist_uris: Dict[int, str] = {}
        self.notes: Dict[Tuple[int, int], tuple] = {}
        self.characters: Dict[int, tuple] = {}
        self.scripted: Dict[str, List[EventRecord]] = {}
        self.submit_error: Optional[Exception] = None
        self.hang = False
        self._next_linklist_id = 5
        self._next_character_id = 100
        self._next_note_id = 1

    # ------------------------------------------------------------------
    # Test controls
    # ------------------------------------------------------------------
    def script(self, function: str, events: List[EventRecord]) -> None:
        """Emit ``events`` instead of the default ones for ``function``."""
        self.scripted[function] = events

    # ------------------------------------------------------------------
    # ChainClient
    # ------------------------------------------------------------------
    async def submit(self, call: ContractCall) -> str:
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(call)
        tx_hash = "0x" + format(len(self.submitted), "064x")
        if call.function in self.scripted:
            events = self.scripted[call.function]
        else:
            events = self._apply(call)
        self.receipts[tx_hash] = TransactionReceipt(
            transaction_hash=tx_hash,
            block_number=1000 + len(self.submitted),
            events=tuple(
                EventRecord(e.name, e.args, log_index=i, address=e.address)
                for i, e in enumerate(events)
            ),
        )
        return tx_hash

    async def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        if self.hang:
            await asyncio.Event().wait()
        return self.receipts[tx_hash]

    async def get_receipt(self, tx_hash: str) -> TransactionReceipt:
        self.receipt_lookups.append(tx_hash)
        try:
            return self.receipts[tx_hash]
        except KeyError:
            raise TransactionError("Transaction receipt not found", tx_hash=tx_hash) from None

    async def call(self, call: ContractCall) -> Any:
        if call.function == "getLinkingCharacterIds":
            from_id, link_type = call.args
            return list(self.links.get((from_id, link_type), []))
        if call.function == "getLinklistUri":
            return self.linklist_uris.get(call.args[0], "")
        if call.function == "getNote":
            return self.notes.get(call.args, NOTE_TUPLE_EMPTY)
        if call.function == "getCharacter":
            character_id = call.args[0]
            return self.characters.get(
                character_id,
                (character_id, f"character-{character_id}", "", 0, NIL_ADDRESS, NIL_ADDRESS),
            )
        raise AssertionError(f"unexpected view call {call.function}")

    async def current_network_id(self) -> int:
        return self.chain_id

    async def switch_network(self, chain_id: int) -> bool:
        self.switch_requests.append(chain_id)
        if self.switch_ok:
            self.chain_id = chain_id
        return self.switch_ok

    # ------------------------------------------------------------------
    # Contract behavior
    # ------------------------------------------------------------------
    def _linklist_id(self, from_id: int, link_type: bytes) -> int:
        key = (from_id, link_type)
        if key not in self.linklists:
            self.linklists[key] = self._next_linklist_id
            self._next_linklist_id += 1
        return self.linklists[key]

    def _new_character(self, to: str, handle: str) -> EventRecord:
        character_id = self._next_character_id
        self._next_character_id += 1
        return EventRecord(
            "CharacterCreated",
            {"characterId": character_id, "creator": to, "to": to, "handle": handle, "timestamp": 0},
        )

    def _link_character(self, from_id: int, to_id: int, link_type: bytes) -> EventRecord:
        linked = self.links.setdefault((from_id, link_type), [])
        if to_id not in linked:
            linked.append(to_id)
        return EventRecord(
            "LinkCharacter",
            {
                "account": VALID_ADDRESS,
                "fromCharacterId": from_id,
                "toCharacterId": to_id,
                "linkType": link_type,
                "linklistId": self._linklist_id(from_id, link_type),
            },
        )

    def _apply(self, call: ContractCall) -> List[EventRecord]:
        fn = call.function
        if fn == "linkCharacter":
            from_id, to_id, link_type, _data = call.args[0]
            return [self._link_character(from_id, to_id, link_type)]
        if fn == "unlinkCharacter":
            from_id, to_id, link_type = call.args[0]
            linked = self.links.get((from_id, link_type), [])
            if to_id in linked:
                linked.remove(to_id)
            return []
        if fn in ("linkAddress", "linkAnyUri", "linkERC721", "linkNote", "linkLinklist"):
            struct = call.args[0]
            from_id, link_type = struct[0], struct[-2]
            event_name = "Link" + fn[len("link"):]
            return [
                EventRecord(
                    event_name,
                    {
                        "fromCharacterId": from_id,
                        "linkType": link_type,
                        "linklistId": self._linklist_id(from_id, link_type),
                    },
                )
            ]
        if fn == "linkCharactersInBatch":
            from_id, to_ids, _data, addresses, link_type = call.args[0]
            events = [self._link_character(from_id, to_id, link_type) for to_id in to_ids]
            for address in addresses:
                created = self._new_character(address, address.lower())
                events.append(created)
                events.append(self._link_character(from_id, created["characterId"], link_type))
            return events
        if fn == "createThenLinkCharacter":
            from_id, to, link_type = call.args[0]
            created = self._new_character(to, to.lower())
            return [created, self._link_character(from_id, created["characterId"], link_type)]
        if fn == "createCharacter":
            to, handle = call.args[0][0], call.args[0][1]
            return [self._new_character(to, handle)]
        if fn == "setLinklistUri":
            self.linklist_uris[call.args[0]] = call.args[1]
            return []
        if fn == "postNote":
            character_id, content_uri = call.args[0][0], call.args[0][1]
            note_id = self._next_note_id
            self._next_note_id += 1
            self.notes[(character_id, note_id)] = (
                NOTE_TUPLE_EMPTY[:2] + (content_uri,) + NOTE_TUPLE_EMPTY[3:7] + (call.args[0][6],)
            )
            return [
                EventRecord(
                    "PostNote",
                    {
                        "characterId": character_id,
                        "noteId": note_id,
                        "linkKey": b"\x00" * 32,
                        "linkItemType": b"\x00" * 32,
                        "data": b"",
                    },
                )
            ]
        if fn == "mintNote":
            character_id, note_id, to, _data = call.args[0]
            return [
                EventRecord(
                    "MintNote",
                    {
                        "to": to,
                        "characterId": character_id,
                        "noteId": note_id,
                        "tokenAddress": OTHER_ADDRESS,
                        "tokenId": 1,
                    },
                )
            ]
        return []


class FakeContentStore:
    """ContentStore that remembers uploads and answers with a fixed URI."""

    def __init__(self, url: str = f"ipfs://{VALID_CID_V0}"):
        self.url = url
        self.uploads: List[bytes] = []

    async def upload(self, content: bytes) -> Dict[str, Any]:
        self.uploads.append(content)
        return {"url": self.url, "web2url": f"https://ipfs.crossbell.io/ipfs/{VALID_CID_V0}"}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_chain() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def fake_store() -> FakeContentStore:
    return FakeContentStore()


@pytest.fixture
def resolver(fake_store: FakeContentStore) -> ContentResolver:
    return ContentResolver(store=fake_store, retry_config=NO_DELAY_RETRY)


@pytest.fixture
def client(fake_chain: FakeChainClient, resolver: ContentResolver) -> CrossbellClient:
    return CrossbellClient(
        fake_chain,
        get_network_config(Network.CROSSBELL),
        resolver=resolver,
        receipt_timeout=1,
    )
