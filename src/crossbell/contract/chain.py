"""Chain client - the boundary between the SDK and an Ethereum node.

The transaction pipeline only needs six operations from the chain, captured
by :class:`ChainClient`. :class:`Web3ChainClient` implements them on top of
``web3.AsyncWeb3`` with a local ``eth_account`` signer; tests substitute an
in-memory implementation.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Protocol, Tuple

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3
from web3.contract import AsyncContract
from web3.exceptions import (
    ContractLogicError,
    TimeExhausted,
    TransactionNotFound,
    Web3Exception,
)
from web3.logs import DISCARD

from crossbell.constants import (
    ABI_SELECTOR_LENGTH,
    ABI_WORD_LENGTH,
    RECEIPT_POLL_INTERVAL_SECONDS,
    RECEIPT_TIMEOUT_SECONDS,
    REVERT_SELECTOR,
)
from crossbell.contract.config import NetworkConfig
from crossbell.contract.events import EventRecord, TransactionReceipt
from crossbell.contract.models import ContractCall
from crossbell.errors import (
    RevertedError,
    SubmissionRejectedError,
    TransactionError,
    TransactionTimeoutError,
    ValidationError,
)
from crossbell.utils.logging import get_logger

__all__ = [
    "ChainClient",
    "Web3ChainClient",
    "CONTRACT_ABIS",
    "load_abi",
    "decode_revert_reason",
    "decode_receipt_events",
]

_logger = get_logger(__name__)

# ABI file directory
ABI_DIR = Path(__file__).parent / "abis"

# Contract key (NetworkConfig attribute) -> ABI file
CONTRACT_ABIS: Dict[str, str] = {
    "entry": "entry.json",
    "periphery": "periphery.json",
    "tips": "tips.json",
    "mira_token": "mira_token.json",
}

# ABI loading cache
_ABI_CACHE: Dict[str, list] = {}


def load_abi(name: str) -> list:
    """Load ABI JSON with caching.

    Args:
        name: ABI filename (e.g., "entry.json")

    Returns:
        Parsed ABI list
    """
    if name not in _ABI_CACHE:
        _ABI_CACHE[name] = json.loads((ABI_DIR / name).read_text())
    return _ABI_CACHE[name]


def decode_revert_reason(raw: str) -> Optional[str]:
    """Decode a Solidity ``Error(string)`` revert payload.

    Args:
        raw: Hex-encoded error data string

    Returns:
        Decoded revert reason string, or None if the payload is not an
        ``Error(string)`` or cannot be decoded
    """
    if raw.startswith(REVERT_SELECTOR) and len(raw) >= 10:
        try:
            data = bytes.fromhex(raw[2:])
            # 4 bytes selector + 32 bytes offset + 32 bytes length
            if len(data) >= ABI_SELECTOR_LENGTH + ABI_WORD_LENGTH + ABI_WORD_LENGTH:
                offset = ABI_SELECTOR_LENGTH + ABI_WORD_LENGTH
                strlen = int.from_bytes(data[offset : offset + ABI_WORD_LENGTH], "big")
                reason_start = offset + ABI_WORD_LENGTH
                reason_bytes = data[reason_start : reason_start + strlen]
                return reason_bytes.decode(errors="ignore")
        except ValueError:
            return None
    return None


def _revert_reason(error: ContractLogicError) -> Optional[str]:
    data = getattr(error, "data", None)
    if isinstance(data, str):
        decoded = decode_revert_reason(data)
        if decoded:
            return decoded
    return getattr(error, "message", None) or str(error) or None


def _rpc_error_message(error: Exception) -> str:
    if error.args and isinstance(error.args[0], dict):
        return error.args[0].get("message") or str(error.args[0])
    return str(error)


def decode_receipt_events(
    raw_receipt: Any,
    contracts: Iterable[Any],
) -> Tuple[EventRecord, ...]:
    """Decode every log of a raw receipt that one of ``contracts`` emitted.

    Logs are attributed by emitting address, then decoded against that
    contract's ABI. Logs from unknown contracts are skipped.

    Returns:
        Decoded events sorted by log index
    """
    decoded: Dict[int, EventRecord] = {}
    for contract in contracts:
        contract_address = str(contract.address).lower()
        for item in contract.abi:
            if item.get("type") != "event":
                continue
            event = getattr(contract.events, item["name"])()
            for log in event.process_receipt(raw_receipt, errors=DISCARD):
                if str(log["address"]).lower() != contract_address:
                    continue
                decoded[log["logIndex"]] = EventRecord(
                    name=log["event"],
                    args=dict(log["args"]),
                    log_index=log["logIndex"],
                    address=log["address"],
                )
    return tuple(decoded[index] for index in sorted(decoded))


class ChainClient(Protocol):
    """Operations the transaction pipeline needs from a chain connection."""

    async def submit(self, call: ContractCall) -> str:
        """Sign and broadcast ``call``; return the transaction hash."""
        ...

    async def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Block until ``tx_hash`` is included and return its receipt."""
        ...

    async def get_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Return the receipt of an already-included transaction."""
        ...

    async def call(self, call: ContractCall) -> Any:
        """Evaluate a view function without sending a transaction."""
        ...

    async def current_network_id(self) -> int:
        """Chain id the signer is currently connected to."""
        ...

    async def switch_network(self, chain_id: int) -> bool:
        """Ask the signer to move to ``chain_id``; True if it accepted."""
        ...


class Web3ChainClient:
    """Chain client on ``web3.AsyncWeb3`` with a local private-key signer.

    Example:
        >>> chain = Web3ChainClient(get_network_config(Network.CROSSBELL), private_key="0x...")
        >>> tx_hash = await chain.submit(ContractCall("entry", "lockNote", (42, 1)))
        >>> receipt = await chain.wait_for_receipt(tx_hash)
    """

    def __init__(
        self,
        config: NetworkConfig,
        private_key: Optional[str] = None,
        web3: Optional[AsyncWeb3] = None,
        tx_overrides: Optional[dict] = None,
        receipt_timeout: float = RECEIPT_TIMEOUT_SECONDS,
        poll_interval: float = RECEIPT_POLL_INTERVAL_SECONDS,
    ):
        self.config = config
        self.w3 = web3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(config.rpc_url))
        self.account: Optional[LocalAccount] = None
        if private_key is not None:
            # Sanitize private key errors to prevent key leakage in stack traces
            try:
                self.account = Account.from_key(private_key)
            except Exception:
                raise ValidationError("Invalid private key format (key not shown for security)") from None
        self.tx_overrides = tx_overrides or {}
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval
        self.contracts: Dict[str, AsyncContract] = {
            name: self.w3.eth.contract(
                address=Web3.to_checksum_address(getattr(config, name)),
                abi=load_abi(abi_file),
            )
            for name, abi_file in CONTRACT_ABIS.items()
        }

    @property
    def address(self) -> Optional[str]:
        return self.account.address if self.account else None

    def _function(self, call: ContractCall):
        try:
            contract = self.contracts[call.contract]
        except KeyError:
            raise ValidationError(f"Unknown contract {call.contract!r}", field="contract") from None
        return getattr(contract.functions, call.function)(*call.args)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    async def submit(self, call: ContractCall) -> str:
        if self.account is None:
            raise SubmissionRejectedError("no signer configured", function=call.function)

        func = self._function(call)
        try:
            nonce = await self.w3.eth.get_transaction_count(self.account.address, "pending")
            tx = await func.build_transaction(
                {
                    "from": self.account.address,
                    "nonce": nonce,
                    "chainId": self.config.chain_id,
                    "value": call.value,
                    **self.tx_overrides,
                }
            )
        except ContractLogicError as e:
            raise RevertedError(_revert_reason(e), function=call.function) from e
        except (ValueError, Web3Exception) as e:
            raise SubmissionRejectedError(_rpc_error_message(e), function=call.function) from e

        signed = self.account.sign_transaction(tx)
        try:
            tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        except ContractLogicError as e:
            raise RevertedError(_revert_reason(e), function=call.function) from e
        except (ValueError, Web3Exception) as e:
            raise SubmissionRejectedError(_rpc_error_message(e), function=call.function) from e

        return Web3.to_hex(tx_hash)

    async def wait_for_receipt(self, tx_hash: str) -> TransactionReceipt:
        try:
            raw = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.receipt_timeout,
                poll_latency=self.poll_interval,
            )
        except TimeExhausted as e:
            raise TransactionTimeoutError(tx_hash, self.receipt_timeout) from e

        receipt = self._to_receipt(raw)
        if receipt.status != 1:
            raise RevertedError(tx_hash=receipt.transaction_hash)
        return receipt

    async def get_receipt(self, tx_hash: str) -> TransactionReceipt:
        try:
            raw = await self.w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound as e:
            raise TransactionError("Transaction receipt not found", tx_hash=tx_hash) from e
        return self._to_receipt(raw)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def call(self, call: ContractCall) -> Any:
        try:
            return await self._function(call).call()
        except ContractLogicError as e:
            raise RevertedError(_revert_reason(e), function=call.function) from e

    async def current_network_id(self) -> int:
        return await self.w3.eth.chain_id

    async def switch_network(self, chain_id: int) -> bool:
        """Request ``wallet_switchEthereumChain`` from the provider.

        Plain RPC nodes do not implement it, in which case this returns
        False and the executor reports the wrong network.
        """
        try:
            response = await self.w3.provider.make_request(
                "wallet_switchEthereumChain", [{"chainId": hex(chain_id)}]
            )
        except (ValueError, Web3Exception) as e:
            _logger.warning(
                "Network switch rejected",
                extra={"chain_id": chain_id, "error": _rpc_error_message(e)},
            )
            return False

        if isinstance(response, dict) and response.get("error"):
            _logger.warning(
                "Network switch rejected",
                extra={"chain_id": chain_id, "error": response["error"]},
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _to_receipt(self, raw: Any) -> TransactionReceipt:
        block_hash = raw.get("blockHash")
        return TransactionReceipt(
            transaction_hash=Web3.to_hex(raw["transactionHash"]),
            block_number=raw["blockNumber"],
            block_hash=Web3.to_hex(block_hash) if block_hash is not None else None,
            status=raw.get("status", 1),
            events=decode_receipt_events(raw, self.contracts.values()),
        )
