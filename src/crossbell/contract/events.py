"""Receipts, decoded events and event matching.

A contract call can emit more events than the one the caller is interested
in (nested calls, batch loops). Results are extracted by exact event name,
and by default exactly one match is required so that ABI drift or an
unexpected side effect fails loudly instead of yielding the wrong id.
"""

from dataclasses import dataclass, field
from typing import Any, List, Literal, Mapping, Optional, Sequence, Tuple, Union, overload

from crossbell.errors import AmbiguousEventError, EventNotFoundError

__all__ = ["EventRecord", "TransactionReceipt", "match_event"]


@dataclass(frozen=True)
class EventRecord:
    """One decoded event from a receipt.

    Attributes:
        name: Event name as declared in the ABI (e.g. ``LinkCharacter``)
        args: Argument values keyed by name, in ABI order
        log_index: Position of the log within the block
        address: Emitting contract
    """

    name: str
    args: Mapping[str, Any] = field(default_factory=dict)
    log_index: int = 0
    address: Optional[str] = None

    def __getitem__(self, key: str) -> Any:
        return self.args[key]


@dataclass(frozen=True)
class TransactionReceipt:
    """Confirmed transaction with its decoded events in emission order."""

    transaction_hash: str
    block_number: int
    events: Tuple[EventRecord, ...] = ()
    block_hash: Optional[str] = None
    status: int = 1

    @property
    def event_names(self) -> List[str]:
        return [event.name for event in self.events]


@overload
def match_event(
    events: Sequence[EventRecord],
    name: str,
    *,
    allow_multiple: Literal[False] = ...,
    tx_hash: Optional[str] = ...,
) -> EventRecord: ...


@overload
def match_event(
    events: Sequence[EventRecord],
    name: str,
    *,
    allow_multiple: Literal[True],
    tx_hash: Optional[str] = ...,
) -> List[EventRecord]: ...


def match_event(
    events: Sequence[EventRecord],
    name: str,
    *,
    allow_multiple: bool = False,
    tx_hash: Optional[str] = None,
) -> Union[EventRecord, List[EventRecord]]:
    """Pick the event(s) called ``name`` out of a receipt's events.

    Args:
        events: Decoded events, in emission order
        name: Exact event name
        allow_multiple: Return every match (in order) instead of demanding one
        tx_hash: Transaction hash, only used to enrich errors

    Returns:
        The single matching event, or the list of matches when
        ``allow_multiple`` is set

    Raises:
        EventNotFoundError: If nothing matches
        AmbiguousEventError: If several events match and ``allow_multiple``
            is not set
    """
    matches = [event for event in events if event.name == name]

    if not matches:
        raise EventNotFoundError(name, tx_hash=tx_hash)

    if allow_multiple:
        return matches

    if len(matches) > 1:
        raise AmbiguousEventError(name, len(matches), tx_hash=tx_hash)

    return matches[0]
