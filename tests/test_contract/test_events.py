"""
Tests for event matching on receipts.

Tests cover:
- Single match
- No match
- Several matches, strict and lenient
- Error context
"""

import pytest

from crossbell.contract.events import EventRecord, TransactionReceipt, match_event
from crossbell.errors import AmbiguousEventError, EventMatchError, EventNotFoundError

TX_HASH = "0x" + "ab" * 32


def link_event(linklist_id: int, log_index: int = 0) -> EventRecord:
    return EventRecord(
        "LinkCharacter",
        {"fromCharacterId": 1, "toCharacterId": 2, "linklistId": linklist_id},
        log_index=log_index,
    )


class TestMatchEvent:
    """Tests for match_event."""

    def test_single_match(self) -> None:
        """Test exactly one event of the name is returned."""
        events = [
            EventRecord("Transfer", {"tokenId": 1}, log_index=0),
            link_event(42, log_index=1),
        ]

        event = match_event(events, "LinkCharacter")

        assert event["linklistId"] == 42
        assert event.log_index == 1

    def test_not_found(self) -> None:
        """Test zero matches raise EventNotFoundError."""
        events = [EventRecord("Transfer", {"tokenId": 1})]

        with pytest.raises(EventNotFoundError) as exc_info:
            match_event(events, "LinkCharacter", tx_hash=TX_HASH)

        assert exc_info.value.event_name == "LinkCharacter"
        assert exc_info.value.tx_hash == TX_HASH
        assert exc_info.value.code == "EVENT_NOT_FOUND"

    def test_empty_events(self) -> None:
        """Test an empty receipt raises EventNotFoundError."""
        with pytest.raises(EventNotFoundError):
            match_event([], "PostNote")

    def test_two_matches_strict(self) -> None:
        """Test two matches without allow_multiple raise AmbiguousEventError."""
        events = [link_event(7, 0), link_event(9, 1)]

        with pytest.raises(AmbiguousEventError) as exc_info:
            match_event(events, "LinkCharacter")

        assert exc_info.value.count == 2
        assert exc_info.value.details["count"] == 2

    def test_two_matches_lenient(self) -> None:
        """Test allow_multiple returns every match in emission order."""
        events = [link_event(7, 0), EventRecord("CharacterCreated", {}, log_index=1), link_event(9, 2)]

        matches = match_event(events, "LinkCharacter", allow_multiple=True)

        assert [m["linklistId"] for m in matches] == [7, 9]

    def test_lenient_single_match_is_a_list(self) -> None:
        """Test allow_multiple always returns a list."""
        matches = match_event([link_event(5)], "LinkCharacter", allow_multiple=True)
        assert isinstance(matches, list)
        assert len(matches) == 1

    def test_lenient_still_requires_a_match(self) -> None:
        """Test allow_multiple does not relax the not-found check."""
        with pytest.raises(EventNotFoundError):
            match_event([], "LinkCharacter", allow_multiple=True)

    def test_name_match_is_exact(self) -> None:
        """Test names are compared exactly, not by prefix or case."""
        events = [EventRecord("LinkCharacterInBatch", {}), EventRecord("linkcharacter", {})]

        with pytest.raises(EventNotFoundError):
            match_event(events, "LinkCharacter")

    def test_errors_share_a_base(self) -> None:
        """Test both failure kinds can be caught as EventMatchError."""
        with pytest.raises(EventMatchError):
            match_event([], "LinkCharacter")
        with pytest.raises(EventMatchError):
            match_event([link_event(1), link_event(2)], "LinkCharacter")


class TestTransactionReceipt:
    """Tests for TransactionReceipt helpers."""

    def test_event_names_in_order(self) -> None:
        receipt = TransactionReceipt(
            transaction_hash=TX_HASH,
            block_number=1,
            events=(EventRecord("CharacterCreated", {}), link_event(5, 1)),
        )
        assert receipt.event_names == ["CharacterCreated", "LinkCharacter"]

    def test_defaults(self) -> None:
        receipt = TransactionReceipt(transaction_hash=TX_HASH, block_number=1)
        assert receipt.events == ()
        assert receipt.status == 1
