"""
Validation utilities for the Crossbell SDK.

All validation functions raise ValidationError (or subclasses) on failure
and run before anything is sent to the chain or the content store.
"""

from __future__ import annotations

from typing import Iterable, List, Sized

from web3 import Web3

from crossbell.errors import InvalidAddressError, LengthMismatchError


def validate_address(address: str, field_name: str = "address") -> str:
    """
    Validate Ethereum address format.

    Mixed-case addresses must carry a valid EIP-55 checksum.

    Args:
        address: Address to validate
        field_name: Field name for error messages

    Returns:
        Checksummed address

    Raises:
        InvalidAddressError: If address is invalid
    """
    if not address or not isinstance(address, str):
        raise InvalidAddressError(
            "" if not address else str(address),
            field=field_name,
            reason=f"{field_name} must be a non-empty string",
        )

    if not Web3.is_address(address):
        raise InvalidAddressError(
            address,
            field=field_name,
            reason="must be 0x followed by 40 hex characters with a valid checksum",
        )

    # All-lowercase and all-uppercase bodies carry no checksum
    body = address[2:] if address[:2].lower() == "0x" else address
    if body != body.lower() and body != body.upper() and not Web3.is_checksum_address(address):
        raise InvalidAddressError(
            address,
            field=field_name,
            reason="mixed-case address fails the EIP-55 checksum",
        )

    return Web3.to_checksum_address(address)


def validate_addresses(addresses: Iterable[str], field_name: str = "addresses") -> List[str]:
    """Validate every address in a sequence, reporting the failing index."""
    return [
        validate_address(address, f"{field_name}[{i}]")
        for i, address in enumerate(addresses)
    ]


def validate_same_length(
    reference: Sized,
    candidate: Sized,
    field_name: str = "data",
) -> None:
    """
    Check that ``candidate`` has as many items as ``reference``.

    Raises:
        LengthMismatchError: If lengths differ
    """
    if len(candidate) != len(reference):
        raise LengthMismatchError(len(reference), len(candidate), field=field_name)
