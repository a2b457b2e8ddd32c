"""Constants for the Crossbell SDK.

Protocol constants shared with the deployed contracts, content-addressing
settings, and default timeouts.
"""

# ABI Encoding Constants
ABI_SELECTOR_LENGTH = 4
ABI_WORD_LENGTH = 32
REVERT_SELECTOR = "0x08c379a0"

# Link types are stored as bytes32, right-padded with zero bytes.
# Must match the contract; never change independently.
LINK_TYPE_WIDTH = 32

# Ethereum Constants
NIL_ADDRESS = "0x0000000000000000000000000000000000000000"
MAX_UINT256 = 2**256 - 1

# Content addressing
IPFS_SCHEME = "ipfs://"
HTTP_SCHEMES = ("http://", "https://")
CID_V0_PATTERN = r"^Qm[1-9A-HJ-NP-Za-km-z]{44}$"
CID_V1_PATTERN = r"^b[a-z2-7]{58,}$"

# Network Constants
PROVIDER_TIMEOUT_SECONDS = 30
RECEIPT_TIMEOUT_SECONDS = 120
RECEIPT_POLL_INTERVAL_SECONDS = 0.5

__all__ = [
    "ABI_SELECTOR_LENGTH",
    "ABI_WORD_LENGTH",
    "REVERT_SELECTOR",
    "LINK_TYPE_WIDTH",
    "NIL_ADDRESS",
    "MAX_UINT256",
    "IPFS_SCHEME",
    "HTTP_SCHEMES",
    "CID_V0_PATTERN",
    "CID_V1_PATTERN",
    "PROVIDER_TIMEOUT_SECONDS",
    "RECEIPT_TIMEOUT_SECONDS",
    "RECEIPT_POLL_INTERVAL_SECONDS",
]
