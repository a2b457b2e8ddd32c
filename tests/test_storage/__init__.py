"""
Storage module tests for the Crossbell Python SDK.

Tests cover:
- Metadata models and IPFS configuration (test_types.py)
- IPFS relay uploads (test_ipfs_client.py)
- ContentResolver publish/resolve/passthrough (test_resolver.py)
"""
