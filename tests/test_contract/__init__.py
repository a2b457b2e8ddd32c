"""
Contract module tests for the Crossbell Python SDK.

Tests cover:
- Link type and id encoding (test_codec.py)
- Event matching (test_events.py)
- Receipt decoding and revert reasons (test_chain.py)
- Network guard and executor (test_executor.py)
- Link, note, character and tips operations
"""
