"""
Tests for storage configuration and metadata models.
"""

import pytest
from pydantic import ValidationError

from crossbell.storage import (
    METADATA_MODELS,
    CharacterMetadata,
    IpfsConfig,
    LinklistMetadata,
    NoteAttachment,
    NoteMetadata,
    ResolvedContent,
)


class TestIpfsConfig:
    """Tests for IpfsConfig model."""

    def test_default_values(self) -> None:
        config = IpfsConfig()

        assert config.relay_url == "https://ipfs-relay.crossbell.io"
        assert config.gateway_url == "https://ipfs.crossbell.io/ipfs/"
        assert config.timeout == 30000
        assert config.max_download_size == 5 * 1024 * 1024

    def test_config_is_frozen(self) -> None:
        config = IpfsConfig()
        with pytest.raises(ValidationError):
            config.timeout = 5000  # type: ignore[misc]

    def test_timeout_lower_bound(self) -> None:
        with pytest.raises(ValidationError):
            IpfsConfig(timeout=10)


class TestMetadataModels:
    """Tests for metadata document models."""

    def test_unknown_fields_are_preserved(self) -> None:
        note = NoteMetadata.model_validate({"content": "gm", "mood": "sunny"})

        assert note.content == "gm"
        assert note.model_dump(exclude_none=True) == {"content": "gm", "mood": "sunny"}

    def test_attachments_are_parsed(self) -> None:
        note = NoteMetadata.model_validate(
            {"attachments": [{"name": "cover", "address": "ipfs://Qm", "mime_type": "image/png"}]}
        )

        assert isinstance(note.attachments[0], NoteAttachment)
        assert note.attachments[0].mime_type == "image/png"

    def test_character_metadata(self) -> None:
        character = CharacterMetadata(name="Alice", bio="hi", avatars=["ipfs://Qm"])

        assert character.type is None
        assert character.avatars == ["ipfs://Qm"]

    def test_models_by_kind(self) -> None:
        assert METADATA_MODELS == {
            "note": NoteMetadata,
            "character": CharacterMetadata,
            "linklist": LinklistMetadata,
        }


class TestResolvedContent:
    """Tests for ResolvedContent."""

    def test_metadata_defaults_to_none(self) -> None:
        assert ResolvedContent(uri="ipfs://Qm").metadata is None

    def test_is_frozen(self) -> None:
        resolved = ResolvedContent(uri="")
        with pytest.raises(AttributeError):
            resolved.uri = "x"  # type: ignore[misc]
