from crossbell.contract.subcontracts.base import BaseOperations
from crossbell.contract.subcontracts.character import CharacterOperations
from crossbell.contract.subcontracts.link import LinkOperations, TargetBinding, bind_target
from crossbell.contract.subcontracts.note import NoteOperations
from crossbell.contract.subcontracts.tips import TipsOperations

__all__ = [
    "BaseOperations",
    "CharacterOperations",
    "LinkOperations",
    "NoteOperations",
    "TipsOperations",
    "TargetBinding",
    "bind_target",
]
