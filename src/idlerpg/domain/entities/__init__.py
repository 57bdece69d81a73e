"""Runtime entity exports."""

from .attributes import Attributes
from .enemy import Enemy
from .equipment import Affix, Equipment
from .legacy_item import LegacyExtra, LegacyItem
from .passive_tree_state import PassiveTreeState
from .player import Player
from .stone import Stone

__all__ = [
    "Affix",
    "Attributes",
    "Enemy",
    "Equipment",
    "LegacyExtra",
    "LegacyItem",
    "PassiveTreeState",
    "Player",
    "Stone",
]
