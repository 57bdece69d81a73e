"""Factory helpers for generated loot and runtime entities."""

from .enemy_factory import create_enemy_for_level
from .equipment_factory import generate_equipment, get_rarity_color, to_legacy_item
from .id_factory import make_instance_id
from .loot_factory import generate_loot
from .player_factory import create_default_player, player_from_dict
from .stone_factory import generate_stone, get_stone_color

__all__ = [
    "create_default_player",
    "create_enemy_for_level",
    "generate_equipment",
    "generate_loot",
    "generate_stone",
    "get_rarity_color",
    "get_stone_color",
    "make_instance_id",
    "player_from_dict",
    "to_legacy_item",
]
