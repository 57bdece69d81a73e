"""Shared type aliases for the core and domain layers."""
from typing import Dict, Literal

StatMap = Dict[str, float]

Rarity = Literal["Common", "Magic", "Rare", "Unique", "Legendary"]
StoneRarity = Literal["Common", "Rare", "Mythical", "Divine"]
EquipmentCategory = Literal["weapon", "armor", "accessory"]
EquipmentSlot = Literal[
    "weapon", "offhand", "helm", "chest", "legs", "boots", "gloves", "ring", "amulet", "belt"
]
DamageType = Literal["physical", "fire", "ice", "lightning", "poison"]
StatusEffect = Literal["burning", "frozen", "stunned", "poisoned"]
EnemyType = Literal["melee", "ranged", "caster", "tank", "assassin", "boss"]
SpecialAbility = Literal[
    "berserker", "precise", "regeneration", "shield", "poison", "freeze", "lightning", "summon"
]
ModifierType = Literal["additive", "multiplicative", "override"]

RARITIES: tuple[str, ...] = ("Common", "Magic", "Rare", "Unique", "Legendary")
STONE_RARITIES: tuple[str, ...] = ("Common", "Rare", "Mythical", "Divine")
EQUIPMENT_SLOTS: tuple[str, ...] = (
    "weapon", "offhand", "helm", "chest", "gloves", "legs", "boots", "belt", "ring", "amulet"
)
ATTRIBUTE_NAMES: tuple[str, ...] = ("strength", "dexterity", "intelligence", "vitality", "luck")

__all__ = [
    "ATTRIBUTE_NAMES",
    "DamageType",
    "EQUIPMENT_SLOTS",
    "EnemyType",
    "EquipmentCategory",
    "EquipmentSlot",
    "ModifierType",
    "RARITIES",
    "Rarity",
    "STONE_RARITIES",
    "SpecialAbility",
    "StatMap",
    "StatusEffect",
    "StoneRarity",
]
