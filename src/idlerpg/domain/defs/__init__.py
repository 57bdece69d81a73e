"""Domain definition exports."""

from .affix_def import AffixDef, AffixPoolDef
from .enemy_def import EnemyTypeDef
from .equipment_base_def import EquipmentBaseDef
from .passive_node_def import PassiveNodeDef, PassiveTreeDef, SkillModifier
from .rarity_def import DEFAULT_RARITY_COLOR, RarityDef, fallback_rarity
from .stone_def import StoneBaseDef

__all__ = [
    "AffixDef",
    "AffixPoolDef",
    "DEFAULT_RARITY_COLOR",
    "EnemyTypeDef",
    "EquipmentBaseDef",
    "PassiveNodeDef",
    "PassiveTreeDef",
    "RarityDef",
    "SkillModifier",
    "StoneBaseDef",
    "fallback_rarity",
]
