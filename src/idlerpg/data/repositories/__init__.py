"""Repository exports."""

from .affixes_repo import AffixesRepository
from .enemies_repo import EnemyTypesRepository
from .equipment_bases_repo import EquipmentBasesRepository
from .passive_tree_repo import PassiveTreeRepository
from .rarities_repo import RaritiesRepository
from .stones_repo import StonesRepository

__all__ = [
    "AffixesRepository",
    "EnemyTypesRepository",
    "EquipmentBasesRepository",
    "PassiveTreeRepository",
    "RaritiesRepository",
    "StonesRepository",
]
