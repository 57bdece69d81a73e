from __future__ import annotations

from idlerpg.data.repositories import (
    AffixesRepository,
    EnemyTypesRepository,
    EquipmentBasesRepository,
    PassiveTreeRepository,
    RaritiesRepository,
    StonesRepository,
)

bases_repo = EquipmentBasesRepository()
affixes_repo = AffixesRepository()
rarities_repo = RaritiesRepository()
stone_rarities_repo = RaritiesRepository(filename="stone_rarities.json")
stones_repo = StonesRepository()
enemy_types_repo = EnemyTypesRepository()
passive_tree_repo = PassiveTreeRepository()


def equipment_repos() -> dict:
    return {
        "bases_repo": bases_repo,
        "affixes_repo": affixes_repo,
        "rarities_repo": rarities_repo,
    }


def stone_repos() -> dict:
    return {
        "stones_repo": stones_repo,
        "affixes_repo": affixes_repo,
        "stone_rarities_repo": stone_rarities_repo,
    }
