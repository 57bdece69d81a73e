"""One bundle of every content repository, rooted at a single definitions directory."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from idlerpg.data.repositories import (
    AffixesRepository,
    EnemyTypesRepository,
    EquipmentBasesRepository,
    PassiveTreeRepository,
    RaritiesRepository,
    StonesRepository,
)


@dataclass(frozen=True, slots=True)
class ContentRepositories:
    bases: EquipmentBasesRepository
    affixes: AffixesRepository
    rarities: RaritiesRepository
    stone_rarities: RaritiesRepository
    stones: StonesRepository
    enemy_types: EnemyTypesRepository
    passive_tree: PassiveTreeRepository


def load_content(base_path: Path | str | None = None) -> ContentRepositories:
    """Create repositories for ``base_path``; files are read on first access."""
    return ContentRepositories(
        bases=EquipmentBasesRepository(base_path=base_path),
        affixes=AffixesRepository(base_path=base_path),
        rarities=RaritiesRepository(base_path=base_path),
        stone_rarities=RaritiesRepository(base_path=base_path, filename="stone_rarities.json"),
        stones=StonesRepository(base_path=base_path),
        enemy_types=EnemyTypesRepository(base_path=base_path),
        passive_tree=PassiveTreeRepository(base_path=base_path),
    )


def load_content_from_config(config: Mapping[str, str | None]) -> ContentRepositories:
    return load_content(config.get("definitions_path"))
