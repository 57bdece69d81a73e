"""Enemy archetype repository."""
from __future__ import annotations

from typing import Dict

from idlerpg.data.errors import DataValidationError
from idlerpg.data.repositories.base import RepositoryBase
from idlerpg.domain.defs import EnemyTypeDef


class EnemyTypesRepository(RepositoryBase[EnemyTypeDef]):
    """Loads the per-archetype enemy name pools."""

    def __init__(self, base_path=None) -> None:
        super().__init__("enemies.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyTypeDef]:
        enemy_types: Dict[str, EnemyTypeDef] = {}
        for raw_id, payload in raw.items():
            context = f"enemy type '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(data, {"names"}, context)
            names = tuple(self._require_str_list(data["names"], f"{context} names"))
            if not names:
                raise DataValidationError(f"{context} needs at least one name.")
            enemy_types[raw_id] = EnemyTypeDef(id=raw_id, names=names)
        return enemy_types
