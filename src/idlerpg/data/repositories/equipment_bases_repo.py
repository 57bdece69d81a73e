"""Equipment base-type repository."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict

from idlerpg.data.errors import DataValidationError
from idlerpg.data.repositories.base import RepositoryBase
from idlerpg.domain.defs import EquipmentBaseDef

_CATEGORIES = {"weapon", "armor", "accessory"}
_DAMAGE_TYPES = {"physical", "fire", "ice", "lightning", "poison"}


class EquipmentBasesRepository(RepositoryBase[EquipmentBaseDef]):
    """Loads and validates weapon, armor and accessory base definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("equipment_bases.json", base_path)

    def by_category(self, category: str) -> list[EquipmentBaseDef]:
        """Return the bases of one category in definition-file order."""
        return [self.get(base_id) for base_id in self.ids() if self.get(base_id).category == category]

    def _build(self, raw: dict[str, object]) -> Dict[str, EquipmentBaseDef]:
        bases: Dict[str, EquipmentBaseDef] = {}
        for raw_id, payload in raw.items():
            context = f"equipment base '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                data,
                {"name", "category", "slot"},
                context,
                optional_fields={"base_stats", "damage_types", "requirements"},
            )
            category = self._require_str(data["category"], f"{context} category")
            if category not in _CATEGORIES:
                raise DataValidationError(f"{context} category must be one of {sorted(_CATEGORIES)}.")
            damage_types = tuple(self._require_str_list(data.get("damage_types"), f"{context} damage_types"))
            unknown_types = set(damage_types) - _DAMAGE_TYPES
            if unknown_types:
                raise DataValidationError(f"{context} has unknown damage types {sorted(unknown_types)}.")
            requirements = self._require_mapping(data.get("requirements", {}), f"{context} requirements")

            bases[raw_id] = EquipmentBaseDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                category=category,
                slot=self._require_str(data["slot"], f"{context} slot"),
                base_stats=self._require_stat_map(data.get("base_stats"), f"{context} base_stats"),
                damage_types=damage_types,
                requirements=MappingProxyType(
                    {
                        attr: self._require_int(amount, f"{context} requirement '{attr}'")
                        for attr, amount in requirements.items()
                    }
                ),
            )
        return bases
