"""Affix pool repository."""
from __future__ import annotations

from typing import Dict

from idlerpg.data.errors import DataValidationError
from idlerpg.data.repositories.base import RepositoryBase
from idlerpg.domain.defs import AffixDef, AffixPoolDef


class AffixesRepository(RepositoryBase[AffixPoolDef]):
    """Loads the themed affix pools keyed by pool id."""

    def __init__(self, base_path=None) -> None:
        super().__init__("affixes.json", base_path)

    def pool(self, pool_id: str) -> tuple[AffixDef, ...]:
        """Return the affixes of a pool, or an empty tuple for unknown pools."""
        pool = self.find(pool_id)
        return pool.affixes if pool is not None else ()

    def _build(self, raw: dict[str, object]) -> Dict[str, AffixPoolDef]:
        pools: Dict[str, AffixPoolDef] = {}
        for pool_id, entries in raw.items():
            if not isinstance(entries, list):
                raise DataValidationError(f"affix pool '{pool_id}' must be a list.")
            affixes: list[AffixDef] = []
            for index, entry in enumerate(entries):
                context = f"affix pool '{pool_id}' entry {index}"
                data = self._require_mapping(entry, context)
                self._assert_exact_fields(data, {"name", "stat", "value", "tier", "weight"}, context)
                weight = self._require_number(data["weight"], f"{context} weight")
                if weight <= 0:
                    raise DataValidationError(f"{context} weight must be positive.")
                affixes.append(
                    AffixDef(
                        name=self._require_str(data["name"], f"{context} name"),
                        stat=self._require_str(data["stat"], f"{context} stat"),
                        value=self._require_number(data["value"], f"{context} value"),
                        tier=self._require_int(data["tier"], f"{context} tier"),
                        weight=weight,
                    )
                )
            pools[pool_id] = AffixPoolDef(id=pool_id, affixes=tuple(affixes))
        return pools
