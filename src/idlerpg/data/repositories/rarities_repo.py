"""Rarity tier repository."""
from __future__ import annotations

import logging
from typing import Dict

from idlerpg.data.errors import DataValidationError
from idlerpg.data.repositories.base import RepositoryBase
from idlerpg.domain.defs import RarityDef, fallback_rarity

logger = logging.getLogger(__name__)


class RaritiesRepository(RepositoryBase[RarityDef]):
    """Loads rarity tiers; equipment and stones use separate files."""

    def __init__(self, base_path=None, filename: str = "rarities.json") -> None:
        super().__init__(filename, base_path)

    def resolve(self, rarity_id: str) -> RarityDef:
        """Return the tier for ``rarity_id`` or a neutral fallback tier."""
        rarity = self.find(rarity_id)
        if rarity is None:
            logger.warning("Unknown rarity %r in %s, using neutral tier", rarity_id, self._filename)
            return fallback_rarity(rarity_id)
        return rarity

    def _build(self, raw: dict[str, object]) -> Dict[str, RarityDef]:
        rarities: Dict[str, RarityDef] = {}
        for raw_id, payload in raw.items():
            context = f"rarity '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                data,
                {"color", "affix_count", "stat_multiplier"},
                context,
                optional_fields={
                    "elemental_chance",
                    "drop_weight",
                    "affix_variation",
                    "base_variation",
                },
            )
            affix_count = data["affix_count"]
            if not isinstance(affix_count, list) or len(affix_count) != 2:
                raise DataValidationError(f"{context} affix_count must be a [min, max] pair.")
            low = self._require_int(affix_count[0], f"{context} affix_count min")
            high = self._require_int(affix_count[1], f"{context} affix_count max")
            if low < 0 or high < low:
                raise DataValidationError(f"{context} affix_count must satisfy 0 <= min <= max.")

            rarities[raw_id] = RarityDef(
                id=raw_id,
                color=self._require_str(data["color"], f"{context} color"),
                affix_count=(low, high),
                stat_multiplier=self._require_number(data["stat_multiplier"], f"{context} stat_multiplier"),
                elemental_chance=self._require_number(
                    data.get("elemental_chance", 0.1), f"{context} elemental_chance"
                ),
                drop_weight=self._require_number(data.get("drop_weight", 0), f"{context} drop_weight"),
                affix_variation=self._require_number(
                    data.get("affix_variation", 0), f"{context} affix_variation"
                ),
                base_variation=self._require_number(
                    data.get("base_variation", 0), f"{context} base_variation"
                ),
            )
        return rarities
