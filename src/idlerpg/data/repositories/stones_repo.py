"""Stone base repository."""
from __future__ import annotations

from typing import Dict

from idlerpg.core.types import EQUIPMENT_SLOTS
from idlerpg.data.errors import DataReferenceError
from idlerpg.data.repositories.base import RepositoryBase
from idlerpg.domain.defs import StoneBaseDef


class StonesRepository(RepositoryBase[StoneBaseDef]):
    """Loads stone bases and checks their socket slot whitelist."""

    def __init__(self, base_path=None) -> None:
        super().__init__("stones.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, StoneBaseDef]:
        stones: Dict[str, StoneBaseDef] = {}
        for raw_id, payload in raw.items():
            context = f"stone '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_exact_fields(
                data,
                {"name", "socket_types"},
                context,
                optional_fields={"base_stats", "primary_stat"},
            )
            socket_types = tuple(self._require_str_list(data["socket_types"], f"{context} socket_types"))
            unknown_slots = set(socket_types) - set(EQUIPMENT_SLOTS)
            if unknown_slots:
                raise DataReferenceError(f"{context} references unknown slots {sorted(unknown_slots)}.")
            primary_stat = data.get("primary_stat")
            stones[raw_id] = StoneBaseDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                base_stats=self._require_stat_map(data.get("base_stats"), f"{context} base_stats"),
                socket_types=socket_types,
                primary_stat=self._require_str(primary_stat, f"{context} primary_stat") if primary_stat else None,
            )
        return stones
