"""Equipment and stone socket orchestration for the player."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List

from idlerpg.core.types import EQUIPMENT_SLOTS
from idlerpg.domain import sockets
from idlerpg.domain.entities import Equipment, Player, Stone
from idlerpg.services.player_stats_service import PlayerStatsService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EquipmentEvent:
    """Base class for equipment and socket events."""


@dataclass(slots=True)
class ItemEquippedEvent(EquipmentEvent):
    item_id: str
    item_name: str
    slot: str


@dataclass(slots=True)
class ItemUnequippedEvent(EquipmentEvent):
    item_id: str
    item_name: str
    slot: str


@dataclass(slots=True)
class StoneSocketedEvent(EquipmentEvent):
    stone_id: str
    stone_name: str
    item_id: str
    socket_index: int


@dataclass(slots=True)
class StoneRemovedEvent(EquipmentEvent):
    stone_id: str
    item_id: str
    socket_index: int


@dataclass(slots=True)
class StoneSoldEvent(EquipmentEvent):
    stone_id: str
    stone_name: str
    gold: int


@dataclass(slots=True)
class EquipmentActionResult:
    success: bool
    message: str
    player: Player
    events: List[EquipmentEvent] = field(default_factory=list)
    removed: Equipment | None = None


class EquipmentService:
    """Equip gear and move stones in and out of sockets.

    Every successful action returns a freshly aggregated player; failed
    actions hand back the input player untouched.
    """

    def __init__(self, *, stats_service: PlayerStatsService) -> None:
        self._stats_service = stats_service

    # ------------------------------------------------------------ Equipment
    def equip(self, player: Player, item: Equipment) -> EquipmentActionResult:
        if item.slot not in EQUIPMENT_SLOTS:
            return EquipmentActionResult(False, f"Unknown equipment slot '{item.slot}'.", player)
        if not sockets.can_equip(item, player.attributes):
            return EquipmentActionResult(False, f"Requirements not met for {item.name}.", player)

        equipment = dict(player.equipment)
        removed = equipment.pop(item.slot, None)
        events: List[EquipmentEvent] = []
        if removed is not None:
            removed = self._release_stones(removed, events)
            events.append(ItemUnequippedEvent(removed.id, removed.name, item.slot))
        item = self._drop_foreign_stones(player, item, equipment)
        equipment[item.slot] = item
        events.append(ItemEquippedEvent(item.id, item.name, item.slot))

        updated = self._stats_service.recalculate(replace(player, equipment=equipment))
        return EquipmentActionResult(True, f"Equipped {item.name}.", updated, events, removed)

    def unequip(self, player: Player, slot: str) -> EquipmentActionResult:
        """Take an item off; its stones go back to the player's stones."""
        item = player.equipment.get(slot)
        if item is None:
            return EquipmentActionResult(False, f"Nothing equipped in {slot}.", player)
        equipment = dict(player.equipment)
        del equipment[slot]
        events: List[EquipmentEvent] = []
        item = self._release_stones(item, events)
        events.append(ItemUnequippedEvent(item.id, item.name, slot))
        updated = self._stats_service.recalculate(replace(player, equipment=equipment))
        return EquipmentActionResult(True, f"Unequipped {item.name}.", updated, events, item)

    # --------------------------------------------------------------- Stones
    def embed_stone(self, player: Player, slot: str, stone_id: str, index: int | None = None) -> EquipmentActionResult:
        item = player.equipment.get(slot)
        if item is None:
            return EquipmentActionResult(False, f"Nothing equipped in {slot}.", player)
        stone = player.find_stone(stone_id)
        if stone is None:
            return EquipmentActionResult(False, f"Stone '{stone_id}' is not in the inventory.", player)
        holder = self._socket_holder(player, stone_id)
        if holder is not None:
            return EquipmentActionResult(False, f"{stone.name} is already socketed in {holder.name}.", player)

        outcome = sockets.embed_stone(item, stone, index)
        if not outcome.success:
            return EquipmentActionResult(False, outcome.message, player)

        socket_index = outcome.equipment.sockets.index(stone.id)
        updated = self._replace_item(player, slot, outcome.equipment)
        return EquipmentActionResult(
            True,
            outcome.message,
            updated,
            [StoneSocketedEvent(stone.id, stone.name, item.id, socket_index)],
        )

    def remove_stone(self, player: Player, slot: str, index: int) -> EquipmentActionResult:
        """Take a stone out of a socket; it stays in the player's stones."""
        item = player.equipment.get(slot)
        if item is None:
            return EquipmentActionResult(False, f"Nothing equipped in {slot}.", player)
        outcome = sockets.remove_stone(item, index)
        if not outcome.success or outcome.stone_id is None:
            return EquipmentActionResult(False, outcome.message, player)

        updated = self._replace_item(player, slot, outcome.equipment)
        return EquipmentActionResult(
            True,
            outcome.message,
            updated,
            [StoneRemovedEvent(outcome.stone_id, item.id, index)],
        )

    def add_stone(self, player: Player, stone: Stone) -> Player:
        if player.find_stone(stone.id) is not None:
            logger.warning("Stone %s already owned, ignoring duplicate", stone.id)
            return player
        return replace(player, stones=[*player.stones, stone])

    def sell_stone(self, player: Player, stone_id: str) -> EquipmentActionResult:
        stone = player.find_stone(stone_id)
        if stone is None:
            return EquipmentActionResult(False, f"Stone '{stone_id}' is not in the inventory.", player)
        holder = self._socket_holder(player, stone_id)
        if holder is not None:
            return EquipmentActionResult(False, f"Remove {stone.name} from {holder.name} before selling.", player)

        updated = replace(
            player,
            stones=[owned for owned in player.stones if owned.id != stone_id],
            gold=player.gold + stone.value,
        )
        return EquipmentActionResult(
            True,
            f"Sold {stone.name} for {stone.value} gold.",
            updated,
            [StoneSoldEvent(stone.id, stone.name, stone.value)],
        )

    # -------------------------------------------------------------- Helpers
    def _replace_item(self, player: Player, slot: str, item: Equipment) -> Player:
        equipment = dict(player.equipment)
        equipment[slot] = item
        return self._stats_service.recalculate(replace(player, equipment=equipment))

    @staticmethod
    def _release_stones(item: Equipment, events: List[EquipmentEvent]) -> Equipment:
        cleared, freed = sockets.clear_sockets(item)
        for index, stone_id in freed:
            events.append(StoneRemovedEvent(stone_id, item.id, index))
        return cleared

    @staticmethod
    def _drop_foreign_stones(player: Player, item: Equipment, others: Dict[str, Equipment]) -> Equipment:
        """Empty sockets that point at unowned stones or stones held by ``others``."""
        held = {stone_id for other in others.values() for stone_id in other.socketed_stone_ids}
        kept = tuple(
            stone_id if stone_id not in held and player.find_stone(stone_id) is not None else None
            for stone_id in item.sockets
        )
        if kept == item.sockets:
            return item
        logger.warning("Cleared stale socket references on %s", item.id)
        return replace(item, sockets=kept)

    @staticmethod
    def _socket_holder(player: Player, stone_id: str) -> Equipment | None:
        for item in player.equipment.values():
            if stone_id in item.sockets:
                return item
        return None
