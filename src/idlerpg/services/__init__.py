"""Service layer exports."""

from .errors import FactoryError
from .attribute_allocation_service import AttributeAllocationService, AttributeSpendResult
from .combat_service import calculate_damage_variance, simulate_combat_tick
from .equipment_service import (
    EquipmentActionResult,
    EquipmentEvent,
    EquipmentService,
    ItemEquippedEvent,
    ItemUnequippedEvent,
    StoneRemovedEvent,
    StoneSocketedEvent,
    StoneSoldEvent,
)
from .loot_service import LootService, VictoryReward
from .passive_tree_service import NodeAllocationResult, PassiveTreeService
from .player_stats_service import PlayerStatsService

__all__ = [
    "FactoryError",
    "AttributeAllocationService",
    "AttributeSpendResult",
    "calculate_damage_variance",
    "simulate_combat_tick",
    "EquipmentActionResult",
    "EquipmentEvent",
    "EquipmentService",
    "ItemEquippedEvent",
    "ItemUnequippedEvent",
    "StoneRemovedEvent",
    "StoneSocketedEvent",
    "StoneSoldEvent",
    "LootService",
    "VictoryReward",
    "NodeAllocationResult",
    "PassiveTreeService",
    "PlayerStatsService",
]
