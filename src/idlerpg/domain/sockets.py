"""Socket rules for embedding stones into equipment."""
from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping

from idlerpg.domain.entities import Attributes, Equipment, Stone

MAX_SOCKETS_BY_RARITY: Mapping[str, int] = MappingProxyType(
    {
        "Common": 0,
        "Magic": 1,
        "Rare": 1,
        "Unique": 2,
        "Legendary": 2,
    }
)


@dataclass(frozen=True, slots=True)
class SocketResult:
    success: bool
    message: str
    equipment: Equipment
    stone_id: str | None = None


def get_max_sockets(rarity: str) -> int:
    """Socket capacity for a rarity; unknown rarities have none."""
    return MAX_SOCKETS_BY_RARITY.get(rarity, 0)


def empty_sockets(rarity: str) -> tuple[str | None, ...]:
    return (None,) * get_max_sockets(rarity)


def can_socket_stone(stone: Stone, slot: str) -> bool:
    return slot in stone.socket_types


def has_available_socket(equipment: Equipment) -> bool:
    return any(stone_id is None for stone_id in equipment.sockets)


def first_free_socket(equipment: Equipment) -> int | None:
    for index, stone_id in enumerate(equipment.sockets):
        if stone_id is None:
            return index
    return None


def embed_stone(equipment: Equipment, stone: Stone, index: int | None = None) -> SocketResult:
    """Put ``stone`` into a socket and return the updated equipment.

    With no ``index`` the first free socket is used. The input equipment is
    never modified; on failure it is returned as-is.
    """
    if not can_socket_stone(stone, equipment.slot):
        return SocketResult(False, f"{stone.name} cannot be socketed into {equipment.slot}.", equipment)
    if stone.id in equipment.sockets:
        return SocketResult(False, f"{stone.name} is already socketed in {equipment.name}.", equipment)
    if index is None:
        index = first_free_socket(equipment)
        if index is None:
            return SocketResult(False, f"{equipment.name} has no free socket.", equipment)
    if not 0 <= index < len(equipment.sockets):
        return SocketResult(False, f"{equipment.name} has no socket {index}.", equipment)
    if equipment.sockets[index] is not None:
        return SocketResult(False, f"Socket {index} of {equipment.name} is occupied.", equipment)

    sockets = list(equipment.sockets)
    sockets[index] = stone.id
    updated = replace(equipment, sockets=tuple(sockets))
    return SocketResult(True, f"{stone.name} socketed into {equipment.name}.", updated, stone.id)


def remove_stone(equipment: Equipment, index: int) -> SocketResult:
    if not 0 <= index < len(equipment.sockets):
        return SocketResult(False, f"{equipment.name} has no socket {index}.", equipment)
    stone_id = equipment.sockets[index]
    if stone_id is None:
        return SocketResult(False, f"Socket {index} of {equipment.name} is empty.", equipment)

    sockets = list(equipment.sockets)
    sockets[index] = None
    updated = replace(equipment, sockets=tuple(sockets))
    return SocketResult(True, f"Stone removed from {equipment.name}.", updated, stone_id)


def can_equip(equipment: Equipment, attributes: Attributes) -> bool:
    """True when every attribute requirement of ``equipment`` is met."""
    for attribute, required in equipment.requirements.items():
        if getattr(attributes, attribute, 0) < required:
            return False
    return True


def clear_sockets(equipment: Equipment) -> tuple[Equipment, list[tuple[int, str]]]:
    """Empty every socket; returns the item and the ``(index, stone_id)`` pairs freed."""
    freed = [(index, stone_id) for index, stone_id in enumerate(equipment.sockets) if stone_id is not None]
    if not freed:
        return equipment, []
    return replace(equipment, sockets=(None,) * len(equipment.sockets)), freed
