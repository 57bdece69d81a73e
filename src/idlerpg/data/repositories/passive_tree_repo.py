"""Passive skill tree repository."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict

from idlerpg.data.errors import DataReferenceError, DataValidationError
from idlerpg.data.repositories.base import RepositoryBase
from idlerpg.domain.defs import PassiveNodeDef, PassiveTreeDef, SkillModifier

_NODE_TYPES = {"travel", "small", "notable", "keystone", "mastery"}
_MODIFIER_TYPES = {"additive", "multiplicative", "override"}


class PassiveTreeRepository(RepositoryBase[PassiveNodeDef]):
    """Loads passive tree nodes and validates their prerequisite graph."""

    def __init__(self, base_path=None) -> None:
        super().__init__("passive_tree.json", base_path)
        self._tree: PassiveTreeDef | None = None
        self._starting_node = "start"

    def tree(self) -> PassiveTreeDef:
        """Return the whole tree as one read-only structure."""
        self._ensure_loaded()
        assert self._definitions is not None
        if self._tree is None:
            self._tree = PassiveTreeDef(
                nodes=MappingProxyType(dict(self._definitions)),
                starting_node=self._starting_node,
            )
        return self._tree

    def _build(self, raw: dict[str, object]) -> Dict[str, PassiveNodeDef]:
        self._assert_exact_fields(raw, {"starting_node", "nodes"}, "passive tree")
        self._starting_node = self._require_str(raw["starting_node"], "passive tree starting_node")
        raw_nodes = self._require_mapping(raw["nodes"], "passive tree nodes")

        nodes: Dict[str, PassiveNodeDef] = {}
        for node_id, payload in raw_nodes.items():
            nodes[node_id] = self._build_node(node_id, payload)

        if self._starting_node not in nodes:
            raise DataReferenceError(f"Starting node '{self._starting_node}' is not defined.")
        for node in nodes.values():
            for required_id in node.requirements + node.connections:
                if required_id not in nodes:
                    raise DataReferenceError(
                        f"passive node '{node.id}' references missing node '{required_id}'."
                    )
        return nodes

    def _build_node(self, node_id: str, payload: object) -> PassiveNodeDef:
        context = f"passive node '{node_id}'"
        data = self._require_mapping(payload, context)
        self._assert_exact_fields(
            data,
            {"name", "type"},
            context,
            optional_fields={
                "description",
                "requirements",
                "connections",
                "stats",
                "skill_modifiers",
                "cost",
                "max_rank",
                "tier",
                "archetype",
            },
        )
        node_type = self._require_str(data["type"], f"{context} type")
        if node_type not in _NODE_TYPES:
            raise DataValidationError(f"{context} type must be one of {sorted(_NODE_TYPES)}.")
        cost = self._require_int(data.get("cost", 1), f"{context} cost")
        max_rank = self._require_int(data.get("max_rank", 1), f"{context} max_rank")
        if cost < 0 or max_rank < 1:
            raise DataValidationError(f"{context} needs cost >= 0 and max_rank >= 1.")
        archetype = data.get("archetype")

        return PassiveNodeDef(
            id=node_id,
            name=self._require_str(data["name"], f"{context} name"),
            type=node_type,
            description=self._require_str(data.get("description", ""), f"{context} description"),
            requirements=tuple(self._require_str_list(data.get("requirements"), f"{context} requirements")),
            connections=tuple(self._require_str_list(data.get("connections"), f"{context} connections")),
            stats=self._require_stat_map(data.get("stats"), f"{context} stats"),
            skill_modifiers=self._build_modifiers(data.get("skill_modifiers"), context),
            cost=cost,
            max_rank=max_rank,
            tier=self._require_int(data.get("tier", 1), f"{context} tier"),
            archetype=self._require_str(archetype, f"{context} archetype") if archetype is not None else None,
        )

    def _build_modifiers(self, value: object, context: str) -> tuple[SkillModifier, ...]:
        if value is None:
            return ()
        if not isinstance(value, list):
            raise DataValidationError(f"{context} skill_modifiers must be a list.")
        modifiers: list[SkillModifier] = []
        for index, entry in enumerate(value):
            entry_context = f"{context} skill_modifier {index}"
            data = self._require_mapping(entry, entry_context)
            self._assert_exact_fields(data, {"skill_id", "property", "value"}, entry_context, optional_fields={"type"})
            modifier_type = self._require_str(data.get("type", "additive"), f"{entry_context} type")
            if modifier_type not in _MODIFIER_TYPES:
                raise DataValidationError(f"{entry_context} type must be one of {sorted(_MODIFIER_TYPES)}.")
            modifiers.append(
                SkillModifier(
                    skill_id=self._require_str(data["skill_id"], f"{entry_context} skill_id"),
                    property=self._require_str(data["property"], f"{entry_context} property"),
                    value=self._require_number(data["value"], f"{entry_context} value"),
                    type=modifier_type,  # type: ignore[arg-type]
                )
            )
        return tuple(modifiers)
