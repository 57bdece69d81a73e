"""Attribute scaling helpers for derived combat stats."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from idlerpg.domain.entities import Attributes
from idlerpg.domain.entities.attributes import (
    BASE_DEXTERITY,
    BASE_INTELLIGENCE,
    BASE_LUCK,
    BASE_STRENGTH,
    BASE_VITALITY,
)

STR_DPS_PER_POINT = 1.0
STR_HP_PER_POINT = 2.0
DEX_CRIT_PER_POINT = 0.005
DEX_DODGE_PER_POINT = 0.003
INT_MANA_PER_POINT = 1.0
INT_MANA_REGEN_PER_POINT = 0.2
VIT_HP_PER_POINT = 3.0
VIT_HEALTH_REGEN_PER_POINT = 0.1
LUCK_CRIT_PER_POINT = 0.005


@dataclass(frozen=True, slots=True)
class AttributeContributions:
    base_dps: float = 0.0
    max_hp: float = 0.0
    max_mana: float = 0.0
    crit_chance: float = 0.0
    dodge_chance: float = 0.0
    mana_regen: float = 0.0
    health_regen: float = 0.0


@dataclass(frozen=True, slots=True)
class AttributeScalingBreakdown:
    attributes: Attributes
    deltas: Mapping[str, float]
    contributions: AttributeContributions


def attribute_deltas(attributes: Attributes) -> dict[str, float]:
    """Distance of each attribute from its starting baseline."""
    return {
        "strength": attributes.strength - BASE_STRENGTH,
        "dexterity": attributes.dexterity - BASE_DEXTERITY,
        "intelligence": attributes.intelligence - BASE_INTELLIGENCE,
        "vitality": attributes.vitality - BASE_VITALITY,
        "luck": attributes.luck - BASE_LUCK,
    }


def compute_attribute_contributions(points: Mapping[str, float]) -> AttributeContributions:
    """Convert attribute points into derived-stat bonuses.

    ``points`` may hold baseline deltas or flat bonuses granted by gear and the
    passive tree; missing attributes count as zero. Strength below the baseline
    never reduces damage, but it does reduce health.
    """
    strength = points.get("strength", 0.0)
    dexterity = points.get("dexterity", 0.0)
    intelligence = points.get("intelligence", 0.0)
    vitality = points.get("vitality", 0.0)
    luck = points.get("luck", 0.0)
    return AttributeContributions(
        base_dps=max(0.0, strength) * STR_DPS_PER_POINT,
        max_hp=strength * STR_HP_PER_POINT + vitality * VIT_HP_PER_POINT,
        max_mana=intelligence * INT_MANA_PER_POINT,
        crit_chance=dexterity * DEX_CRIT_PER_POINT + luck * LUCK_CRIT_PER_POINT,
        dodge_chance=dexterity * DEX_DODGE_PER_POINT,
        mana_regen=intelligence * INT_MANA_REGEN_PER_POINT,
        health_regen=vitality * VIT_HEALTH_REGEN_PER_POINT,
    )


def build_attribute_scaling_breakdown(attributes: Attributes) -> AttributeScalingBreakdown:
    deltas = attribute_deltas(attributes)
    return AttributeScalingBreakdown(
        attributes=attributes,
        deltas=deltas,
        contributions=compute_attribute_contributions(deltas),
    )
