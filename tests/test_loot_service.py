from __future__ import annotations

from dataclasses import replace

from idlerpg.core.rng import RNG
from idlerpg.domain.entities import Enemy
from idlerpg.services.factories import create_default_player
from idlerpg.services.loot_service import LootService, apply_experience, xp_for_enemy
from tests.helpers import content


def _service(seed: int = 1) -> LootService:
    return LootService(
        bases_repo=content.bases_repo,
        affixes_repo=content.affixes_repo,
        rarities_repo=content.rarities_repo,
        stones_repo=content.stones_repo,
        stone_rarities_repo=content.stone_rarities_repo,
        enemy_types_repo=content.enemy_types_repo,
        rng=RNG(seed),
    )


def _enemy(level: int = 5, is_boss: bool = False) -> Enemy:
    return Enemy(id="enemy_1", name="Orc L5", type="melee", level=level, hp=0, max_hp=85, is_boss=is_boss)


def test_xp_for_enemy() -> None:
    assert xp_for_enemy(_enemy(level=5)) == 20
    assert xp_for_enemy(_enemy(level=5, is_boss=True)) == 60
    assert xp_for_enemy(_enemy(level=0)) == 1


def test_apply_experience_runs_level_up_loop() -> None:
    player = replace(create_default_player(), hp=10)
    updated, messages = apply_experience(player, 230)
    # 100 for level 2, then 125 for level 3
    assert updated.level == 3
    assert updated.xp == 5
    assert updated.next_level_xp == 156
    assert updated.skill_points == 2
    assert updated.hp == updated.max_hp
    assert messages == ["Leveled up! Now level 2", "Leveled up! Now level 3"]


def test_award_victory_pays_loot_value_and_xp() -> None:
    service = _service()
    player = create_default_player()
    reward = service.award_victory(player, _enemy())
    assert reward.player.gold == player.gold + reward.loot.value
    assert reward.xp == 20
    assert reward.player.xp == 20
    assert reward.messages[0].startswith("Enemy defeated! Loot: ")


def test_boss_victory_message() -> None:
    reward = _service(3).award_victory(create_default_player(), _enemy(is_boss=True))
    assert reward.messages[0].startswith("BOSS DEFEATED!")
    assert reward.loot.rarity != "Common"


def test_rolls_are_bound_to_content() -> None:
    service = _service(9)
    item = service.roll_equipment(20)
    stone = service.roll_stone(20)
    enemy = service.spawn_enemy(20, "ranged")
    assert service.rarity_color(item.rarity).startswith("#")
    assert service.stone_color(stone.rarity).startswith("#")
    assert enemy.level == 20
