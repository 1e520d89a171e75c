"""
Damage Calculation and Pipeline Tests

Tests cover:
1. Pure damage arithmetic (hunter's mark, halving, enrage, shatter, mind warp)
2. Execute window boundaries
3. Health clamping for heroes and the monster
4. Death bookkeeping, guardian angel revives and win/loss checks
5. Dodge, HALF_DAMAGE and INTANGIBLE consumption
"""

import pytest

from skyward.calc import pipeline
from skyward.calc.damage import (
    calculate_monster_damage,
    calculate_monster_roll_damage,
    clamp_health,
    is_executable,
    mind_warp_damage,
    shatter_damage,
)
from skyward.content.cards import make_card
from skyward.content.heroes import HeroClass
from skyward.content.monsters import get_monster
from skyward.content.statuses import MarkerKind, StatusKind
from skyward.state.combat import CombatPhase, CombatState, create_hero, create_monster


@pytest.fixture
def state():
    """Guardian and Tracker against a Treant, mid-fight."""
    heroes = [
        create_hero(HeroClass.GUARDIAN, make_card("9c")),
        create_hero(HeroClass.TRACKER, make_card("7d")),
    ]
    return CombatState(
        monster=create_monster(get_monster("treant")),
        heroes=heroes,
        phase=CombatPhase.HERO_ROLL,
    )


# =============================================================================
# Pure calculations
# =============================================================================

class TestMonsterDamageCalc:
    """Test damage dealt to the monster."""

    def test_base(self):
        assert calculate_monster_damage(5) == 5

    def test_zero_and_negative(self):
        assert calculate_monster_damage(0, hunters_mark=True) == 0
        assert calculate_monster_damage(-3) == 0

    def test_hunters_mark(self):
        assert calculate_monster_damage(5, hunters_mark=True) == 6

    def test_half_damage_floors(self):
        assert calculate_monster_damage(5, half_damage=True) == 2

    def test_mark_before_halving(self):
        assert calculate_monster_damage(5, hunters_mark=True, half_damage=True) == 3

    def test_half_and_intangible_stack(self):
        assert calculate_monster_damage(8, half_damage=True, intangible=True) == 2


class TestMonsterRollDamageCalc:
    """Test the monster's own buffs on roll damage."""

    def test_enraged_low_rolls(self):
        assert calculate_monster_roll_damage(3, 2, enraged=True) == 4

    def test_enraged_ignores_high_rolls(self):
        assert calculate_monster_roll_damage(3, 4, enraged=True) == 3

    def test_empowered(self):
        assert calculate_monster_roll_damage(3, 5, empowered=True) == 4

    def test_no_damage_stays_zero(self):
        assert calculate_monster_roll_damage(0, 1, enraged=True, empowered=True) == 0


class TestSpecialFormulas:
    """Test shatter and mind warp."""

    @pytest.mark.parametrize("health,expected", [
        (20, 5), (15, 5), (14, 4), (7, 4), (6, 3), (1, 3),
    ])
    def test_shatter(self, health, expected):
        assert shatter_damage(health) == expected

    @pytest.mark.parametrize("attached,expected", [
        (0, 3), (6, 3), (8, 4), (11, 5), (16, 8), (30, 8),
    ])
    def test_mind_warp(self, attached, expected):
        assert mind_warp_damage(attached) == expected


class TestExecuteWindow:
    """Test the (0, threshold] execute window."""

    def test_boundaries(self):
        assert not is_executable(0, 4)
        assert is_executable(1, 4)
        assert is_executable(4, 4)
        assert not is_executable(5, 4)

    def test_clamp(self):
        assert clamp_health(-4, 10) == 0
        assert clamp_health(14, 10) == 10
        assert clamp_health(7, 10) == 7


# =============================================================================
# Pipeline: heroes
# =============================================================================

class TestHeroDamage:
    """Test damage and healing applied to heroes."""

    def test_damage(self, state):
        hero = state.heroes[0]
        assert pipeline.apply_damage_to_hero(state, hero, 5) == 5
        assert hero.health == 13
        assert state.log.contains("takes 5 damage")

    def test_overkill_clamps_to_zero(self, state):
        hero = state.heroes[1]
        assert pipeline.apply_damage_to_hero(state, hero, 50) == 14
        assert hero.health == 0
        assert state.stats["hero_deaths"] == 1
        assert state.log.get_events("death")

    def test_dead_hero_takes_nothing(self, state):
        hero = state.heroes[1]
        hero.health = 0
        assert pipeline.apply_damage_to_hero(state, hero, 5) == 0

    def test_party_wipe_is_defeat(self, state):
        for hero in state.heroes:
            pipeline.apply_damage_to_hero(state, hero, 99)
        assert state.phase == CombatPhase.DEFEAT

    def test_no_damage_after_defeat(self, state):
        state.phase = CombatPhase.DEFEAT
        assert pipeline.apply_damage_to_hero(state, state.heroes[0], 5) == 0

    def test_dodge_blocks_big_attack(self, state):
        hero = state.heroes[0]
        hero.markers.add(MarkerKind.DODGE)
        assert pipeline.apply_damage_to_hero(state, hero, 3) == 0
        assert hero.health == 18
        assert not hero.has_marker(MarkerKind.DODGE)

    def test_dodge_spent_on_small_attack(self, state):
        hero = state.heroes[0]
        hero.markers.add(MarkerKind.DODGE)
        assert pipeline.apply_damage_to_hero(state, hero, 2) == 2
        assert not hero.has_marker(MarkerKind.DODGE)

    def test_self_damage_ignores_dodge(self, state):
        hero = state.heroes[0]
        hero.markers.add(MarkerKind.DODGE)
        assert pipeline.apply_damage_to_hero(state, hero, 4, is_attack=False) == 4
        assert hero.has_marker(MarkerKind.DODGE)

    def test_guardian_angel_revives(self, state):
        hero = state.heroes[0]
        hero.markers.add(MarkerKind.GUARDIAN_ANGEL)
        pipeline.apply_damage_to_hero(state, hero, 50)
        assert hero.health == 9
        assert state.stats["hero_deaths"] == 0
        assert not hero.has_marker(MarkerKind.GUARDIAN_ANGEL)

    def test_heal_clamps(self, state):
        hero = state.heroes[0]
        hero.health = 15
        assert pipeline.heal_hero(state, hero, 10) == 3
        assert hero.health == hero.max_health

    def test_heal_dead_hero_noop(self, state):
        hero = state.heroes[0]
        hero.health = 0
        assert pipeline.heal_hero(state, hero, 10) == 0
        assert hero.health == 0

    def test_heal_party_excludes(self, state):
        for hero in state.heroes:
            hero.health = 5
        pipeline.heal_party(state, 1, exclude=state.heroes[0])
        assert state.heroes[0].health == 5
        assert state.heroes[1].health == 6

    def test_raise_health_above_max(self, state):
        hero = state.heroes[0]
        assert pipeline.raise_hero_health(state, hero, 7, cap=20) == 2
        assert hero.health == 20
        assert hero.max_health == 20

    def test_raise_health_below_max(self, state):
        hero = state.heroes[0]
        hero.health = 6
        pipeline.raise_hero_health(state, hero, 7, cap=20)
        assert hero.health == 13
        assert hero.max_health == 18


# =============================================================================
# Pipeline: monster
# =============================================================================

class TestMonsterDamage:
    """Test damage and healing applied to the monster."""

    def test_damage(self, state):
        assert pipeline.apply_damage_to_monster(state, 4) == 4
        assert state.monster.health == 10

    def test_hunters_mark_from_living_holder(self, state):
        state.heroes[1].markers.add(MarkerKind.HUNTERS_MARK)
        pipeline.apply_damage_to_monster(state, 4, source=state.heroes[0])
        assert state.monster.health == 9

    def test_hunters_mark_ends_with_holder(self, state):
        tracker = state.heroes[1]
        tracker.markers.add(MarkerKind.HUNTERS_MARK)
        tracker.health = 0
        pipeline.apply_damage_to_monster(state, 4)
        assert state.monster.health == 10

    def test_half_damage_consumed(self, state):
        hero = state.heroes[0]
        hero.status_effects.add(StatusKind.HALF_DAMAGE)
        pipeline.apply_damage_to_monster(state, 5, source=hero)
        assert state.monster.health == 12
        pipeline.apply_damage_to_monster(state, 5, source=hero)
        assert state.monster.health == 7

    def test_intangible_consumed(self, state):
        state.monster.status_effects.add(StatusKind.INTANGIBLE)
        pipeline.apply_damage_to_monster(state, 6)
        assert state.monster.health == 11
        assert not state.monster.has_status(StatusKind.INTANGIBLE)

    def test_kill_is_victory(self, state):
        assert pipeline.apply_damage_to_monster(state, 40) == 14
        assert state.monster.health == 0
        assert state.phase == CombatPhase.VICTORY
        assert state.stats["monsters_defeated"] == 1

    def test_closed_after_victory(self, state):
        pipeline.apply_damage_to_monster(state, 40)
        assert pipeline.apply_damage_to_monster(state, 5) == 0
        assert pipeline.heal_monster(state, 5) == 0
        assert pipeline.heal_hero(state, state.heroes[0], 5) == 0

    def test_heal_monster_clamps(self, state):
        state.monster.health = 12
        assert pipeline.heal_monster(state, 5) == 2
        assert state.monster.health == 14

    def test_self_damage_skips_modifiers(self, state):
        state.heroes[1].markers.add(MarkerKind.HUNTERS_MARK)
        state.monster.status_effects.add(StatusKind.INTANGIBLE)
        pipeline.self_damage_monster(state, 4)
        assert state.monster.health == 10
        assert state.monster.has_status(StatusKind.INTANGIBLE)


class TestExecute:
    """Test the execute helper."""

    @pytest.mark.parametrize("health,executed", [(1, True), (4, True), (5, False)])
    def test_window(self, state, health, executed):
        state.monster.health = health
        assert pipeline.execute_monster(state, 4) is executed
        assert (state.monster.health == 0) is executed

    def test_dead_monster_not_executed(self, state):
        state.monster.health = 0
        assert not pipeline.execute_monster(state, 4)
