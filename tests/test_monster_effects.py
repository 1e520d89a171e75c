"""
Monster Effect Tests

Runs monster rolls and flips through real engines with scripted dice.
The default party is Bladedancer (17), Tracker (14), Guardian (18), with
the Bladedancer as the Hero* the monster faces.

Tests cover:
1. Roll table lookups, d20 clamping and the extended Vyridion table
2. Target selectors (current, next, last, party, highest/lowest health)
3. Monster auras: ENRAGED, EMPOWERED, THORNS
4. Card effects: steal, discard, draw with a cap, tap
5. Monster flips: specials on a match, ABILITY_BLOCKED, tapped cards
"""

import pytest

from skyward.content.cards import make_card
from skyward.content.items import Enchantment
from skyward.content.monsters import ALL_MONSTERS
from skyward.content.statuses import MarkerKind, StatusKind
from skyward.registry import (
    AbilityHook,
    MONSTER_REGISTRY,
    MonsterContext,
    execute_monster_special,
    get_registry_stats,
)
from skyward.state.combat import CombatPhase


def monster_roll(engine):
    outcome = engine.request_roll()
    assert outcome.accepted, outcome.error
    return outcome


def special(engine):
    """Fire the monster's special directly, as a flip match would."""
    execute_monster_special(MonsterContext(engine.state, engine.rng, engine.config, is_special=True))


def healths(engine):
    return [h.health for h in engine.state.heroes]


# =============================================================================
# Registry
# =============================================================================

class TestMonsterRegistry:
    """Test that every descriptor kind has an executor."""

    def test_every_effect_kind_registered(self):
        for definition in ALL_MONSTERS.values():
            actions = [definition.special] + list(definition.roll_table.values())
            for action in actions:
                for effect in action.effects:
                    assert MONSTER_REGISTRY.has_handler(AbilityHook.MONSTER_EFFECT, effect.kind)

    def test_registry_stats(self):
        assert get_registry_stats()["monsterEffect"][1] == 14

    def test_every_hook_has_handlers(self):
        for hook, (hero_count, monster_count) in get_registry_stats().items():
            assert hero_count + monster_count > 0, hook

    def test_roster_size(self):
        assert len(ALL_MONSTERS) == 22


# =============================================================================
# Roll table
# =============================================================================

class TestRollTable:
    """Test monster rolls against the Treant table."""

    def test_plain_hit(self, make_engine):
        engine = make_engine(rolls=[2], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert healths(engine) == [15, 14, 18]
        assert engine.state.phase == CombatPhase.HERO_FLIP
        assert engine.state.monster.rolls_made == 1

    def test_d20_clamps_to_six(self, make_engine):
        engine = make_engine(rolls=[15], phase=CombatPhase.MONSTER_ROLL)
        engine.state.heroes[0].enchantment = Enchantment.TOXIC
        monster_roll(engine)
        assert engine.state.log.contains("rolls 15: 6")
        assert engine.state.heroes[0].enchantment is None
        assert healths(engine) == [14, 11, 15]

    def test_heal_party_and_self(self, make_engine):
        engine = make_engine(rolls=[1], phase=CombatPhase.MONSTER_ROLL)
        state = engine.state
        for hero in state.heroes:
            hero.health = 10
        state.monster.health = 10
        monster_roll(engine)
        assert healths(engine) == [11, 11, 11]
        assert state.monster.health == 14

    def test_highest_health_target(self, make_engine):
        engine = make_engine(rolls=[4], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert healths(engine) == [17, 14, 14]

    def test_tap_class_card(self, make_engine):
        engine = make_engine(rolls=[5], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        hero = engine.state.heroes[0]
        assert hero.class_card.tapped
        assert hero.health == 16

    def test_empty_table_value(self, make_engine):
        engine = make_engine(monster_id="banshee", rolls=[2], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert engine.state.log.contains("does nothing this turn")
        assert healths(engine) == [17, 14, 18]

    def test_armory_bonus(self, make_engine):
        engine = make_engine(rolls=[1], phase=CombatPhase.MONSTER_ROLL, environment="jh")
        monster_roll(engine)
        assert engine.state.log.contains("rolls 1 (+1): 2")
        assert engine.state.heroes[0].health == 15

    def test_dead_current_hero_passes_to_next(self, make_engine):
        engine = make_engine(rolls=[2], phase=CombatPhase.MONSTER_ROLL)
        engine.state.heroes[0].health = 0
        monster_roll(engine)
        assert engine.state.heroes[1].health == 12

    def test_dodge(self, make_engine):
        engine = make_engine(rolls=[6], phase=CombatPhase.MONSTER_ROLL)
        engine.state.heroes[0].markers.add(MarkerKind.DODGE)
        monster_roll(engine)
        assert healths(engine) == [17, 11, 15]
        assert not engine.state.heroes[0].has_marker(MarkerKind.DODGE)


# =============================================================================
# Auras
# =============================================================================

class TestAuras:
    """Test ENRAGED and EMPOWERED on roll damage."""

    def test_enraged_low_roll(self, make_engine):
        engine = make_engine(monster_id="lunar_shade", rolls=[2], phase=CombatPhase.MONSTER_ROLL)
        engine.state.monster.status_effects.add(StatusKind.ENRAGED)
        monster_roll(engine)
        assert engine.state.heroes[0].health == 13

    def test_not_enraged(self, make_engine):
        engine = make_engine(monster_id="lunar_shade", rolls=[2], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert engine.state.heroes[0].health == 14

    def test_enraged_high_roll(self, make_engine):
        engine = make_engine(monster_id="lunar_shade", rolls=[5], phase=CombatPhase.MONSTER_ROLL)
        engine.state.monster.status_effects.add(StatusKind.ENRAGED)
        monster_roll(engine)
        assert healths(engine) == [17, 14, 12]

    def test_enrage_special(self, make_engine):
        engine = make_engine(monster_id="lunar_shade")
        special(engine)
        assert engine.state.monster.has_status(StatusKind.ENRAGED)

    def test_empowered(self, make_engine):
        engine = make_engine(monster_id="minotaur", rolls=[5], phase=CombatPhase.MONSTER_ROLL)
        engine.state.monster.status_effects.add(StatusKind.EMPOWERED)
        monster_roll(engine)
        assert healths(engine) == [13, 10, 14]

    def test_special_damage_ignores_auras(self, make_engine):
        engine = make_engine(monster_id="glimmering_sprite")
        engine.state.monster.status_effects.add(StatusKind.EMPOWERED)
        special(engine)
        assert healths(engine) == [17, 9, 18]


# =============================================================================
# Specials
# =============================================================================

class TestSpecials:
    """Test data-driven specials."""

    @pytest.mark.parametrize("health,expected", [(17, 12), (15, 10), (14, 10), (7, 3), (6, 3)])
    def test_shatter(self, make_engine, health, expected):
        engine = make_engine(monster_id="gargoyle")
        engine.state.heroes[0].health = health
        special(engine)
        assert engine.state.heroes[0].health == expected

    @pytest.mark.parametrize("health,expected", [(8, 1), (9, 4)])
    def test_melting_beam_wounded_bonus(self, make_engine, health, expected):
        engine = make_engine(monster_id="laser_turret")
        engine.state.heroes[0].health = health
        special(engine)
        assert engine.state.heroes[0].health == expected

    def test_accursed_arsenal_scales(self, make_engine):
        engine = make_engine(monster_id="cursed_knight")
        engine.state.monster.attached_cards = [make_card("2h"), make_card("5s")]
        special(engine)
        assert engine.state.heroes[0].health == 13

    def test_cosmic_resonance_discards(self, make_engine):
        engine = make_engine(monster_id="vyridion")
        state = engine.state
        for hero, label in zip(state.heroes, ("2h", "4h", "6h")):
            hero.attached_cards = [make_card(label), make_card("8d")]
        special(engine)
        assert [len(h.attached_cards) for h in state.heroes] == [1, 1, 1]
        assert len(state.piles.discard) == 3

    def test_hybrid_might(self, make_engine):
        engine = make_engine(monster_id="chimera")
        hero = engine.state.heroes[0]
        hero.attached_cards = [make_card("2h")]
        special(engine)
        assert hero.attached_cards == []
        assert hero.health == 12

    def test_glacial_freeze(self, make_engine):
        engine = make_engine(monster_id="frost_wyrm")
        special(engine)
        assert all(h.has_status(StatusKind.ROLL_PENALTY) for h in engine.state.heroes)

    def test_ooze_trail(self, make_engine):
        engine = make_engine(monster_id="abyssal_ooze")
        special(engine)
        assert engine.state.monster.has_status(StatusKind.OOZE_TRAIL)
        assert healths(engine) == [16, 13, 17]


# =============================================================================
# Multi-target and conditional actions
# =============================================================================

class TestActions:
    """Test roll actions with several effects."""

    def test_arcane_explosion(self, make_engine):
        """Bladedancer and Guardian roll even and evade; the elemental destroys itself."""
        engine = make_engine(monster_id="arcane_elemental", rolls=[6, 2, 3, 4], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert healths(engine) == [17, 7, 18]
        assert engine.state.monster.health == 0
        assert engine.is_victory()
        assert engine.get_result() is not None

    def test_killing_spree(self, make_engine):
        engine = make_engine(monster_id="shadowy_assassin", rolls=[6], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert healths(engine) == [13, 11, 16]

    def test_killing_spree_skips_dead(self, make_engine):
        engine = make_engine(monster_id="shadowy_assassin", rolls=[6], phase=CombatPhase.MONSTER_ROLL)
        engine.state.heroes[1].health = 0
        monster_roll(engine)
        assert healths(engine) == [13, 0, 15]

    def test_haunting_cry(self, make_engine):
        engine = make_engine(monster_id="banshee", rolls=[3], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert engine.state.heroes[1].has_status(StatusKind.SKIP_ROLL)
        assert engine.state.heroes[0].health == 15

    def test_vyridion_wide_table(self, make_engine):
        engine = make_engine(monster_id="vyridion", rolls=[16], phase=CombatPhase.MONSTER_ROLL)
        state = engine.state
        state.monster.health = 20
        state.heroes[1].last_roll = 1
        monster_roll(engine)
        assert all(h.has_status(StatusKind.ROLL_PENALTY) for h in state.heroes)
        assert state.monster.health == 23

    def test_vyridion_reprisal_needs_low_roll(self, make_engine):
        engine = make_engine(monster_id="vyridion", rolls=[17], phase=CombatPhase.MONSTER_ROLL)
        state = engine.state
        state.monster.health = 20
        state.heroes[1].last_roll = 3
        monster_roll(engine)
        assert state.monster.health == 20

    def test_reality_fracture(self, make_engine):
        engine = make_engine(monster_id="vyridion", rolls=[18, 1, 2, 3], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert healths(engine) == [15, 14, 16]
        assert engine.state.heroes[1].has_status(StatusKind.ROLL_BONUS)

    def test_clashing_steel(self, make_engine):
        engine = make_engine(monster_id="cursed_knight", rolls=[6], phase=CombatPhase.MONSTER_ROLL)
        state = engine.state
        stolen = make_card("4h")
        state.heroes[0].attached_cards = [stolen]
        monster_roll(engine)
        assert state.monster.attached_cards == [stolen]
        assert state.heroes[0].health == 14

    def test_gravitational_pull_takes_everything(self, make_engine):
        engine = make_engine(monster_id="apexus", rolls=[5], phase=CombatPhase.MONSTER_ROLL)
        state = engine.state
        for hero in state.heroes:
            hero.attached_cards = [make_card("2h"), make_card("4s")]
        monster_roll(engine)
        assert len(state.monster.attached_cards) == 6
        assert all(not h.attached_cards for h in state.heroes)
        assert healths(engine) == [14, 11, 15]

    def test_engulf_respects_cap(self, make_engine):
        engine = make_engine(monster_id="abyssal_ooze", rolls=[5], phase=CombatPhase.MONSTER_ROLL)
        state = engine.state
        state.monster.attached_cards = [make_card("2h"), make_card("4s")]
        monster_roll(engine)
        assert len(state.monster.attached_cards) == 3
        assert state.log.contains("cannot hold more cards")
        assert state.heroes[0].health == 14

    def test_growing_pains_scales(self, make_engine):
        engine = make_engine(monster_id="abyssal_ooze", rolls=[6], phase=CombatPhase.MONSTER_ROLL)
        monster_roll(engine)
        assert len(engine.state.monster.attached_cards) == 1
        assert engine.state.heroes[0].health == 13

    def test_inferno_taps_and_burns(self, make_engine):
        engine = make_engine(monster_id="ember_drake", rolls=[6], phase=CombatPhase.MONSTER_ROLL)
        hero = engine.state.heroes[0]
        hero.attached_cards = [make_card("2h"), make_card("4s")]
        monster_roll(engine)
        assert all(c.tapped for c in hero.attached_cards)
        assert hero.health == 11


# =============================================================================
# Monster flip
# =============================================================================

class TestMonsterFlip:
    """Test the monster's flip and its special trigger."""

    def _engine(self, make_engine, stack, tapped=False):
        engine = make_engine(phase=CombatPhase.MONSTER_FLIP)
        attached = make_card("4h")
        attached.tapped = tapped
        engine.state.monster.attached_cards = [attached]
        stack(engine.state.piles, "4d", "2c")
        return engine

    def test_match_fires_special(self, make_engine, stack):
        engine = self._engine(make_engine, stack)
        outcome = engine.request_flip()
        assert outcome.accepted
        assert engine.state.monster.has_status(StatusKind.THORNS)
        assert engine.state.log.contains("uses Thorns")
        assert engine.state.phase == CombatPhase.MONSTER_ROLL

    def test_blocked_special(self, make_engine, stack):
        engine = self._engine(make_engine, stack)
        monster = engine.state.monster
        monster.status_effects.add(StatusKind.ABILITY_BLOCKED)
        engine.request_flip()
        assert not monster.has_status(StatusKind.THORNS)
        assert not monster.has_status(StatusKind.ABILITY_BLOCKED)
        assert engine.state.heroes[0].health == 15
        assert engine.state.log.contains("is blocked")

    def test_tapped_card_untaps_without_match(self, make_engine, stack):
        engine = self._engine(make_engine, stack, tapped=True)
        engine.request_flip()
        monster = engine.state.monster
        assert not monster.attached_cards[0].tapped
        assert not monster.has_status(StatusKind.THORNS)
        assert engine.state.log.contains("No match.")

    def test_flip_cards_discarded(self, make_engine, stack):
        engine = self._engine(make_engine, stack)
        engine.request_flip()
        assert len(engine.state.piles.discard) == 2
        assert len(engine.state.last_flip) == 2
