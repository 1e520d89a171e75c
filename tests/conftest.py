"""
Shared pytest fixtures for the Skyward Ascent test suite.

This module provides reusable fixtures for:
- RNG with known seeds, and scripted dice
- Cards, heroes and monsters
- Engines parked in a given phase (make_engine)
- Full seeded encounters (seeded_combat)
"""

import pytest
import sys

# Ensure project root is in path
import os
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from skyward.combat_engine import CombatEngine, create_combat
from skyward.config import CombatConfig, DEFAULT_CONFIG
from skyward.content.cards import create_deck, make_card, split_deck
from skyward.content.heroes import HeroClass
from skyward.content.items import get_item
from skyward.content.monsters import get_monster
from skyward.state.combat import CombatPhase, CombatState, create_hero, create_monster
from skyward.state.piles import PileManager
from skyward.state.rng import BattleRNG, Random, seed_to_long


# =============================================================================
# Scripted RNG
# =============================================================================


class ScriptedRandom(Random):
    """
    Random whose die rolls come from a queue.

    Once the queue is empty it falls back to the seeded stream. With
    reverse_shuffle set, shuffle() simply reverses the list so pile order
    stays predictable.
    """

    def __init__(self, rolls=(), seed: int = 0, reverse_shuffle: bool = False):
        super().__init__(seed)
        self.rolls = list(rolls)
        self.reverse_shuffle = reverse_shuffle

    def roll_die(self, sides: int) -> int:
        if self.rolls:
            self.counter += 1
            return self.rolls.pop(0)
        return super().roll_die(sides)

    def shuffle(self, values) -> None:
        if self.reverse_shuffle:
            values.reverse()
            return
        super().shuffle(values)


def stack_peon(piles: PileManager, *labels: str) -> None:
    """
    Move the named cards to the top of the peon pile.

    The first label is drawn first. Cards are taken from peon or discard so
    the total card count is unchanged.
    """
    for label in reversed(labels):
        wanted = make_card(label)
        for pile in (piles.peon, piles.discard):
            card = next((c for c in pile if c.rank == wanted.rank and c.suit == wanted.suit), None)
            if card is not None:
                pile.remove(card)
                piles.peon.append(card)
                break
        else:
            raise ValueError(f"{label} is not in the peon or discard pile")


def build_engine(
    classes=("bladedancer", "tracker", "guardian"),
    monster_id: str = "treant",
    monster_health=None,
    rolls=(),
    treasure_rolls=(),
    phase: CombatPhase = CombatPhase.HERO_ROLL,
    environment: str = "jc",
    room: str = "club",
    inventory=(),
    config: CombatConfig = DEFAULT_CONFIG,
    reverse_shuffle: bool = False,
    seed: int = 0,
) -> CombatEngine:
    """
    Build an engine directly in `phase`, skipping setup.

    Class cards are the first card of each class rank (clubs, so every
    hero is black). The environment card comes out of the royalty pile and
    is already revealed.
    """
    royalty, peon, _jokers = split_deck(create_deck())

    heroes = []
    for name in classes:
        hero_class = HeroClass.parse(name)
        card = next(c for c in peon if c.rank == hero_class.class_rank)
        peon.remove(card)
        heroes.append(create_hero(hero_class, card))

    piles = PileManager(peon=peon, royalty=royalty)
    env_card = None
    if environment:
        wanted = make_card(environment)
        env_card = next(c for c in royalty if c.rank == wanted.rank and c.suit == wanted.suit)
        royalty.remove(env_card)
        piles.environment = [env_card]

    state = CombatState(
        monster=create_monster(get_monster(monster_id), monster_health),
        heroes=heroes,
        piles=piles,
        room=room,
        phase=phase,
        inventory=[get_item(i) for i in inventory],
    )
    if phase != CombatPhase.CHOOSE_TURN_ORDER:
        state.environment = env_card

    rng = BattleRNG(
        seed=seed,
        dice_rng=ScriptedRandom(rolls, seed),
        shuffle_rng=ScriptedRandom((), seed + 1, reverse_shuffle=reverse_shuffle),
        treasure_rng=ScriptedRandom(treasure_rolls, seed + 3),
    )
    return CombatEngine(state, rng=rng, config=config)


# =============================================================================
# RNG Fixtures
# =============================================================================


@pytest.fixture
def rng_seed_42():
    """RNG initialized with seed 42 for deterministic tests."""
    return Random(42)


@pytest.fixture
def battle_rng_abc():
    """BattleRNG initialized with seed 'ABC'."""
    return BattleRNG(seed_to_long("ABC"))


@pytest.fixture
def scripted():
    """Factory for ScriptedRandom."""
    return ScriptedRandom


# =============================================================================
# Card / Combatant Fixtures
# =============================================================================


@pytest.fixture
def card():
    """Factory: card("7h") -> Card."""
    return make_card


@pytest.fixture
def bladedancer():
    return create_hero(HeroClass.BLADEDANCER, make_card("3h"))


@pytest.fixture
def guardian():
    return create_hero(HeroClass.GUARDIAN, make_card("9s"))


@pytest.fixture
def treant():
    return create_monster(get_monster("treant"))


@pytest.fixture
def small_piles():
    """Piles with two peon cards and three discarded cards."""
    return PileManager(
        peon=[make_card("2c"), make_card("4d")],
        discard=[make_card("6h"), make_card("8s"), make_card("10c")],
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def make_engine():
    """Factory for engines parked in a phase; see build_engine."""
    return build_engine


@pytest.fixture
def stack():
    """stack(piles, "4h", "6d"): the next draws are 4h then 6d."""
    return stack_peon


@pytest.fixture
def seeded_combat():
    """A full encounter from a fresh adventure, waiting for a turn order."""
    return create_combat(("bladedancer", "tracker", "guardian"), room="club", tier=1, seed=42)
