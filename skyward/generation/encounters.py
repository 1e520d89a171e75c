"""
Skyward Ascent - Encounter Generation

Key mechanics:
1. Room kind picks the monster pool:
   - club: a normal fight, category index biased upward by tier
   - spade: an elite fight, biased harder, monster at a fixed 20 max health
   - spade+: the boss pool
   - final: the final-boss pool
2. The environment pile is the four royalty cards of the rank tied to the
   class left out of the party, with a club card forced to the top.
3. An adventure starts by splitting the deck, dealing one class card per
   chosen class from the peon pile and creating the heroes.

RNG Usage:
- monster_rng picks the category index and the monster within it
- shuffle_rng shuffles the piles and picks class cards
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union
from enum import Enum

from ..config import CombatConfig, DEFAULT_CONFIG
from ..content.cards import Card, Suit, create_deck, split_deck
from ..content.heroes import ENVIRONMENT_RANK_FOR_CLASS_RANK, HeroClass
from ..content.monsters import (
    CATEGORY_ORDER,
    MONSTERS_BY_CATEGORY,
    MonsterCategory,
    MonsterDefinition,
)
from ..state.combat import Hero, create_hero
from ..state.piles import PileManager
from ..state.rng import Random


class RoomKind(Enum):
    CLUB = "club"
    SPADE = "spade"
    SPADE_PLUS = "spade+"
    FINAL = "final"

    @property
    def is_elite(self) -> bool:
        return self == RoomKind.SPADE

    @classmethod
    def parse(cls, text: Union[str, 'RoomKind']) -> 'RoomKind':
        if isinstance(text, RoomKind):
            return text
        try:
            return cls(str(text).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown room kind: {text!r}") from None


# =============================================================================
# Monster selection
# =============================================================================

def normal_category_index(rng: Random, tier: int) -> int:
    """index = min(rand(0..3) + (tier - 1) // 2, 3)"""
    return min(rng.random_int(3) + (tier - 1) // 2, 3)


def elite_category_index(rng: Random, tier: int) -> int:
    """index = min(rand(0..2) + 1 + (tier - 1), 3)"""
    return min(rng.random_int(2) + 1 + (tier - 1), 3)


def select_monster(
    rng: Random,
    room: Union[str, RoomKind],
    tier: int = 1,
    config: CombatConfig = DEFAULT_CONFIG,
) -> Tuple[MonsterDefinition, Optional[int]]:
    """
    Pick the monster for a room.

    Args:
        rng: Monster RNG stream
        room: Room kind (club / spade / spade+ / final)
        tier: Floor tier, 1 or higher

    Returns:
        (definition, max_health override or None)
    """
    room = RoomKind.parse(room)
    if tier < 1:
        raise ValueError(f"Tier must be at least 1, got {tier}")

    if room == RoomKind.SPADE_PLUS:
        return rng.choice(MONSTERS_BY_CATEGORY[MonsterCategory.BOSS]), None
    if room == RoomKind.FINAL:
        return rng.choice(MONSTERS_BY_CATEGORY[MonsterCategory.FINAL]), None

    if room.is_elite:
        category = CATEGORY_ORDER[elite_category_index(rng, tier)]
        return rng.choice(MONSTERS_BY_CATEGORY[category]), config.elite_max_health

    category = CATEGORY_ORDER[normal_category_index(rng, tier)]
    return rng.choice(MONSTERS_BY_CATEGORY[category]), None


# =============================================================================
# Environment pile
# =============================================================================

def build_environment_pile(royalty: List[Card], unused_class: HeroClass) -> List[Card]:
    """
    Pull the unused class's royalty rank out of the royalty pile.

    The returned pile has a club card on top (the last element).
    """
    rank = ENVIRONMENT_RANK_FOR_CLASS_RANK[unused_class.class_rank]
    pile = [c for c in royalty if c.rank == rank]
    royalty[:] = [c for c in royalty if c.rank != rank]
    piles = PileManager(environment=pile)
    piles.force_environment_top(Suit.CLUB)
    return piles.environment


# =============================================================================
# Adventure setup
# =============================================================================

@dataclass
class AdventureSetup:
    """Piles and party at the start of a climb."""
    piles: PileManager
    heroes: List[Hero]
    unused_class: HeroClass
    jokers: List[Card] = field(default_factory=list)


def setup_adventure(
    rng: Random,
    classes: Sequence[Union[str, HeroClass]],
    config: CombatConfig = DEFAULT_CONFIG,
) -> AdventureSetup:
    """
    Split and shuffle a fresh deck, deal class cards and build the party.

    Each class card is the first card of the class rank in the shuffled
    peon pile, so its suit (and the hero's specialization) is random.
    """
    chosen = [HeroClass.parse(c) if isinstance(c, str) else c for c in classes]
    if len(chosen) != config.party_size:
        raise ValueError(f"A party needs {config.party_size} heroes, got {len(chosen)}")
    if len(set(chosen)) != len(chosen):
        raise ValueError("Each hero class may appear only once")

    royalty, peon, jokers = split_deck(create_deck())
    rng.shuffle(royalty)
    rng.shuffle(peon)

    heroes: List[Hero] = []
    for hero_class in chosen:
        card = next(c for c in peon if c.rank == hero_class.class_rank)
        peon.remove(card)
        heroes.append(create_hero(hero_class, card))

    unused = next((c for c in HeroClass if c not in chosen), None)
    if unused is None:
        raise ValueError("One hero class must sit out to pick the environment pile")
    environment = build_environment_pile(royalty, unused)
    piles = PileManager(peon=peon, environment=environment, royalty=royalty)
    return AdventureSetup(piles=piles, heroes=heroes, unused_class=unused, jokers=jokers)


__all__ = [
    "RoomKind",
    "normal_category_index",
    "elite_category_index",
    "select_monster",
    "build_environment_pile",
    "AdventureSetup",
    "setup_adventure",
]
