"""
Hero Class Definitions.

Each class is bound to a peon rank: the party's class card of that rank is
what the hero's flip-match special keys on.

    Rank  Class        Health  Red spec      Black spec
    3     Bladedancer  17      Runeblade     Shadowblade
    5     Manipulator  17      Illusionist   Timebender
    7     Tracker      14      Beastmaster   Huntress
    9     Guardian     18      Warden        Sentinel

The rank of the class that sits out of the party picks the royalty rank
used for the environment pile (3 -> J, 5 -> Q, 7 -> K, 9 -> A).

Roll table entries here are display data (name and rules text). The
mechanics live in registry/heroes.py, keyed by (HeroClass, roll value).
"""

from dataclasses import dataclass
from typing import Dict, Tuple
from enum import Enum

from .cards import Rank


class HeroClass(Enum):
    """Hero archetypes."""
    BLADEDANCER = "bladedancer"
    MANIPULATOR = "manipulator"
    TRACKER = "tracker"
    GUARDIAN = "guardian"

    @property
    def class_rank(self) -> Rank:
        return HERO_CLASSES[self].class_rank

    @property
    def display_name(self) -> str:
        return HERO_CLASSES[self].name

    @classmethod
    def parse(cls, text: str) -> 'HeroClass':
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown hero class: {text}") from None


@dataclass(frozen=True)
class RollTableEntry:
    """Display data for one roll value."""
    name: str
    text: str


@dataclass(frozen=True)
class HeroClassData:
    name: str
    class_rank: Rank
    health: int
    red_spec: str
    black_spec: str
    ability_name: str
    ability_text: str
    roll_table: Dict[int, RollTableEntry]


BLADEDANCER = HeroClassData(
    name="Bladedancer",
    class_rank=Rank.THREE,
    health=17,
    red_spec="Runeblade",
    black_spec="Shadowblade",
    ability_name="Blade Steal",
    ability_text="Steal the monster's first attached card.",
    roll_table={
        1: RollTableEntry("Stab", "Deal 1 damage."),
        2: RollTableEntry("Strike", "Deal 1 damage."),
        3: RollTableEntry("Backstab", "Deal 2 damage. Deal 4 instead if a flipped card matched an attached card."),
        4: RollTableEntry("Eviscerate", "Deal 3 damage. Roll a d6: on 5+ deal 6 instead."),
        5: RollTableEntry("Evasive Maneuver", "Deal 5 damage and dodge the next attack over 2 damage."),
        6: RollTableEntry("Dismantle", "Deal 4 damage and tap one of the monster's attached cards."),
    },
)

MANIPULATOR = HeroClassData(
    name="Manipulator",
    class_rank=Rank.FIVE,
    health=17,
    red_spec="Illusionist",
    black_spec="Timebender",
    ability_name="Time Warp",
    ability_text="Roll again this turn with +1.",
    roll_table={
        1: RollTableEntry("Psychic Blast", "Deal 1 damage."),
        3: RollTableEntry("Telekinesis", "Roll a d6: 1-3 deal 2 damage, 4-6 deal 4 damage."),
        4: RollTableEntry("Mind Flay", "Deal 3 damage. On a follow-up roll of 3-4, deal 2 more and roll again."),
        5: RollTableEntry("Mind Warp", "The monster hurts itself for half its attached cards (min 3, max 8)."),
        6: RollTableEntry("Psychic Vortex", "Deal 5 damage, heal 2, and heal the rest of the party 1."),
    },
)

TRACKER = HeroClassData(
    name="Tracker",
    class_rank=Rank.SEVEN,
    health=14,
    red_spec="Beastmaster",
    black_spec="Huntress",
    ability_name="Hunter's Mark",
    ability_text="While the Tracker lives, all damage to the monster is increased by 1.",
    roll_table={
        1: RollTableEntry("Snipe", "Deal 2 damage."),
        3: RollTableEntry("Precision Shot", "Deal 3 damage."),
        4: RollTableEntry("Animal Companion", "Draw a pet card (attach it if holding fewer than 2), then deal 2 damage."),
        5: RollTableEntry("Supportive Fire", "Deal 3 damage. The next hero gets +1 on their next roll."),
        6: RollTableEntry("Aimed Shot", "Charge, then release for 6 damage."),
    },
)

GUARDIAN = HeroClassData(
    name="Guardian",
    class_rank=Rank.NINE,
    health=18,
    red_spec="Warden",
    black_spec="Sentinel",
    ability_name="Bulwark",
    ability_text="Gain 7 health (up to 20 in combat).",
    roll_table={
        1: RollTableEntry("Hack", "Deal 1 damage."),
        2: RollTableEntry("Slash", "Deal 2 damage."),
        3: RollTableEntry("Protective Strike", "Deal 2 damage and heal the rest of the party 1."),
        4: RollTableEntry("Vital Rend", "Deal 3 damage and heal 2."),
        5: RollTableEntry("Sacrificial Strike", "Deal 6 damage and take 2 damage."),
        6: RollTableEntry("Execute", "Deal 4 damage. A monster left at 4 or less is executed."),
    },
)


HERO_CLASSES: Dict[HeroClass, HeroClassData] = {
    HeroClass.BLADEDANCER: BLADEDANCER,
    HeroClass.MANIPULATOR: MANIPULATOR,
    HeroClass.TRACKER: TRACKER,
    HeroClass.GUARDIAN: GUARDIAN,
}

# Royalty rank of the environment pile, keyed by the rank of the class left out
ENVIRONMENT_RANK_FOR_CLASS_RANK: Dict[Rank, Rank] = {
    Rank.THREE: Rank.JACK,
    Rank.FIVE: Rank.QUEEN,
    Rank.SEVEN: Rank.KING,
    Rank.NINE: Rank.ACE,
}

HERO_TABLE_DOMAIN: Tuple[int, int] = (1, 6)


def get_class_for_rank(rank: Rank) -> HeroClass:
    for hero_class, data in HERO_CLASSES.items():
        if data.class_rank == rank:
            return hero_class
    raise ValueError(f"No hero class uses rank {rank.value}")


def get_roll_entry(hero_class: HeroClass, value: int):
    """Display entry for a roll value, or None when the roll does nothing."""
    return HERO_CLASSES[hero_class].roll_table.get(value)


__all__ = [
    "HeroClass", "HeroClassData", "RollTableEntry",
    "HERO_CLASSES", "ENVIRONMENT_RANK_FOR_CLASS_RANK", "HERO_TABLE_DOMAIN",
    "get_class_for_rank", "get_roll_entry",
]
