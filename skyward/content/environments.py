"""
Environment Definitions - passive rule sets keyed by the environment card's suit.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from enum import Enum

from .cards import Card, Suit


class EnvironmentKind(Enum):
    TRAINING_GROUNDS = "training_grounds"
    ANCIENT_LIBRARY = "ancient_library"
    MYSTICAL_ARMORY = "mystical_armory"
    ELEMENTAL_CHAMBER = "elemental_chamber"


@dataclass(frozen=True)
class EnvironmentData:
    kind: EnvironmentKind
    name: str
    description: str


ENVIRONMENTS: Dict[Suit, EnvironmentData] = {
    Suit.CLUB: EnvironmentData(
        EnvironmentKind.TRAINING_GROUNDS,
        "Training Grounds",
        "No special effect.",
    ),
    Suit.DIAMOND: EnvironmentData(
        EnvironmentKind.ANCIENT_LIBRARY,
        "Ancient Library",
        "All heroes and the monster draw an extra attached card.",
    ),
    Suit.HEART: EnvironmentData(
        EnvironmentKind.MYSTICAL_ARMORY,
        "Mystical Armory",
        "Heroes get +2 on their first roll. The monster gets +1 on its first three rolls.",
    ),
    Suit.SPADE: EnvironmentData(
        EnvironmentKind.ELEMENTAL_CHAMBER,
        "Elemental Chamber",
        "The monster gains 3 health (max 20). Red heroes draw an extra attached card. "
        "Black heroes get +1 on all rolls.",
    ),
}


def get_environment(card: Optional[Card]) -> Optional[EnvironmentData]:
    """Rules for an environment card; None for no card or a joker."""
    if card is None or card.suit is None:
        return None
    return ENVIRONMENTS[card.suit]


__all__ = ["EnvironmentKind", "EnvironmentData", "ENVIRONMENTS", "get_environment"]
