"""
Card & Pile Manager - shared draw pile, discard pile and environment pile.

All piles are ordered lists whose LAST element is the top card, so draws
are list.pop(). Cards only ever move between piles; nothing here creates
or copies a card.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional
import logging

from ..content.cards import Card, Suit
from .rng import Random


logger = logging.getLogger(__name__)


class DeckExhaustedError(RuntimeError):
    """Both the peon pile and the discard pile are empty."""


@dataclass
class PileManager:
    """Owns the piles shared by every combatant in an encounter."""
    peon: List[Card] = field(default_factory=list)
    discard: List[Card] = field(default_factory=list)
    environment: List[Card] = field(default_factory=list)
    royalty: List[Card] = field(default_factory=list)

    # Number of discard -> peon reshuffles performed
    reshuffles: int = 0

    # =========================================================================
    # Draw pile
    # =========================================================================

    def draw(self, rng: Random) -> Card:
        """
        Draw the top peon card.

        An empty peon pile is refilled from the shuffled discard pile first.
        """
        if not self.peon:
            self.reshuffle_discard_into_peon(rng)
        return self.peon.pop()

    def draw_many(self, count: int, rng: Random) -> List[Card]:
        return [self.draw(rng) for _ in range(count)]

    def reshuffle_discard_into_peon(self, rng: Random) -> None:
        if not self.discard:
            raise DeckExhaustedError("Peon and discard piles are both empty")
        logger.debug("Reshuffling %d discarded cards into the peon pile", len(self.discard))
        self.peon.extend(self.discard)
        self.discard.clear()
        for card in self.peon:
            card.tapped = False
        rng.shuffle(self.peon)
        self.reshuffles += 1

    def shuffle_peon(self, rng: Random) -> None:
        rng.shuffle(self.peon)

    def return_to_peon(self, cards: Iterable[Card]) -> None:
        """Put cards back on top of the peon pile."""
        for card in cards:
            card.tapped = False
            self.peon.append(card)

    def discard_cards(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.discard.append(card)

    # =========================================================================
    # Environment pile
    # =========================================================================

    @property
    def environment_top(self) -> Optional[Card]:
        return self.environment[-1] if self.environment else None

    def rotate_environment(self) -> Optional[Card]:
        """Move the top environment card to the bottom and return it."""
        if not self.environment:
            return None
        card = self.environment.pop()
        self.environment.insert(0, card)
        return card

    def force_environment_top(self, suit: Suit) -> bool:
        """Move the first card of the given suit to the top of the environment pile."""
        for i, card in enumerate(self.environment):
            if card.suit == suit:
                self.environment.append(self.environment.pop(i))
                return True
        return False

    # =========================================================================
    # Accounting
    # =========================================================================

    @property
    def total_cards(self) -> int:
        """Cards in peon + discard + environment (royalty is not in play)."""
        return len(self.peon) + len(self.discard) + len(self.environment)

    def copy(self) -> 'PileManager':
        """Shallow copy: new lists holding the same card objects."""
        return PileManager(
            peon=list(self.peon),
            discard=list(self.discard),
            environment=list(self.environment),
            royalty=list(self.royalty),
            reshuffles=self.reshuffles,
        )
