"""
Playing Card Definitions - the 54-card adventure deck.

The deck is split at adventure start:
- Royalty pile: J, Q, K, A (monsters and the environment pile come from here)
- Peon pile: 2-10 (the shared draw pile; class cards are dealt from it)
- Jokers sit outside both piles

Card values for the sum-to-ten match rule: number cards at face value,
J/Q/K count 10, Ace counts 1, Joker counts 0.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from enum import Enum


class Suit(Enum):
    """Card suits. Red = heart/diamond, black = club/spade."""
    CLUB = "club"
    DIAMOND = "diamond"
    HEART = "heart"
    SPADE = "spade"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEART, Suit.DIAMOND)


class CardColor(Enum):
    RED = "red"
    BLACK = "black"


class Rank(Enum):
    """Card ranks in deck order."""
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"
    JOKER = "Joker"

    @property
    def value_points(self) -> int:
        """Numeric value used by the sum-to-ten rule."""
        return RANK_VALUES[self]

    @property
    def is_royalty(self) -> bool:
        return self in ROYALTY_RANKS

    @property
    def is_peon(self) -> bool:
        return self in PEON_RANKS

    @classmethod
    def parse(cls, text: str) -> 'Rank':
        """Parse "7", "10", "q", "Joker"..."""
        for rank in cls:
            if rank.value.lower() == text.strip().lower():
                return rank
        raise ValueError(f"Unknown rank: {text}")


SUIT_SYMBOLS: Dict[Suit, str] = {
    Suit.CLUB: "♣",
    Suit.DIAMOND: "♦",
    Suit.HEART: "♥",
    Suit.SPADE: "♠",
}

PEON_RANKS: Tuple[Rank, ...] = (
    Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX,
    Rank.SEVEN, Rank.EIGHT, Rank.NINE, Rank.TEN,
)

ROYALTY_RANKS: Tuple[Rank, ...] = (Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE)

RANK_VALUES: Dict[Rank, int] = {
    Rank.TWO: 2, Rank.THREE: 3, Rank.FOUR: 4, Rank.FIVE: 5, Rank.SIX: 6,
    Rank.SEVEN: 7, Rank.EIGHT: 8, Rank.NINE: 9, Rank.TEN: 10,
    Rank.JACK: 10, Rank.QUEEN: 10, Rank.KING: 10,
    Rank.ACE: 1,
    Rank.JOKER: 0,
}


@dataclass(eq=False)
class Card:
    """
    A single physical card.

    Equality is identity: two Cards with the same rank and suit are still
    different objects, and a card only ever lives in one pile at a time.
    """
    rank: Rank
    suit: Optional[Suit] = None  # None for jokers
    tapped: bool = False

    @property
    def value(self) -> int:
        return self.rank.value_points

    @property
    def color(self) -> Optional[CardColor]:
        if self.suit is None:
            return None
        return CardColor.RED if self.suit.is_red else CardColor.BLACK

    @property
    def label(self) -> str:
        if self.suit is None:
            return self.rank.value
        return f"{self.rank.value}{self.suit.symbol}"

    def to_dict(self) -> dict:
        return {
            "rank": self.rank.value,
            "suit": self.suit.value if self.suit else None,
            "tapped": self.tapped,
        }

    def __repr__(self) -> str:
        return f"Card({self.label}{', tapped' if self.tapped else ''})"


def make_card(text: str) -> Card:
    """Build a card from shorthand like "7h", "10s", "qd", "joker"."""
    text = text.strip()
    if text.lower() == "joker":
        return Card(Rank.JOKER)
    suit_code = text[-1].lower()
    suits = {"c": Suit.CLUB, "d": Suit.DIAMOND, "h": Suit.HEART, "s": Suit.SPADE}
    if suit_code not in suits:
        raise ValueError(f"Unknown suit in card shorthand: {text}")
    return Card(Rank.parse(text[:-1]), suits[suit_code])


def create_deck() -> List[Card]:
    """Create the full 54-card deck in a fixed order."""
    deck = [Card(rank, suit) for suit in Suit for rank in PEON_RANKS + ROYALTY_RANKS]
    deck.append(Card(Rank.JOKER))
    deck.append(Card(Rank.JOKER))
    return deck


def split_deck(deck: List[Card]) -> Tuple[List[Card], List[Card], List[Card]]:
    """Split a deck into (royalty, peon, jokers)."""
    royalty = [c for c in deck if c.rank.is_royalty]
    peon = [c for c in deck if c.rank.is_peon]
    jokers = [c for c in deck if c.rank == Rank.JOKER]
    return royalty, peon, jokers


def count_ranks(cards: List[Card]) -> Dict[Rank, int]:
    """Count how many cards of each rank appear."""
    counts: Dict[Rank, int] = {}
    for card in cards:
        counts[card.rank] = counts.get(card.rank, 0) + 1
    return counts


__all__ = [
    "Suit", "Rank", "CardColor", "Card",
    "SUIT_SYMBOLS", "PEON_RANKS", "ROYALTY_RANKS", "RANK_VALUES",
    "make_card", "create_deck", "split_deck", "count_ranks",
]
