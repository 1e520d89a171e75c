"""
Static game content: cards, hero classes, monsters, environments, items
and statuses.
"""

from .cards import Suit, Rank, Card, CardColor, make_card, create_deck, split_deck
from .heroes import HeroClass, HERO_CLASSES, get_class_for_rank
from .environments import EnvironmentKind, ENVIRONMENTS, get_environment
from .items import ItemType, Enchantment, ItemDescriptor, ITEMS, get_item
from .monsters import (
    MonsterCategory,
    MonsterDefinition,
    MonsterAction,
    MonsterEffect,
    EffectKind,
    Target,
    ALL_MONSTERS,
    MONSTERS_BY_CATEGORY,
    get_monster,
)
from .statuses import MarkerKind, StatusKind
