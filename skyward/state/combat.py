"""
Combat State for Skyward Ascent encounters.

One CombatState exists per encounter. It is created when a monster room is
entered, mutated only by the CombatEngine and the functions it calls, and
summarized into a CombatResult when the fight ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Union
from enum import Enum

from ..content.cards import Card, CardColor
from ..content.heroes import HeroClass, HERO_CLASSES, HERO_TABLE_DOMAIN
from ..content.items import Enchantment, ItemDescriptor
from ..content.monsters import MonsterDefinition
from ..content.statuses import MarkerKind, StatusKind
from .piles import PileManager
from .rng import Random


# =============================================================================
# Phases
# =============================================================================


class CombatPhase(Enum):
    """Encounter phases, in resolution order."""
    SETUP = "SETUP"
    CHOOSE_TURN_ORDER = "CHOOSE_TURN_ORDER"
    ATTACH_CARDS = "ATTACH_CARDS"
    FLIP_ENVIRONMENT = "FLIP_ENVIRONMENT"
    MONSTER_FLIP = "MONSTER_FLIP"
    MONSTER_ROLL = "MONSTER_ROLL"
    HERO_FLIP = "HERO_FLIP"
    HERO_ROLL = "HERO_ROLL"
    VICTORY = "VICTORY"
    DEFEAT = "DEFEAT"

    @property
    def is_terminal(self) -> bool:
        return self in (CombatPhase.VICTORY, CombatPhase.DEFEAT)


class TurnOrder(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def step(self) -> int:
        return 1 if self == TurnOrder.RIGHT else -1

    @classmethod
    def parse(cls, text: Union[str, 'TurnOrder']) -> 'TurnOrder':
        if isinstance(text, TurnOrder):
            return text
        try:
            return cls(str(text).strip().lower())
        except ValueError:
            raise ValueError(f"Turn order must be 'left' or 'right', got {text!r}") from None


# =============================================================================
# Combat Log
# =============================================================================


@dataclass
class CombatLogEntry:
    """A single combat log entry (also the presentation event)."""
    round: int
    event_type: str
    text: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round,
            "event": self.event_type,
            "text": self.text,
            "data": dict(self.data),
        }


# Presentation layers consume log entries as their event stream
CombatEvent = CombatLogEntry


@dataclass
class CombatLog:
    """Ordered, replayable record of everything that happened."""
    entries: List[CombatLogEntry] = field(default_factory=list)

    def log(self, round_num: int, event_type: str, text: str, **data) -> CombatLogEntry:
        """Add a log entry."""
        entry = CombatLogEntry(round=round_num, event_type=event_type, text=text, data=data)
        self.entries.append(entry)
        return entry

    def get_events(self, event_type: str) -> List[CombatLogEntry]:
        """Get all events of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]

    def texts(self) -> List[str]:
        return [e.text for e in self.entries]

    def contains(self, fragment: str) -> bool:
        return any(fragment in e.text for e in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


# =============================================================================
# Combatants
# =============================================================================


@dataclass(eq=False)
class Combatant:
    """Shared state of heroes and monsters."""
    id: str
    name: str
    health: int
    max_health: int
    attached_cards: List[Card] = field(default_factory=list)
    is_tapped: bool = False
    markers: Set[MarkerKind] = field(default_factory=set)
    status_effects: Set[StatusKind] = field(default_factory=set)

    @property
    def is_dead(self) -> bool:
        return self.health <= 0

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def untapped_attached(self) -> List[Card]:
        return [c for c in self.attached_cards if not c.tapped]

    def has_marker(self, kind: MarkerKind) -> bool:
        return kind in self.markers

    def consume_marker(self, kind: MarkerKind) -> bool:
        """Remove a marker; True if it was present."""
        if kind in self.markers:
            self.markers.discard(kind)
            return True
        return False

    def has_status(self, kind: StatusKind) -> bool:
        return kind in self.status_effects

    def consume_status(self, kind: StatusKind) -> bool:
        """Remove a status; True if it was present."""
        if kind in self.status_effects:
            self.status_effects.discard(kind)
            return True
        return False


@dataclass(eq=False)
class Hero(Combatant):
    hero_class: HeroClass = HeroClass.BLADEDANCER
    class_card: Optional[Card] = None
    has_rolled: bool = False
    last_roll: Optional[int] = None
    enchantment: Optional[Enchantment] = None

    @property
    def color(self) -> Optional[CardColor]:
        return self.class_card.color if self.class_card else None

    @property
    def specialization(self) -> str:
        data = HERO_CLASSES[self.hero_class]
        return data.red_spec if self.color == CardColor.RED else data.black_spec

    @property
    def roll_table(self):
        return HERO_CLASSES[self.hero_class].roll_table

    @property
    def table_domain(self):
        return HERO_TABLE_DOMAIN

    def reset_for_encounter(self) -> None:
        """
        Clear per-combat flags. Health and enchantment carry over; health
        raised past the class maximum in the last fight does not.
        """
        self.max_health = HERO_CLASSES[self.hero_class].health
        self.health = min(self.health, self.max_health)
        self.is_tapped = False
        self.has_rolled = False
        self.last_roll = None
        self.markers.clear()
        self.status_effects.clear()
        if self.class_card is not None:
            self.class_card.tapped = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "class": self.hero_class.value,
            "specialization": self.specialization,
            "health": self.health,
            "max_health": self.max_health,
            "class_card": self.class_card.to_dict() if self.class_card else None,
            "attached_cards": [c.to_dict() for c in self.attached_cards],
            "is_tapped": self.is_tapped,
            "markers": sorted(m.value for m in self.markers),
            "status_effects": sorted(s.value for s in self.status_effects),
            "enchantment": self.enchantment.value if self.enchantment else None,
        }


@dataclass(eq=False)
class Monster(Combatant):
    definition: Optional[MonsterDefinition] = None
    rolls_made: int = 0

    @property
    def roll_table(self):
        return self.definition.roll_table

    @property
    def die_sides(self) -> int:
        return self.definition.die_sides

    @property
    def table_domain(self):
        return self.definition.table_domain

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.definition.category.value,
            "health": self.health,
            "max_health": self.max_health,
            "attached_cards": [c.to_dict() for c in self.attached_cards],
            "status_effects": sorted(s.value for s in self.status_effects),
            "special": self.definition.special.name,
        }


def create_hero(
    hero_class: HeroClass,
    class_card: Card,
    hero_id: Optional[str] = None,
    health: Optional[int] = None,
) -> Hero:
    """Create a hero at full (or given) health."""
    data = HERO_CLASSES[hero_class]
    return Hero(
        id=hero_id or hero_class.value,
        name=data.name,
        health=data.health if health is None else health,
        max_health=data.health,
        hero_class=hero_class,
        class_card=class_card,
    )


def create_monster(definition: MonsterDefinition, max_health: Optional[int] = None) -> Monster:
    """Create a monster at full health (elite rooms override max_health)."""
    health = definition.health if max_health is None else max_health
    return Monster(
        id=definition.monster_id,
        name=definition.name,
        health=health,
        max_health=health,
        definition=definition,
    )


# =============================================================================
# Combat State
# =============================================================================


@dataclass
class CombatState:
    """Everything one encounter needs. Owned by the engine."""
    monster: Monster
    heroes: List[Hero]
    piles: PileManager = field(default_factory=PileManager)
    room: str = "club"
    tier: int = 1

    phase: CombatPhase = CombatPhase.SETUP
    turn_order: TurnOrder = TurnOrder.RIGHT
    current_hero_index: int = 0
    round_count: int = 0
    environment: Optional[Card] = None

    log: CombatLog = field(default_factory=CombatLog)
    rewards: Optional[Any] = None
    inventory: List[ItemDescriptor] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=lambda: {
        "hero_deaths": 0,
        "monsters_defeated": 0,
        "items_used": 0,
        "combat_rounds": 0,
    })

    # Turn bookkeeping
    heroes_acted: List[int] = field(default_factory=list)
    last_flip: List[Card] = field(default_factory=list)
    redeal_attempts: int = 0
    bonus_gold: int = 0

    # -------------------------------------------------------------------------
    # Convenience accessors
    # -------------------------------------------------------------------------

    @property
    def monster_health(self) -> int:
        return self.monster.health

    @property
    def monster_max_health(self) -> int:
        return self.monster.max_health

    @property
    def is_over(self) -> bool:
        return self.phase.is_terminal

    @property
    def living_heroes(self) -> List[Hero]:
        return [h for h in self.heroes if h.is_alive]

    @property
    def current_hero(self) -> Hero:
        return self.heroes[self.current_hero_index]

    @property
    def environment_suit(self):
        return self.environment.suit if self.environment else None

    def get_hero(self, ref: Union[int, str, Hero, None]) -> Optional[Hero]:
        """Resolve a hero by index, id, or object."""
        if ref is None:
            return None
        if isinstance(ref, Hero):
            return ref if ref in self.heroes else None
        if isinstance(ref, int) and not isinstance(ref, bool):
            if 0 <= ref < len(self.heroes):
                return self.heroes[ref]
            return None
        for hero in self.heroes:
            if hero.id == ref:
                return hero
        return None

    def hero_index(self, hero: Hero) -> int:
        return self.heroes.index(hero)

    def next_living_index(self, start: int, steps: int = 1) -> Optional[int]:
        """
        Index of the steps-th living hero after start in turn order.

        Returns None when no other living hero exists.
        """
        count = len(self.heroes)
        found = 0
        index = start
        for _ in range(count * max(steps, 1)):
            index = (index + self.turn_order.step) % count
            if index == start:
                break
            if self.heroes[index].is_alive:
                found += 1
                if found == steps:
                    return index
        return None

    # -------------------------------------------------------------------------
    # Logging and cards
    # -------------------------------------------------------------------------

    def add_log(self, event_type: str, text: str, **data) -> CombatLogEntry:
        return self.log.log(self.round_count, event_type, text, **data)

    def draw_card(self, rng: Random) -> Card:
        """Draw from the peon pile, logging a discard reshuffle when one happens."""
        before = self.piles.reshuffles
        card = self.piles.draw(rng)
        if self.piles.reshuffles != before:
            self.add_log(
                "reshuffle",
                "Peon pile exhausted. Reshuffling discard pile.",
                peon=len(self.piles.peon) + 1,
            )
        return card

    @property
    def attached_count(self) -> int:
        return len(self.monster.attached_cards) + sum(len(h.attached_cards) for h in self.heroes)

    @property
    def total_cards(self) -> int:
        """Cards in play: peon + discard + environment + every attached card."""
        return self.piles.total_cards + self.attached_count
