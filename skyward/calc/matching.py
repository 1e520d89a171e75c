"""
Match & Environment Resolver.

Match damage priority (first rule that applies wins, else 0):
1. Monster: a flipped card matches an untapped monster attached card.
   Normally that fires the monster's special instead; this damage is what
   a negated special deals to the current hero.
2. Tapped hero: a flipped card matches the class card rank -> 2
3. Hero: the two flipped values sum to exactly 10 -> 2
4. Hero: a flipped card matches an untapped attached card whose rank is
   not the class rank -> 1

Environment rules are keyed by the environment card's suit and are
applied once, when the card is flipped. Roll bonuses stay in effect for
the rest of the encounter.
"""

from __future__ import annotations

from typing import List, Optional

from ..config import CombatConfig, DEFAULT_CONFIG
from ..content.cards import Card, CardColor, Rank, Suit
from ..content.environments import get_environment
from ..state.combat import CombatState, Combatant, Hero, Monster
from ..state.rng import Random
from .damage import calculate_match_sum_hit


MATCH_DAMAGE_TAPPED = 2
MATCH_DAMAGE_SUM = 2
MATCH_DAMAGE_ATTACHED = 1
MATCH_SUM_TARGET = 10


# =============================================================================
# Rank matching
# =============================================================================

def rank_matches(flipped: List[Card], cards: List[Card]) -> List[Card]:
    """Cards in `cards` (untapped only) sharing a rank with any flipped card."""
    ranks = {c.rank for c in flipped}
    return [c for c in cards if not c.tapped and c.rank in ranks]


def class_card_matched(hero: Hero, flipped: List[Card]) -> bool:
    """A flipped card matches the hero's (untapped) class card."""
    card = hero.class_card
    if card is None or card.tapped:
        return False
    return any(c.rank == card.rank for c in flipped)


def attached_card_matched(hero: Hero, flipped: List[Card]) -> bool:
    """A flipped card matches one of the hero's untapped attached cards."""
    return bool(rank_matches(flipped, hero.attached_cards))


def calculate_match_damage(
    source: Combatant,
    flipped: List[Card],
    config: CombatConfig = DEFAULT_CONFIG,
) -> int:
    """
    Match damage for a flip, by the priority rules above.

    For a monster source the caller decides between special and damage;
    this returns the damage a match is worth.
    """
    if isinstance(source, Monster):
        if rank_matches(flipped, source.attached_cards):
            return config.match_damage
        return 0

    if not isinstance(source, Hero):
        return 0

    class_rank: Optional[Rank] = source.class_card.rank if source.class_card else None

    if source.is_tapped and class_rank is not None:
        if any(c.rank == class_rank for c in flipped):
            return MATCH_DAMAGE_TAPPED

    if calculate_match_sum_hit((c.value for c in flipped), MATCH_SUM_TARGET):
        return MATCH_DAMAGE_SUM

    for card in rank_matches(flipped, source.attached_cards):
        if card.rank != class_rank:
            return MATCH_DAMAGE_ATTACHED

    return 0


# =============================================================================
# Environment
# =============================================================================

def apply_environment(
    state: CombatState,
    card: Card,
    rng: Random,
    config: CombatConfig = DEFAULT_CONFIG,
) -> None:
    """Apply the one-time effects of a freshly flipped environment card."""
    env = get_environment(card)
    state.environment = card
    if env is None:
        state.add_log("environment", f"The environment is {card.label}. Nothing happens.")
        return

    state.add_log(
        "environment",
        f"Environment: {env.name} ({card.label}). {env.description}",
        environment=env.kind.value,
        suit=card.suit.value,
    )

    if card.suit == Suit.DIAMOND:
        for hero in state.living_heroes:
            _attach_extra(state, hero, rng)
        _attach_extra(state, state.monster, rng)

    elif card.suit == Suit.SPADE:
        monster = state.monster
        cap = config.monster_health_cap
        monster.max_health = max(monster.max_health, min(monster.max_health + config.elemental_monster_health, cap))
        monster.health = min(monster.health + config.elemental_monster_health, monster.max_health)
        state.add_log(
            "heal",
            f"{monster.name} draws elemental power, health: {monster.health}",
            target=monster.id, health=monster.health,
        )
        for hero in state.living_heroes:
            if hero.color == CardColor.RED:
                _attach_extra(state, hero, rng)


def _attach_extra(state: CombatState, combatant: Combatant, rng: Random) -> None:
    card = state.draw_card(rng)
    combatant.attached_cards.append(card)
    state.add_log("cards", f"{combatant.name} draws an extra attached card: {card.label}", target=combatant.id)


def hero_roll_bonus(state: CombatState, hero: Hero, config: CombatConfig = DEFAULT_CONFIG) -> int:
    """Environment bonus on a hero roll. Call before marking the hero as having rolled."""
    suit = state.environment_suit
    bonus = 0
    if suit == Suit.HEART and not hero.has_rolled:
        bonus += config.armory_hero_bonus
    if suit == Suit.SPADE and hero.color == CardColor.BLACK:
        bonus += config.elemental_black_bonus
    return bonus


def monster_roll_bonus(state: CombatState, config: CombatConfig = DEFAULT_CONFIG) -> int:
    """Environment bonus on a monster roll. Call before counting the roll."""
    if state.environment_suit == Suit.HEART and state.monster.rolls_made < config.armory_monster_rolls:
        return config.armory_monster_bonus
    return 0
