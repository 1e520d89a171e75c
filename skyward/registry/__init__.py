"""
Ability Registry for the Skyward Ascent combat engine.

Provides decorator-based registration for everything a combatant can do:
- Hero flip specials (one per HeroClass, fire once per combat)
- Hero roll effects (per HeroClass and table value)
- Monster effect kinds (one executor per EffectKind descriptor)

Usage:
    from skyward.registry import hero_roll_effect, monster_effect

    @hero_roll_effect(HeroClass.GUARDIAN, 2)
    def slash(ctx: HeroContext) -> None:
        ctx.deal_damage(2)

    @monster_effect(EffectKind.HEAL_SELF)
    def heal_self(ctx: MonsterContext, effect: MonsterEffect) -> None:
        ctx.heal_monster(effect.amount)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple
from enum import Enum
import functools

from ..calc import pipeline
from ..config import CombatConfig, DEFAULT_CONFIG
from ..content.cards import Card
from ..content.heroes import HeroClass
from ..content.monsters import EffectKind, MonsterAction, MonsterEffect, Target
from ..state.combat import CombatState, Hero, Monster
from ..state.rng import BattleRNG


# =============================================================================
# Hooks
# =============================================================================

class AbilityHook(Enum):
    FLIP_SPECIAL = "flipSpecial"
    ROLL_EFFECT = "rollEffect"
    MONSTER_EFFECT = "monsterEffect"


# =============================================================================
# Context Classes - Passed to handlers
# =============================================================================

@dataclass
class BaseContext:
    """Base context for all handlers."""
    state: CombatState
    rng: BattleRNG
    config: CombatConfig = DEFAULT_CONFIG

    @property
    def monster(self) -> Monster:
        return self.state.monster

    @property
    def heroes(self) -> List[Hero]:
        return self.state.heroes

    @property
    def living_heroes(self) -> List[Hero]:
        return self.state.living_heroes

    def log(self, event_type: str, text: str, **data) -> None:
        self.state.add_log(event_type, text, **data)

    def roll_d6(self, reason: str = "") -> int:
        """Secondary d6 roll, logged."""
        value = self.rng.dice_rng.roll_die(self.config.secondary_die)
        label = f" ({reason})" if reason else ""
        self.log("roll", f"Secondary roll{label}: {value}", value=value, die=self.config.secondary_die)
        return value

    def draw_card(self) -> Card:
        return self.state.draw_card(self.rng.shuffle_rng)

    def discard(self, card: Card) -> None:
        self.state.piles.discard_cards([card])

    def heal_monster(self, amount: int) -> int:
        return pipeline.heal_monster(self.state, amount)

    def damage_hero(self, hero: Hero, amount: int, is_attack: bool = True) -> int:
        return pipeline.apply_damage_to_hero(self.state, hero, amount, is_attack=is_attack)


@dataclass
class HeroContext(BaseContext):
    """Context for hero specials and roll effects."""
    hero: Optional[Hero] = None
    roll: int = 0              # table value after clamping
    raw_roll: int = 0          # die + modifiers before clamping
    flipped: List[Card] = field(default_factory=list)
    enchant_bonus: int = 0
    damage_dealt: int = 0

    def deal_damage(self, amount: int) -> int:
        """Hit the monster. The first hit of a roll carries the enchantment bonus."""
        if self.enchant_bonus:
            amount += self.enchant_bonus
            self.enchant_bonus = 0
        lost = pipeline.apply_damage_to_monster(self.state, amount, source=self.hero)
        self.damage_dealt += lost
        return lost

    def heal_self(self, amount: int) -> int:
        return pipeline.heal_hero(self.state, self.hero, amount)

    def heal_others(self, amount: int) -> int:
        return pipeline.heal_party(self.state, amount, exclude=self.hero)

    def damage_self(self, amount: int) -> int:
        return pipeline.apply_damage_to_hero(self.state, self.hero, amount, is_attack=False)

    def next_hero(self) -> Optional[Hero]:
        """Next living hero in turn order, or None when alone."""
        index = self.state.next_living_index(self.state.hero_index(self.hero))
        if index is None:
            return None
        return self.heroes[index]


@dataclass
class MonsterContext(BaseContext):
    """Context for monster specials and roll effects."""
    roll: int = 0              # table value; 0 for specials
    is_special: bool = False

    @property
    def current_hero(self) -> Optional[Hero]:
        """The hero the monster is facing (Hero*): the current one, or the next living."""
        state = self.state
        hero = state.current_hero
        if hero.is_alive:
            return hero
        index = state.next_living_index(state.current_hero_index)
        return state.heroes[index] if index is not None else None

    def resolve_targets(self, target: Target) -> List[Hero]:
        state = self.state
        living = state.living_heroes
        if not living:
            return []
        current = self.current_hero

        if target == Target.CURRENT_HERO:
            return [current] if current else []
        if target in (Target.NEXT_HERO, Target.LAST_HERO):
            steps = 1 if target == Target.NEXT_HERO else 2
            index = state.next_living_index(state.hero_index(current), steps)
            return [state.heroes[index]] if index is not None else []
        if target == Target.PARTY:
            return living
        if target == Target.OTHERS:
            return [h for h in living if h is not current]
        if target == Target.LOWEST_HEALTH:
            return [min(living, key=lambda h: h.health)]
        if target == Target.HIGHEST_HEALTH:
            return [max(living, key=lambda h: h.health)]
        if target == Target.RANDOM_HERO:
            return [self.rng.monster_rng.choice(living)]
        return []

    def deal_damage_to_hero(self, hero: Hero, amount: int) -> int:
        return pipeline.apply_damage_to_hero(self.state, hero, amount)


# =============================================================================
# Registry
# =============================================================================

class AbilityRegistry:
    """Handler lookup keyed by hook and entity key."""

    def __init__(self, name: str):
        self.name = name
        # handlers[hook][key] = handler_func
        self._handlers: Dict[AbilityHook, Dict[Hashable, Callable]] = {}

    def register(self, hook: AbilityHook, key: Hashable, handler: Callable) -> None:
        """Register a handler for a hook."""
        self._handlers.setdefault(hook, {})[key] = handler

    def get_handler(self, hook: AbilityHook, key: Hashable) -> Optional[Callable]:
        """Get a specific handler."""
        return self._handlers.get(hook, {}).get(key)

    def has_handler(self, hook: AbilityHook, key: Hashable) -> bool:
        """Check if a handler exists."""
        return key in self._handlers.get(hook, {})

    def list_keys(self, hook: AbilityHook) -> List[Hashable]:
        """List all keys registered for a hook."""
        return list(self._handlers.get(hook, {}).keys())


HERO_REGISTRY = AbilityRegistry("heroes")
MONSTER_REGISTRY = AbilityRegistry("monsters")


# =============================================================================
# Decorators
# =============================================================================

def hero_special(hero_class: HeroClass):
    """
    Decorator to register a hero's flip-match special.

    Usage:
        @hero_special(HeroClass.TRACKER)
        def hunters_mark(ctx: HeroContext) -> None:
            ctx.hero.markers.add(MarkerKind.HUNTERS_MARK)
    """
    def decorator(func: Callable[[HeroContext], Any]) -> Callable:
        HERO_REGISTRY.register(AbilityHook.FLIP_SPECIAL, hero_class, func)

        @functools.wraps(func)
        def wrapper(ctx: HeroContext) -> Any:
            return func(ctx)

        return wrapper
    return decorator


def hero_roll_effect(hero_class: HeroClass, *values: int):
    """Decorator to register a hero roll effect for one or more table values."""
    def decorator(func: Callable[[HeroContext], Any]) -> Callable:
        for value in values:
            HERO_REGISTRY.register(AbilityHook.ROLL_EFFECT, (hero_class, value), func)

        @functools.wraps(func)
        def wrapper(ctx: HeroContext) -> Any:
            return func(ctx)

        return wrapper
    return decorator


def monster_effect(kind: EffectKind):
    """Decorator to register the executor for a structured effect kind."""
    def decorator(func: Callable[[MonsterContext, MonsterEffect], Any]) -> Callable:
        MONSTER_REGISTRY.register(AbilityHook.MONSTER_EFFECT, kind, func)

        @functools.wraps(func)
        def wrapper(ctx: MonsterContext, effect: MonsterEffect) -> Any:
            return func(ctx, effect)

        return wrapper
    return decorator


# =============================================================================
# Execution
# =============================================================================

def execute_hero_special(ctx: HeroContext) -> bool:
    """Run the hero's flip special. Returns False if the class has none."""
    handler = HERO_REGISTRY.get_handler(AbilityHook.FLIP_SPECIAL, ctx.hero.hero_class)
    if handler is None:
        return False
    handler(ctx)
    return True


def execute_hero_roll(ctx: HeroContext) -> bool:
    """Run the roll effect for ctx.roll. Returns False when the roll does nothing."""
    handler = HERO_REGISTRY.get_handler(AbilityHook.ROLL_EFFECT, (ctx.hero.hero_class, ctx.roll))
    if handler is None:
        return False
    handler(ctx)
    return True


def execute_monster_action(ctx: MonsterContext, action: MonsterAction) -> None:
    """Run every effect descriptor of an action in order."""
    for effect in action.effects:
        if ctx.state.is_over:
            return
        executor = MONSTER_REGISTRY.get_handler(AbilityHook.MONSTER_EFFECT, effect.kind)
        if executor is None:
            raise ValueError(f"No executor registered for effect kind {effect.kind.value}")
        executor(ctx, effect)


def execute_monster_special(ctx: MonsterContext) -> None:
    """Run the monster's special effect descriptors."""
    execute_monster_action(ctx, ctx.monster.definition.special)


def get_registry_stats() -> Dict[str, Tuple[int, ...]]:
    """Count registered handlers per hook."""
    return {
        hook.value: (
            len(HERO_REGISTRY.list_keys(hook)),
            len(MONSTER_REGISTRY.list_keys(hook)),
        )
        for hook in AbilityHook
    }


# Import handler modules so their decorators register
from . import heroes as _heroes  # noqa: F401, E402
from . import monsters as _monsters  # noqa: F401, E402
