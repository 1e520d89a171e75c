"""
Monster Effect Executors.

One executor per EffectKind. Monster specials and roll tables are plain
data (content/monsters.py); execute_monster_action walks an action's
descriptors and hands each to the executor registered here.

Roll damage (not special damage) picks up the monster's ENRAGED and
EMPOWERED auras.
"""

from __future__ import annotations

from typing import List

from . import monster_effect, MonsterContext
from ..calc import pipeline
from ..calc.damage import calculate_monster_roll_damage, shatter_damage
from ..content.monsters import ALL_CARDS, Condition, EffectKind, MonsterEffect
from ..content.statuses import StatusKind
from ..state.combat import Hero

LOW_ROLL = 3


def _targets(ctx: MonsterContext, effect: MonsterEffect) -> List[Hero]:
    return ctx.resolve_targets(effect.target)


def _card_count(effect: MonsterEffect, available: int) -> int:
    if effect.amount == ALL_CARDS:
        return available
    return min(available, max(1, effect.amount))


def _roll_modified(ctx: MonsterContext, amount: int) -> int:
    """Apply the monster's damage auras to roll damage."""
    if ctx.is_special:
        return amount
    monster = ctx.monster
    return calculate_monster_roll_damage(
        amount,
        ctx.roll,
        enraged=monster.has_status(StatusKind.ENRAGED),
        empowered=monster.has_status(StatusKind.EMPOWERED),
    )


def _evades(ctx: MonsterContext, hero: Hero) -> bool:
    value = ctx.roll_d6(f"{hero.name} evades")
    if value % 2 == 0:
        ctx.log("dodge", f"{hero.name} evades the attack!", hero=hero.id, value=value)
        return True
    return False


# =============================================================================
# Damage
# =============================================================================

@monster_effect(EffectKind.DAMAGE)
def damage(ctx: MonsterContext, effect: MonsterEffect) -> None:
    monster = ctx.monster
    for hero in _targets(ctx, effect):
        if ctx.state.is_over:
            return
        if hero.is_dead:
            continue
        amount = effect.amount
        amount += effect.per_monster_card * len(monster.attached_cards)
        amount += effect.per_target_card * len(hero.attached_cards)
        if effect.wounded_bonus and hero.health * 2 < hero.max_health:
            amount += effect.wounded_bonus
        amount = _roll_modified(ctx, amount)
        if amount <= 0:
            continue
        if effect.evade_on_even and _evades(ctx, hero):
            continue
        ctx.deal_damage_to_hero(hero, amount)


@monster_effect(EffectKind.SHATTER)
def shatter(ctx: MonsterContext, effect: MonsterEffect) -> None:
    for hero in _targets(ctx, effect):
        amount = _roll_modified(ctx, shatter_damage(hero.health))
        ctx.log("special", f"Rock shards fly at {hero.name}!", hero=hero.id, amount=amount)
        ctx.deal_damage_to_hero(hero, amount)


@monster_effect(EffectKind.SELF_DAMAGE)
def self_damage(ctx: MonsterContext, effect: MonsterEffect) -> None:
    pipeline.self_damage_monster(ctx.state, effect.amount)


@monster_effect(EffectKind.FRACTURE)
def fracture(ctx: MonsterContext, effect: MonsterEffect) -> None:
    """Each target rolls a d6: odd takes the damage, even gains +1 on its next roll."""
    for hero in _targets(ctx, effect):
        if ctx.state.is_over:
            return
        value = ctx.roll_d6(f"{hero.name} resists the fracture")
        if value % 2:
            ctx.deal_damage_to_hero(hero, effect.amount)
        else:
            hero.status_effects.add(StatusKind.ROLL_BONUS)
            ctx.log("special", f"{hero.name} is steadied by the fracture (+1 next roll).", hero=hero.id)


# =============================================================================
# Healing
# =============================================================================

@monster_effect(EffectKind.HEAL_SELF)
def heal_self(ctx: MonsterContext, effect: MonsterEffect) -> None:
    if effect.condition == Condition.ANY_HERO_ROLLED_LOW:
        rolled_low = any(
            h.last_roll is not None and h.last_roll < LOW_ROLL
            for h in ctx.heroes
        )
        if not rolled_low:
            return
    ctx.heal_monster(effect.amount)


@monster_effect(EffectKind.HEAL_PARTY)
def heal_party(ctx: MonsterContext, effect: MonsterEffect) -> None:
    for hero in _targets(ctx, effect):
        pipeline.heal_hero(ctx.state, hero, effect.amount)


# =============================================================================
# Cards
# =============================================================================

@monster_effect(EffectKind.DRAW_ATTACHED)
def draw_attached(ctx: MonsterContext, effect: MonsterEffect) -> None:
    monster = ctx.monster
    for _ in range(effect.amount):
        if effect.cap and len(monster.attached_cards) >= effect.cap:
            ctx.log("cards", f"{monster.name} cannot hold more cards.", count=len(monster.attached_cards))
            return
        card = ctx.draw_card()
        monster.attached_cards.append(card)
        ctx.log("cards", f"{monster.name} draws {card.label} as an attached card.", card=card.label)


@monster_effect(EffectKind.STEAL_ATTACHED)
def steal_attached(ctx: MonsterContext, effect: MonsterEffect) -> None:
    monster = ctx.monster
    for hero in _targets(ctx, effect):
        for _ in range(_card_count(effect, len(hero.attached_cards))):
            card = hero.attached_cards.pop(0)
            monster.attached_cards.append(card)
            ctx.log("cards", f"{monster.name} takes {card.label} from {hero.name}.", hero=hero.id, card=card.label)


@monster_effect(EffectKind.DISCARD_ATTACHED)
def discard_attached(ctx: MonsterContext, effect: MonsterEffect) -> None:
    for hero in _targets(ctx, effect):
        for _ in range(_card_count(effect, len(hero.attached_cards))):
            card = hero.attached_cards.pop(0)
            ctx.discard(card)
            ctx.log("cards", f"{hero.name} discards {card.label}.", hero=hero.id, card=card.label)


@monster_effect(EffectKind.TAP_CLASS_CARD)
def tap_class_card(ctx: MonsterContext, effect: MonsterEffect) -> None:
    for hero in _targets(ctx, effect):
        if hero.class_card is not None and not hero.class_card.tapped:
            hero.class_card.tapped = True
            ctx.log("special", f"{hero.name}'s class card is tapped.", hero=hero.id)


@monster_effect(EffectKind.TAP_ATTACHED)
def tap_attached(ctx: MonsterContext, effect: MonsterEffect) -> None:
    for hero in _targets(ctx, effect):
        untapped = hero.untapped_attached
        for card in untapped:
            card.tapped = True
        if untapped:
            ctx.log("special", f"{hero.name}'s attached cards are tapped.", hero=hero.id, count=len(untapped))


# =============================================================================
# Statuses
# =============================================================================

@monster_effect(EffectKind.APPLY_STATUS)
def apply_status(ctx: MonsterContext, effect: MonsterEffect) -> None:
    for hero in _targets(ctx, effect):
        hero.status_effects.add(effect.status)
        ctx.log("status", f"{hero.name} is afflicted: {effect.status.value}", hero=hero.id, status=effect.status.value)


@monster_effect(EffectKind.APPLY_MONSTER_STATUS)
def apply_monster_status(ctx: MonsterContext, effect: MonsterEffect) -> None:
    monster = ctx.monster
    monster.status_effects.add(effect.status)
    ctx.log("status", f"{monster.name} gains {effect.status.value}", status=effect.status.value)


@monster_effect(EffectKind.STRIP_ENCHANTMENTS)
def strip_enchantments(ctx: MonsterContext, effect: MonsterEffect) -> None:
    for hero in _targets(ctx, effect):
        if hero.enchantment is not None:
            ctx.log("status", f"{hero.name}'s {hero.enchantment.value} enchantment fades.", hero=hero.id)
            hero.enchantment = None
