"""
Hero Ability Implementations.

Flip specials and roll tables for the four hero classes, registered by
HeroClass (and roll value). Table text lives in content/heroes.py; this
module holds the mechanics.

Organized by class for easier maintenance.
"""

from __future__ import annotations

from . import hero_roll_effect, hero_special, HeroContext
from ..calc import pipeline
from ..calc.damage import mind_warp_damage
from ..calc.matching import attached_card_matched
from ..content.heroes import HeroClass
from ..content.statuses import MarkerKind


EVISCERATE_CRIT_ROLL = 5
MIND_FLAY_CHAIN = (3, 4)
TELEKINESIS_LOW = 3


# =============================================================================
# Flip specials
# =============================================================================

@hero_special(HeroClass.BLADEDANCER)
def blade_steal(ctx: HeroContext) -> None:
    """Take the monster's first attached card."""
    monster = ctx.monster
    if not monster.attached_cards:
        ctx.log("special", f"{ctx.hero.name} finds nothing to steal.", hero=ctx.hero.id)
        return
    card = monster.attached_cards.pop(0)
    ctx.hero.attached_cards.append(card)
    ctx.log("special", f"{ctx.hero.name} steals {card.label} from {monster.name}!", hero=ctx.hero.id, card=card.label)


@hero_special(HeroClass.MANIPULATOR)
def time_warp(ctx: HeroContext) -> None:
    ctx.hero.markers.add(MarkerKind.EXTRA_ROLL)
    ctx.log("special", f"{ctx.hero.name} bends time and will roll again this turn.", hero=ctx.hero.id)


@hero_special(HeroClass.TRACKER)
def hunters_mark(ctx: HeroContext) -> None:
    ctx.hero.markers.add(MarkerKind.HUNTERS_MARK)
    ctx.log("special", f"{ctx.hero.name} marks {ctx.monster.name} for the hunt.", hero=ctx.hero.id)


@hero_special(HeroClass.GUARDIAN)
def bulwark(ctx: HeroContext) -> None:
    ctx.log("special", f"{ctx.hero.name} raises a bulwark.", hero=ctx.hero.id)
    pipeline.raise_hero_health(
        ctx.state, ctx.hero, ctx.config.guardian_special_heal, ctx.config.guardian_health_cap,
    )


# =============================================================================
# Bladedancer
# =============================================================================

@hero_roll_effect(HeroClass.BLADEDANCER, 1, 2)
def stab(ctx: HeroContext) -> None:
    ctx.deal_damage(1)


@hero_roll_effect(HeroClass.BLADEDANCER, 3)
def backstab(ctx: HeroContext) -> None:
    if attached_card_matched(ctx.hero, ctx.flipped):
        ctx.log("special", "Backstab finds an opening!", hero=ctx.hero.id)
        ctx.deal_damage(4)
    else:
        ctx.deal_damage(2)


@hero_roll_effect(HeroClass.BLADEDANCER, 4)
def eviscerate(ctx: HeroContext) -> None:
    if ctx.roll_d6("Eviscerate") >= EVISCERATE_CRIT_ROLL:
        ctx.log("critical", "Critical hit! Double damage (6)", hero=ctx.hero.id, amount=6)
        ctx.deal_damage(6)
    else:
        ctx.deal_damage(3)


@hero_roll_effect(HeroClass.BLADEDANCER, 5)
def evasive_maneuver(ctx: HeroContext) -> None:
    ctx.deal_damage(5)
    ctx.hero.markers.add(MarkerKind.DODGE)
    ctx.log("special", f"{ctx.hero.name} is ready to dodge.", hero=ctx.hero.id)


@hero_roll_effect(HeroClass.BLADEDANCER, 6)
def dismantle(ctx: HeroContext) -> None:
    ctx.deal_damage(4)
    for card in ctx.monster.attached_cards:
        if not card.tapped:
            card.tapped = True
            ctx.log("special", f"{ctx.hero.name} dismantles {card.label}.", card=card.label)
            break


# =============================================================================
# Manipulator
# =============================================================================

@hero_roll_effect(HeroClass.MANIPULATOR, 1)
def psychic_blast(ctx: HeroContext) -> None:
    ctx.deal_damage(1)


@hero_roll_effect(HeroClass.MANIPULATOR, 3)
def telekinesis(ctx: HeroContext) -> None:
    value = ctx.roll_d6("Telekinesis")
    ctx.deal_damage(2 if value <= TELEKINESIS_LOW else 4)


@hero_roll_effect(HeroClass.MANIPULATOR, 4)
def mind_flay(ctx: HeroContext) -> None:
    """3 damage, then keep flaying for 2 while follow-ups land on 3-4."""
    ctx.deal_damage(3)
    for _ in range(ctx.config.max_follow_up_chain):
        if ctx.state.is_over:
            return
        value = ctx.roll_d6("Mind Flay")
        if value not in MIND_FLAY_CHAIN:
            return
        ctx.log("special", "Mind Flay strikes again!", hero=ctx.hero.id)
        ctx.deal_damage(2)


@hero_roll_effect(HeroClass.MANIPULATOR, 5)
def mind_warp(ctx: HeroContext) -> None:
    amount = mind_warp_damage(len(ctx.monster.attached_cards))
    ctx.log("special", f"{ctx.monster.name}'s mind is warped!", amount=amount)
    ctx.deal_damage(amount)


@hero_roll_effect(HeroClass.MANIPULATOR, 6)
def psychic_vortex(ctx: HeroContext) -> None:
    ctx.deal_damage(5)
    ctx.heal_self(2)
    ctx.heal_others(1)


# =============================================================================
# Tracker
# =============================================================================

@hero_roll_effect(HeroClass.TRACKER, 1)
def snipe(ctx: HeroContext) -> None:
    ctx.deal_damage(2)


@hero_roll_effect(HeroClass.TRACKER, 3)
def precision_shot(ctx: HeroContext) -> None:
    ctx.deal_damage(3)


@hero_roll_effect(HeroClass.TRACKER, 4)
def animal_companion(ctx: HeroContext) -> None:
    hero = ctx.hero
    pet = ctx.draw_card()
    if len(hero.attached_cards) < ctx.config.pet_capacity:
        hero.attached_cards.append(pet)
        ctx.log("cards", f"{hero.name} tames a pet: {pet.label}", hero=hero.id, card=pet.label)
    else:
        ctx.discard(pet)
        ctx.log("cards", f"{hero.name} has no room for {pet.label}.", hero=hero.id, card=pet.label)
    ctx.deal_damage(2)


@hero_roll_effect(HeroClass.TRACKER, 5)
def supportive_fire(ctx: HeroContext) -> None:
    ctx.deal_damage(3)
    ally = ctx.next_hero()
    if ally is not None and ally.hero_class != HeroClass.TRACKER:
        ally.markers.add(MarkerKind.ROLL_BONUS)
        ctx.log("special", f"{ally.name} gets +1 on their next roll.", hero=ally.id)


@hero_roll_effect(HeroClass.TRACKER, 6)
def aimed_shot(ctx: HeroContext) -> None:
    ctx.log("special", f"{ctx.hero.name} draws back for an aimed shot...", hero=ctx.hero.id)
    ctx.deal_damage(6)


# =============================================================================
# Guardian
# =============================================================================

@hero_roll_effect(HeroClass.GUARDIAN, 1)
def hack(ctx: HeroContext) -> None:
    ctx.deal_damage(1)


@hero_roll_effect(HeroClass.GUARDIAN, 2)
def slash(ctx: HeroContext) -> None:
    ctx.deal_damage(2)


@hero_roll_effect(HeroClass.GUARDIAN, 3)
def protective_strike(ctx: HeroContext) -> None:
    ctx.deal_damage(2)
    ctx.heal_others(1)


@hero_roll_effect(HeroClass.GUARDIAN, 4)
def vital_rend(ctx: HeroContext) -> None:
    ctx.deal_damage(3)
    ctx.heal_self(2)


@hero_roll_effect(HeroClass.GUARDIAN, 5)
def sacrificial_strike(ctx: HeroContext) -> None:
    ctx.deal_damage(6)
    ctx.damage_self(2)


@hero_roll_effect(HeroClass.GUARDIAN, 6)
def execute(ctx: HeroContext) -> None:
    ctx.deal_damage(4)
    pipeline.execute_monster(ctx.state, ctx.config.execute_threshold)
