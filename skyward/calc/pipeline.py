"""
Damage/Heal Pipeline - the only code that changes a combatant's health.

Every function clamps into [0, max_health], writes a log entry, and runs
death bookkeeping when health reaches 0 from a positive value. Win/loss is
re-checked after every damage application. Once the fight is over every
call is a no-op returning 0.
"""

from __future__ import annotations

from typing import Optional

from ..content.statuses import MarkerKind, StatusKind
from ..state.combat import CombatPhase, CombatState, Hero
from .damage import calculate_monster_damage, clamp_health, is_executable


# =============================================================================
# Outcome
# =============================================================================

def check_outcome(state: CombatState) -> None:
    """Move to VICTORY / DEFEAT as soon as either side is down."""
    if state.is_over:
        return
    if state.monster.health <= 0:
        state.phase = CombatPhase.VICTORY
    elif not state.living_heroes:
        state.phase = CombatPhase.DEFEAT


def hunters_mark_active(state: CombatState) -> bool:
    return any(h.is_alive and h.has_marker(MarkerKind.HUNTERS_MARK) for h in state.heroes)


# =============================================================================
# Heroes
# =============================================================================

def apply_damage_to_hero(
    state: CombatState,
    hero: Hero,
    amount: int,
    is_attack: bool = True,
) -> int:
    """
    Damage a hero.

    Attacks check (and spend) the hero's dodge marker: an attack over 2 is
    ignored. Self-inflicted damage passes is_attack=False and skips it.

    Returns:
        Health actually lost
    """
    if state.is_over or hero.is_dead or amount <= 0:
        return 0

    if is_attack and hero.consume_marker(MarkerKind.DODGE):
        if amount > 2:
            state.add_log("dodge", f"{hero.name} dodges the attack!", hero=hero.id, blocked=amount)
            return 0

    prior = hero.health
    hero.health = clamp_health(prior - amount, hero.max_health)
    lost = prior - hero.health
    state.add_log(
        "damage",
        f"{hero.name} takes {lost} damage, health: {hero.health}",
        target=hero.id, amount=lost, health=hero.health,
    )

    if prior > 0 and hero.health == 0:
        _on_hero_death(state, hero)

    check_outcome(state)
    return lost


def _on_hero_death(state: CombatState, hero: Hero) -> None:
    if hero.consume_marker(MarkerKind.GUARDIAN_ANGEL):
        hero.health = max(1, hero.max_health // 2)
        state.add_log(
            "heal",
            f"A guardian angel revives {hero.name} with {hero.health} health!",
            target=hero.id, health=hero.health,
        )
        return
    state.stats["hero_deaths"] += 1
    state.add_log("death", f"{hero.name} has fallen!", target=hero.id)


def heal_hero(state: CombatState, hero: Hero, amount: int) -> int:
    """Heal a living hero. Returns health restored."""
    if state.is_over or hero.is_dead or amount <= 0:
        return 0
    prior = hero.health
    hero.health = clamp_health(prior + amount, hero.max_health)
    restored = hero.health - prior
    if restored:
        state.add_log(
            "heal",
            f"{hero.name} heals {restored}, health: {hero.health}",
            target=hero.id, amount=restored, health=hero.health,
        )
    return restored


def heal_party(state: CombatState, amount: int, exclude: Optional[Hero] = None) -> int:
    """Heal every living hero except `exclude`. Returns total restored."""
    return sum(
        heal_hero(state, hero, amount)
        for hero in state.heroes
        if hero is not exclude and hero.is_alive
    )


def raise_hero_health(state: CombatState, hero: Hero, amount: int, cap: int) -> int:
    """
    Gain health that may exceed max_health, up to `cap`.

    max_health is raised to fit so the health bound still holds.
    """
    if state.is_over or hero.is_dead or amount <= 0:
        return 0
    prior = hero.health
    target = min(prior + amount, max(cap, prior))
    hero.max_health = max(hero.max_health, target)
    hero.health = target
    gained = hero.health - prior
    state.add_log(
        "heal",
        f"{hero.name} gains {gained} health, health: {hero.health}",
        target=hero.id, amount=gained, health=hero.health,
    )
    return gained


# =============================================================================
# Monster
# =============================================================================

def apply_damage_to_monster(
    state: CombatState,
    amount: int,
    source: Optional[Hero] = None,
) -> int:
    """
    Damage the monster.

    Folds in the hunter's mark, the attacker's HALF_DAMAGE status and the
    monster's INTANGIBLE status before clamping.

    Returns:
        Health actually lost
    """
    monster = state.monster
    if state.is_over or amount <= 0:
        return 0

    half = source is not None and source.consume_status(StatusKind.HALF_DAMAGE)
    intangible = monster.consume_status(StatusKind.INTANGIBLE)
    damage = calculate_monster_damage(
        amount,
        hunters_mark=hunters_mark_active(state),
        half_damage=half,
        intangible=intangible,
    )

    prior = monster.health
    monster.health = clamp_health(prior - damage, monster.max_health)
    lost = prior - monster.health

    if prior > 0 and monster.health == 0:
        state.stats["monsters_defeated"] += 1
        state.add_log(
            "damage",
            f"{monster.name} takes {lost} damage and is defeated!",
            target=monster.id, amount=lost, health=0,
        )
    else:
        state.add_log(
            "damage",
            f"Monster takes {lost} damage, health: {monster.health}",
            target=monster.id, amount=lost, health=monster.health,
        )

    check_outcome(state)
    return lost


def self_damage_monster(state: CombatState, amount: int) -> int:
    """Damage the monster does to itself; no hero modifiers apply."""
    monster = state.monster
    if state.is_over or amount <= 0:
        return 0
    prior = monster.health
    monster.health = clamp_health(prior - amount, monster.max_health)
    lost = prior - monster.health
    state.add_log(
        "damage",
        f"{monster.name} hurts itself for {lost}, health: {monster.health}",
        target=monster.id, amount=lost, health=monster.health,
    )
    if prior > 0 and monster.health == 0:
        state.stats["monsters_defeated"] += 1
    check_outcome(state)
    return lost


def execute_monster(state: CombatState, threshold: int) -> bool:
    """Force the monster to 0 if its health is in (0, threshold]."""
    monster = state.monster
    if state.is_over or not is_executable(monster.health, threshold):
        return False
    monster.health = 0
    state.stats["monsters_defeated"] += 1
    state.add_log("damage", f"{monster.name} is executed!", target=monster.id, health=0)
    check_outcome(state)
    return True


def heal_monster(state: CombatState, amount: int) -> int:
    """Heal the monster up to its max health."""
    monster = state.monster
    if state.is_over or amount <= 0:
        return 0
    prior = monster.health
    monster.health = clamp_health(prior + amount, monster.max_health)
    restored = monster.health - prior
    state.add_log(
        "heal",
        f"{monster.name} heals {restored}, health: {monster.health}",
        target=monster.id, amount=restored, health=monster.health,
    )
    return restored
