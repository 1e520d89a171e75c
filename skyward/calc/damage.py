"""
Damage Calculator - pure arithmetic for every damage number in a fight.

No state is touched here; calc/pipeline.py applies the results.

Damage to the monster, in order:
1. Base damage (roll effect, match damage, special)
2. Flat add: hunter's mark (+1 while a marked hero lives)
3. Halving: hero HALF_DAMAGE status, then monster INTANGIBLE (floor each)
4. Clamp so health never drops below 0

Monster roll damage to heroes:
1. Base damage (+ per-card bonuses, wounded bonus)
2. ENRAGED: x1.5 (floor) on table values <= 3
3. EMPOWERED: +1
"""

from typing import Iterable

__all__ = [
    "calculate_monster_damage",
    "calculate_monster_roll_damage",
    "calculate_match_sum_hit",
    "shatter_damage",
    "mind_warp_damage",
    "clamp_health",
    "is_executable",
    "HUNTERS_MARK_BONUS",
    "ENRAGE_MULT",
    "ENRAGE_MAX_ROLL",
]


# =============================================================================
# CONSTANTS
# =============================================================================

HUNTERS_MARK_BONUS = 1
ENRAGE_MULT = 1.5
ENRAGE_MAX_ROLL = 3
EMPOWERED_BONUS = 1

MIND_WARP_MIN = 3
MIND_WARP_MAX = 8

SHATTER_HIGH = 15
SHATTER_MID = 7


# =============================================================================
# CALCULATIONS
# =============================================================================

def calculate_monster_damage(
    base: int,
    hunters_mark: bool = False,
    half_damage: bool = False,
    intangible: bool = False,
) -> int:
    """
    Damage dealt to the monster before clamping.

    Args:
        base: Raw damage from the effect
        hunters_mark: A living hero holds the hunter's mark
        half_damage: The attacking hero is under HALF_DAMAGE
        intangible: The monster is INTANGIBLE

    Returns:
        Final damage (>= 0)
    """
    if base <= 0:
        return 0
    damage = base
    if hunters_mark:
        damage += HUNTERS_MARK_BONUS
    if half_damage:
        damage //= 2
    if intangible:
        damage //= 2
    return max(0, damage)


def calculate_monster_roll_damage(
    base: int,
    roll_value: int,
    enraged: bool = False,
    empowered: bool = False,
) -> int:
    """Damage of a monster roll effect after its own buffs."""
    if base <= 0:
        return 0
    damage = base
    if enraged and roll_value <= ENRAGE_MAX_ROLL:
        damage = int(damage * ENRAGE_MULT)
    if empowered:
        damage += EMPOWERED_BONUS
    return damage


def calculate_match_sum_hit(values: Iterable[int], target: int = 10) -> bool:
    """True when the flipped card values add up to exactly the target."""
    return sum(values) == target


def shatter_damage(target_health: int) -> int:
    """Gargoyle shards: 5 at 15+ health, 4 at 7-14, 3 otherwise."""
    if target_health >= SHATTER_HIGH:
        return 5
    if target_health >= SHATTER_MID:
        return 4
    return 3


def mind_warp_damage(monster_attached: int) -> int:
    """clamp(3, attached // 2, 8)."""
    return min(MIND_WARP_MAX, max(MIND_WARP_MIN, monster_attached // 2))


def clamp_health(value: int, max_health: int) -> int:
    return max(0, min(max_health, value))


def is_executable(health: int, threshold: int) -> bool:
    """Execute window is (0, threshold]; 0 is already a kill."""
    return 0 < health <= threshold
