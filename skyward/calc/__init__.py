"""
Calculation utilities for Skyward Ascent combat.

Contains:
- Damage calculation (pure functions, no side effects)
- Damage/heal pipeline (the only writer of combatant health)
- Match and environment resolution
"""

from .damage import (
    calculate_monster_damage,
    calculate_monster_roll_damage,
    calculate_match_sum_hit,
    shatter_damage,
    mind_warp_damage,
    clamp_health,
    is_executable,
    # Constants
    HUNTERS_MARK_BONUS,
    ENRAGE_MULT,
    ENRAGE_MAX_ROLL,
)
