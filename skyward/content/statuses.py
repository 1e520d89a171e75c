"""
Marker and Status Definitions.

Markers are one-shot tokens on a hero. They are removed the moment their
trigger is checked, whether or not they fire. HUNTERS_MARK is the exception:
it is an aura that lasts while its holder lives.

Statuses are longer-lived flags. Hero statuses and the monster's
INTANGIBLE / ABILITY_BLOCKED are spent on their one use; the monster's aura
statuses (THORNS, OOZE_TRAIL, ENRAGED, EMPOWERED) last the whole encounter.
"""

from typing import Dict, FrozenSet
from enum import Enum


class MarkerKind(Enum):
    DODGE = "dodge"                    # ignore next incoming attack > 2
    HUNTERS_MARK = "hunters_mark"      # +1 to all damage dealt to the monster
    ROLL_BONUS = "roll_bonus"          # +1 on the holder's next roll
    EXTRA_ROLL = "extra_roll"          # roll again (+1) after this turn's roll
    GUARDIAN_ANGEL = "guardian_angel"  # revive at half health on death


class StatusKind(Enum):
    # Hero statuses
    HALF_DAMAGE = "half_damage"            # next damage dealt to the monster is halved
    ABILITY_DISABLED = "ability_disabled"  # next flip-match special is suppressed
    ROLL_PENALTY = "roll_penalty"          # -1 on next roll
    ROLL_BONUS = "roll_bonus"              # +1 on next roll
    SKIP_ROLL = "skip_roll"                # next roll is lost

    # Monster statuses
    THORNS = "thorns"                      # hero rolls of 1-2 reflect 2 damage
    OOZE_TRAIL = "ooze_trail"              # hero rolls of 1-2 reflect 3 damage
    ENRAGED = "enraged"                    # roll damage x1.5 on table values <= 3
    EMPOWERED = "empowered"                # roll damage +1
    INTANGIBLE = "intangible"              # next damage taken is halved
    ABILITY_BLOCKED = "ability_blocked"    # next special is negated


MONSTER_AURAS: FrozenSet[StatusKind] = frozenset({
    StatusKind.THORNS,
    StatusKind.OOZE_TRAIL,
    StatusKind.ENRAGED,
    StatusKind.EMPOWERED,
})

REFLECT_DAMAGE: Dict[StatusKind, int] = {
    StatusKind.THORNS: 2,
    StatusKind.OOZE_TRAIL: 3,
}


__all__ = ["MarkerKind", "StatusKind", "MONSTER_AURAS", "REFLECT_DAMAGE"]
