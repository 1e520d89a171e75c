"""
Skyward Ascent - Reward Generation

Implements the post-victory rewards:
- Gold: max(min_gold, d20 * gold_multiplier) for monsters with a multiplier,
  min_gold otherwise; elite rooms add a flat bonus
- Elite rooms roll a d6 on the tier 1 elite table; a 6 cascades into the
  tier 2 table, whose 6 cascades into tier 3
- Boss and final rooms roll the boss tables the same way (two tiers)

All rolls use the treasure RNG stream for seed reproducibility.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import CombatConfig, DEFAULT_CONFIG
from ..content.monsters import MonsterDefinition
from ..state.rng import Random
from .encounters import RoomKind


GOLD_DIE = 20
TABLE_DIE = 6


# =============================================================================
# Reward tables
# =============================================================================

@dataclass(frozen=True)
class RewardEntry:
    """One row of a reward table."""
    text: str
    gold: int = 0
    items: Tuple[str, ...] = ()
    party_heal: int = 0
    revive: bool = False
    cascade: bool = False  # roll on the next table instead


ELITE_TIER_1: Dict[int, RewardEntry] = {
    1: RewardEntry("5 gold", gold=5),
    2: RewardEntry("25 gold", gold=25),
    3: RewardEntry("Minor Health Potion", items=("minor_potion",)),
    4: RewardEntry("Toxic Scroll", items=("toxic_scroll",)),
    5: RewardEntry("Common Weapon", items=("common_weapon",)),
    6: RewardEntry("Roll on the tier 2 table", cascade=True),
}

ELITE_TIER_2: Dict[int, RewardEntry] = {
    1: RewardEntry("Fiery Scroll", items=("fiery_scroll",)),
    2: RewardEntry("Heal the party for 10", party_heal=10),
    3: RewardEntry("Weapon Upgrade", items=("weapon_upgrade",)),
    4: RewardEntry("Crusader Scroll", items=("crusader_scroll",)),
    5: RewardEntry("Major Health Potion", items=("major_potion",)),
    6: RewardEntry("Roll on the tier 3 table", cascade=True),
}

ELITE_TIER_3: Dict[int, RewardEntry] = {
    1: RewardEntry("50 gold", gold=50),
    2: RewardEntry("Noxious Scroll", items=("noxious_scroll",)),
    3: RewardEntry("Fortune Scroll", items=("fortune_scroll",)),
    4: RewardEntry("Guardian Angel", items=("guardian_angel",)),
    5: RewardEntry("Heal the party for 15", party_heal=15),
    6: RewardEntry("75 gold and a Major Health Potion", gold=75, items=("major_potion",)),
}

BOSS_TIER_1: Dict[int, RewardEntry] = {
    1: RewardEntry("25 gold", gold=25),
    2: RewardEntry("50 gold", gold=50),
    3: RewardEntry("Major Health Potion", items=("major_potion",)),
    4: RewardEntry("Fiery Scroll", items=("fiery_scroll",)),
    5: RewardEntry("Heal the party for 15", party_heal=15),
    6: RewardEntry("Roll on the tier 2 table", cascade=True),
}

BOSS_TIER_2: Dict[int, RewardEntry] = {
    1: RewardEntry("Guardian Angel", items=("guardian_angel",)),
    2: RewardEntry("Revive a fallen hero", revive=True),
    3: RewardEntry("75 gold", gold=75),
    4: RewardEntry("Crusader Scroll", items=("crusader_scroll",)),
    5: RewardEntry("Fortune Scroll", items=("fortune_scroll",)),
    6: RewardEntry("100 gold and a Major Health Potion", gold=100, items=("major_potion",)),
}

ELITE_TABLES: List[Dict[int, RewardEntry]] = [ELITE_TIER_1, ELITE_TIER_2, ELITE_TIER_3]
BOSS_TABLES: List[Dict[int, RewardEntry]] = [BOSS_TIER_1, BOSS_TIER_2]


# =============================================================================
# Rewards
# =============================================================================

@dataclass
class Rewards:
    """Everything a won encounter pays out."""
    gold: int = 0
    items: List[str] = field(default_factory=list)
    party_heal: int = 0
    revive: bool = False
    # (table tier, die value, entry text) for every table roll
    rolls: List[Tuple[int, int, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gold": self.gold,
            "items": list(self.items),
            "party_heal": self.party_heal,
            "revive": self.revive,
            "rolls": [
                {"tier": tier, "roll": value, "reward": text}
                for tier, value, text in self.rolls
            ],
        }


def generate_gold(
    rng: Random,
    definition: MonsterDefinition,
    room: Union[str, RoomKind] = RoomKind.CLUB,
    config: CombatConfig = DEFAULT_CONFIG,
) -> int:
    """Gold for defeating a monster in the given room."""
    room = RoomKind.parse(room)
    min_gold = definition.min_gold or config.default_gold
    if definition.gold_multiplier:
        gold = max(min_gold, rng.roll_die(GOLD_DIE) * definition.gold_multiplier)
    else:
        gold = min_gold
    if room.is_elite:
        gold += config.elite_gold_bonus
    return max(0, gold)


def roll_reward_tables(
    rng: Random,
    tables: List[Dict[int, RewardEntry]],
    rewards: Rewards,
) -> None:
    """Roll down a cascade of tables, adding each result to rewards."""
    for tier, table in enumerate(tables, start=1):
        value = rng.roll_die(TABLE_DIE)
        entry = table[value]
        rewards.rolls.append((tier, value, entry.text))
        if entry.cascade:
            continue
        rewards.gold += entry.gold
        rewards.items.extend(entry.items)
        rewards.party_heal += entry.party_heal
        rewards.revive = rewards.revive or entry.revive
        return


def tables_for_room(room: RoomKind) -> Optional[List[Dict[int, RewardEntry]]]:
    if room.is_elite:
        return ELITE_TABLES
    if room in (RoomKind.SPADE_PLUS, RoomKind.FINAL):
        return BOSS_TABLES
    return None


def generate_rewards(
    rng: Random,
    definition: MonsterDefinition,
    room: Union[str, RoomKind] = RoomKind.CLUB,
    config: CombatConfig = DEFAULT_CONFIG,
) -> Rewards:
    """
    Generate all rewards for a victory.

    Args:
        rng: Treasure RNG stream
        definition: The defeated monster
        room: Room kind the fight took place in

    Returns:
        Rewards with gold, items, heals and the table rolls made
    """
    room = RoomKind.parse(room)
    rewards = Rewards(gold=generate_gold(rng, definition, room, config))
    tables = tables_for_room(room)
    if tables is not None:
        roll_reward_tables(rng, tables, rewards)
    return rewards


__all__ = [
    "RewardEntry",
    "ELITE_TIER_1", "ELITE_TIER_2", "ELITE_TIER_3",
    "BOSS_TIER_1", "BOSS_TIER_2",
    "ELITE_TABLES", "BOSS_TABLES",
    "Rewards",
    "generate_gold",
    "roll_reward_tables",
    "tables_for_room",
    "generate_rewards",
]
