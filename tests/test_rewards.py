"""
Reward Generation Tests

Tests cover:
1. Gold: multiplier monsters, flat min_gold, the elite bonus
2. Elite table cascades (tier 1 -> 2 -> 3)
3. Boss tables and the revive entry
4. Rooms that roll no tables
"""

import pytest

from skyward.content.monsters import get_monster
from skyward.generation.encounters import RoomKind
from skyward.generation.rewards import (
    BOSS_TABLES,
    ELITE_TABLES,
    Rewards,
    generate_gold,
    generate_rewards,
    roll_reward_tables,
    tables_for_room,
)


# =============================================================================
# Gold
# =============================================================================

class TestGold:
    """Test gold generation."""

    def test_multiplier_floor(self, scripted):
        assert generate_gold(scripted([1]), get_monster("abyssal_ooze")) == 20

    def test_multiplier(self, scripted):
        assert generate_gold(scripted([10]), get_monster("abyssal_ooze")) == 70

    def test_flat(self, scripted):
        rng = scripted()
        assert generate_gold(rng, get_monster("treant")) == 25
        assert rng.counter == 0

    def test_elite_bonus(self, scripted):
        assert generate_gold(scripted(), get_monster("treant"), "spade") == 40

    def test_boss_room_no_bonus(self, scripted):
        assert generate_gold(scripted(), get_monster("behemoth"), "spade+") == 75


# =============================================================================
# Tables
# =============================================================================

class TestRewardTables:
    """Test cascading table rolls."""

    def test_tables_for_room(self):
        assert tables_for_room(RoomKind.CLUB) is None
        assert tables_for_room(RoomKind.SPADE) is ELITE_TABLES
        assert tables_for_room(RoomKind.SPADE_PLUS) is BOSS_TABLES
        assert tables_for_room(RoomKind.FINAL) is BOSS_TABLES

    def test_single_roll(self, scripted):
        rewards = Rewards()
        roll_reward_tables(scripted([3]), ELITE_TABLES, rewards)
        assert rewards.items == ["minor_potion"]
        assert rewards.rolls == [(1, 3, "Minor Health Potion")]

    def test_double_cascade(self, scripted):
        rewards = generate_rewards(scripted([6, 6, 1]), get_monster("treant"), "spade")
        assert rewards.gold == 40 + 50
        assert [tier for tier, _, _ in rewards.rolls] == [1, 2, 3]

    def test_tier_two_party_heal(self, scripted):
        rewards = generate_rewards(scripted([6, 2]), get_monster("treant"), "spade")
        assert rewards.party_heal == 10
        assert rewards.gold == 40

    def test_tier_three_top(self, scripted):
        rewards = generate_rewards(scripted([6, 6, 6]), get_monster("treant"), "spade")
        assert rewards.gold == 40 + 75
        assert rewards.items == ["major_potion"]

    def test_boss_revive(self, scripted):
        rewards = generate_rewards(scripted([6, 2]), get_monster("behemoth"), "spade+")
        assert rewards.revive
        assert rewards.gold == 75

    def test_final_room_uses_boss_tables(self, scripted):
        rewards = generate_rewards(scripted([1]), get_monster("vyridion"), "final")
        assert rewards.gold == 150 + 25

    def test_club_room_rolls_nothing(self, scripted):
        rng = scripted([6, 6, 6])
        rewards = generate_rewards(rng, get_monster("treant"), "club")
        assert rewards.rolls == []
        assert rewards.items == []
        assert rng.rolls == [6, 6, 6]

    def test_to_dict(self, scripted):
        data = generate_rewards(scripted([6, 2]), get_monster("behemoth"), "spade+").to_dict()
        assert data["revive"] is True
        assert data["rolls"][0] == {"tier": 1, "roll": 6, "reward": "Roll on the tier 2 table"}

    @pytest.mark.parametrize("tables", [ELITE_TABLES, BOSS_TABLES])
    def test_tables_complete(self, tables):
        for table in tables:
            assert sorted(table) == [1, 2, 3, 4, 5, 6]
        assert not any(entry.cascade for entry in tables[-1].values())
