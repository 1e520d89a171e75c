"""
Generation - monster selection, adventure setup and rewards.
"""

from .encounters import RoomKind, select_monster, build_environment_pile, setup_adventure, AdventureSetup
from .rewards import Rewards, RewardEntry, generate_gold, generate_rewards
