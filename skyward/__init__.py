"""
Skyward Ascent Combat Engine

A turn-based card-and-dice combat engine: a party of heroes against one
monster, driven by flips from a shared peon pile and d20 rolls.

Core subsystems:
- state: RNG streams, piles, combat state and log
- content: Cards, hero classes, monsters, environments, items, statuses
- calc: Damage math, damage/heal pipeline, match and environment rules
- registry: Hero abilities and monster effect executors
- generation: Monster selection, adventure setup, rewards

Usage:
    from skyward import create_combat

    engine = create_combat(["bladedancer", "tracker", "guardian"], seed=42)
    engine.choose_turn_order("right")
    while not engine.is_combat_over():
        engine.advance()
    result = engine.get_result()
"""

__version__ = "0.1.0"

# RNG System
from .state.rng import XorShift128, Random, BattleRNG, seed_to_long, long_to_seed

# Piles and Combat State
from .state.piles import PileManager, DeckExhaustedError
from .state.combat import (
    CombatPhase, TurnOrder, CombatLog, CombatLogEntry, CombatEvent,
    Hero, Monster, CombatState, create_hero, create_monster,
)

# Content
from .content.cards import Card, Suit, Rank, CardColor, make_card, create_deck
from .content.heroes import HeroClass, HERO_CLASSES
from .content.monsters import MonsterDefinition, MonsterCategory, ALL_MONSTERS, get_monster
from .content.items import ItemDescriptor, Enchantment, ITEMS, get_item

# Configuration
from .config import CombatConfig, ServerConfig, DEFAULT_CONFIG

# Generation
from .generation.encounters import RoomKind, select_monster, setup_adventure
from .generation.rewards import Rewards, generate_rewards

# Engine
from .combat_engine import ActionOutcome, CombatResult, CombatEngine, create_encounter, create_combat

# Agent API
from .agent_api import get_available_action_dicts, take_action_dict, get_observation

__all__ = [
    "__version__",
    # RNG
    "XorShift128", "Random", "BattleRNG", "seed_to_long", "long_to_seed",
    # State
    "PileManager", "DeckExhaustedError",
    "CombatPhase", "TurnOrder", "CombatLog", "CombatLogEntry", "CombatEvent",
    "Hero", "Monster", "CombatState", "create_hero", "create_monster",
    # Content
    "Card", "Suit", "Rank", "CardColor", "make_card", "create_deck",
    "HeroClass", "HERO_CLASSES",
    "MonsterDefinition", "MonsterCategory", "ALL_MONSTERS", "get_monster",
    "ItemDescriptor", "Enchantment", "ITEMS", "get_item",
    # Config
    "CombatConfig", "ServerConfig", "DEFAULT_CONFIG",
    # Generation
    "RoomKind", "select_monster", "setup_adventure", "Rewards", "generate_rewards",
    # Engine
    "ActionOutcome", "CombatResult", "CombatEngine", "create_encounter", "create_combat",
    # Agent API
    "get_available_action_dicts", "take_action_dict", "get_observation",
]
