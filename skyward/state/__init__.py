"""
State module - RNG, piles and combat state.

Contains:
- RNG system (XorShift128, seeded battle streams)
- Pile manager (peon, discard, environment, royalty)
- Combat state (heroes, monster, phase, log)
"""

# RNG System
from .rng import XorShift128, Random, BattleRNG, seed_to_long, long_to_seed

# Piles
from .piles import PileManager, DeckExhaustedError

# Combat State
from .combat import (
    CombatPhase,
    TurnOrder,
    CombatLog,
    CombatLogEntry,
    CombatEvent,
    Combatant,
    Hero,
    Monster,
    CombatState,
    create_hero,
    create_monster,
)
