"""
Engine tunables.

CombatConfig collects the numbers the combat rules lean on so tests and
variants can adjust them without touching the rules themselves.
ServerConfig reads the HTTP surface's settings from the environment
(a .env file is honoured).
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv


@dataclass(frozen=True)
class CombatConfig:
    """Numbers used by the combat engine."""
    party_size: int = 3

    # Attach phase
    max_redeal_attempts: int = 10
    redeal_rank_limit: int = 4

    # Heroes
    pet_capacity: int = 2
    execute_threshold: int = 4
    guardian_special_heal: int = 7
    guardian_health_cap: int = 20
    max_follow_up_chain: int = 5
    hero_die: int = 20
    secondary_die: int = 6

    # Monsters
    elite_max_health: int = 20
    monster_health_cap: int = 20
    match_damage: int = 2

    # Environments
    armory_hero_bonus: int = 2
    armory_monster_bonus: int = 1
    armory_monster_rolls: int = 3
    elemental_black_bonus: int = 1
    elemental_monster_health: int = 3

    # Rewards
    elite_gold_bonus: int = 15
    default_gold: int = 25


DEFAULT_CONFIG = CombatConfig()


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> 'ServerConfig':
        """Read SKYWARD_HOST / SKYWARD_PORT / SKYWARD_LOG_LEVEL."""
        load_dotenv()
        return cls(
            host=os.getenv("SKYWARD_HOST", cls.host),
            port=int(os.getenv("SKYWARD_PORT", str(cls.port))),
            log_level=os.getenv("SKYWARD_LOG_LEVEL", cls.log_level).lower(),
        )
