"""
XorShift128 RNG - deterministic dice and shuffles for combat replay.

Every random decision in an encounter (dice, pile shuffles, monster
selection, loot) comes from a seeded stream so that a combat log can be
replayed exactly from its seed.

RNG Streams (see BattleRNG):
- dice_rng: Hero and monster rolls, secondary d6 checks
- shuffle_rng: Peon pile reshuffles and redeals
- monster_rng: Monster selection and random hero targeting
- treasure_rng: Gold and reward table rolls
"""

from dataclasses import dataclass
from typing import Any, List, Optional


MASK_64 = 0xFFFFFFFFFFFFFFFF

SEED_CHARACTERS = "0123456789ABCDEFGHIJKLMNPQRSTUVWXYZ"


class XorShift128:
    """
    XorShift128 PRNG.

    State is two 64-bit integers (seed0, seed1).
    """

    def __init__(self, seed: int, seed1: Optional[int] = None):
        """
        Initialize with a 64-bit seed or explicit (seed0, seed1) state.

        Args:
            seed: Either the initial seed (if seed1 is None) or seed0 state
            seed1: If provided, use (seed, seed1) as direct state values
        """
        if seed1 is not None:
            self.seed0 = seed & MASK_64
            self.seed1 = seed1 & MASK_64
        else:
            # A zero state never leaves zero
            if seed == 0:
                seed = -0x8000000000000000
            self.seed0 = self._murmur_hash3(seed)
            self.seed1 = self._murmur_hash3(self.seed0)

    @staticmethod
    def _murmur_hash3(x: int) -> int:
        """MurmurHash3 finalizer - used for seed initialization."""
        x = x & MASK_64
        x ^= x >> 33
        x = (x * 0xff51afd7ed558ccd) & MASK_64
        x ^= x >> 33
        x = (x * 0xc4ceb9fe1a85ec53) & MASK_64
        x ^= x >> 33
        return x

    def _next_long(self) -> int:
        """Generate the next signed 64-bit value."""
        s1 = self.seed0
        s0 = self.seed1
        self.seed0 = s0

        s1 ^= (s1 << 23) & MASK_64
        self.seed1 = (s1 ^ s0 ^ (s1 >> 17) ^ (s0 >> 26)) & MASK_64

        result = (self.seed0 + self.seed1) & MASK_64
        if result >= 0x8000000000000000:
            result -= 0x10000000000000000
        return result

    def next_int(self, bound: int) -> int:
        """Random int in [0, bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")

        while True:
            bits = (self._next_long() & MASK_64) >> 1
            val = bits % bound
            if bits - val + (bound - 1) >= 0:
                return int(val)

    def copy(self) -> 'XorShift128':
        """Create a copy with same state."""
        return XorShift128(self.seed0, self.seed1)


class Random:
    """
    Counted RNG wrapper used by every combat system.

    The counter records how many values were drawn so a stream can be
    restored with Random(seed, counter).
    """

    def __init__(self, seed: int, counter: int = 0):
        self.seed = seed
        self._rng = XorShift128(seed)
        self.counter = 0

        for _ in range(counter):
            self.random_int(999)

    def random_int(self, range_val: int) -> int:
        """Random int in [0, range_val] INCLUSIVE."""
        self.counter += 1
        return self._rng.next_int(range_val + 1)

    def random_int_range(self, start: int, end: int) -> int:
        """Random int in [start, end] INCLUSIVE."""
        self.counter += 1
        return start + self._rng.next_int(end - start + 1)

    def roll_die(self, sides: int) -> int:
        """Roll a die with the given number of sides: [1, sides]."""
        if sides < 1:
            raise ValueError(f"die needs at least one side, got {sides}")
        return self.random_int_range(1, sides)

    def choice(self, values: List[Any]) -> Any:
        """Deterministic random choice."""
        if not values:
            raise ValueError("Cannot choose from empty list")
        return values[self.random_int(len(values) - 1)]

    def shuffle(self, values: List[Any]) -> None:
        """Deterministic in-place Fisher-Yates shuffle."""
        for i in range(len(values) - 1, 0, -1):
            j = self.random_int(i)
            values[i], values[j] = values[j], values[i]

    def copy(self) -> 'Random':
        """Create a copy with same state."""
        new = Random.__new__(Random)
        new.seed = self.seed
        new._rng = self._rng.copy()
        new.counter = self.counter
        return new


def seed_to_long(seed_string: str) -> int:
    """
    Convert a seed string (e.g., "ABC123XYZ") to its numeric value.

    Seeds use base-35 encoding: 0-9 + A-Z excluding O, and O is read as 0.
    A purely numeric string is taken as the number itself.
    """
    if seed_string.lstrip('-').isdigit():
        return int(seed_string)

    seed_string = seed_string.upper().replace("O", "0")

    result = 0
    for char in seed_string:
        remainder = SEED_CHARACTERS.find(char)
        if remainder == -1:
            continue
        result *= len(SEED_CHARACTERS)
        result += remainder

    return result


def long_to_seed(seed_long: int) -> str:
    """Convert a numeric seed back to its base-35 string."""
    char_count = len(SEED_CHARACTERS)

    if seed_long == 0:
        return "0"

    leftover = seed_long & MASK_64

    result = []
    while leftover != 0:
        remainder = leftover % char_count
        leftover = leftover // char_count
        result.append(SEED_CHARACTERS[remainder])

    return ''.join(reversed(result))


@dataclass
class BattleRNG:
    """
    All RNG streams for one encounter.

    Streams share the seed but advance independently, so drawing extra
    loot never changes the dice of a replayed fight.
    """
    seed: int

    dice_rng: Random = None
    shuffle_rng: Random = None
    monster_rng: Random = None
    treasure_rng: Random = None

    def __post_init__(self):
        if self.dice_rng is None:
            self.dice_rng = Random(self.seed)
        if self.shuffle_rng is None:
            self.shuffle_rng = Random(self.seed + 1)
        if self.monster_rng is None:
            self.monster_rng = Random(self.seed + 2)
        if self.treasure_rng is None:
            self.treasure_rng = Random(self.seed + 3)

    @classmethod
    def from_string(cls, seed_string: str) -> 'BattleRNG':
        """Create streams from a seed string such as "SKYWARD1"."""
        return cls(seed=seed_to_long(seed_string))

    def get_counters(self) -> dict:
        """Counter values for save state."""
        return {
            "dice_seed_count": self.dice_rng.counter,
            "shuffle_seed_count": self.shuffle_rng.counter,
            "monster_seed_count": self.monster_rng.counter,
            "treasure_seed_count": self.treasure_rng.counter,
        }

    @classmethod
    def from_save(cls, seed: int, counters: dict) -> 'BattleRNG':
        """Restore RNG state from save data."""
        return cls(
            seed=seed,
            dice_rng=Random(seed, counters.get("dice_seed_count", 0)),
            shuffle_rng=Random(seed + 1, counters.get("shuffle_seed_count", 0)),
            monster_rng=Random(seed + 2, counters.get("monster_seed_count", 0)),
            treasure_rng=Random(seed + 3, counters.get("treasure_seed_count", 0)),
        )
