"""
Monster Definitions - the roster, with structured roll tables and specials.

Every monster carries:
- health, min_gold and an optional gold multiplier (rewards)
- a special: fires on every flip match against its attached cards
- a roll table: clamped die value -> MonsterAction

Actions are tuples of MonsterEffect descriptors (kind, magnitude, target
selector plus a few modifiers). The rules text is for display only and is
never parsed; registry/monsters.py executes the descriptors.

Categories map to royalty ranks (jack/queen/king/ace). Bosses and final
bosses have no rank and are picked from their own pools.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum

from .cards import Rank
from .statuses import StatusKind


# =============================================================================
# Categories
# =============================================================================

class MonsterCategory(Enum):
    JACK = "jack"
    QUEEN = "queen"
    KING = "king"
    ACE = "ace"
    BOSS = "boss"
    FINAL = "final"


# Normal/elite selection indexes into this order
CATEGORY_ORDER: Tuple[MonsterCategory, ...] = (
    MonsterCategory.JACK,
    MonsterCategory.QUEEN,
    MonsterCategory.KING,
    MonsterCategory.ACE,
)

CATEGORY_RANKS: Dict[MonsterCategory, Rank] = {
    MonsterCategory.JACK: Rank.JACK,
    MonsterCategory.QUEEN: Rank.QUEEN,
    MonsterCategory.KING: Rank.KING,
    MonsterCategory.ACE: Rank.ACE,
}


# =============================================================================
# Effect descriptors
# =============================================================================

class EffectKind(Enum):
    DAMAGE = "damage"
    SHATTER = "shatter"                        # 5 / 4 / 3 by target health
    HEAL_SELF = "heal_self"
    HEAL_PARTY = "heal_party"
    SELF_DAMAGE = "self_damage"
    DRAW_ATTACHED = "draw_attached"            # monster draws peon cards as attached
    STEAL_ATTACHED = "steal_attached"          # take a hero's attached card
    DISCARD_ATTACHED = "discard_attached"      # hero discards an attached card
    TAP_CLASS_CARD = "tap_class_card"
    TAP_ATTACHED = "tap_attached"              # tap the targets' attached cards
    APPLY_STATUS = "apply_status"              # status on target heroes
    APPLY_MONSTER_STATUS = "apply_monster_status"
    STRIP_ENCHANTMENTS = "strip_enchantments"
    FRACTURE = "fracture"                      # each target rolls d6: odd hurts, even blesses


class Target(Enum):
    CURRENT_HERO = "current_hero"
    NEXT_HERO = "next_hero"
    LAST_HERO = "last_hero"      # two living heroes after the current one
    PARTY = "party"
    OTHERS = "others"            # living heroes except the current one
    LOWEST_HEALTH = "lowest_health"
    HIGHEST_HEALTH = "highest_health"
    RANDOM_HERO = "random_hero"
    MONSTER = "monster"


# Card count meaning "every attached card"
ALL_CARDS = -1


class Condition(Enum):
    ANY_HERO_ROLLED_LOW = "any_hero_rolled_low"  # some hero's last roll was below 3


@dataclass(frozen=True)
class MonsterEffect:
    kind: EffectKind
    amount: int = 0
    target: Target = Target.CURRENT_HERO
    per_monster_card: int = 0   # bonus per card attached to the monster
    per_target_card: int = 0    # bonus per card attached to the target hero
    wounded_bonus: int = 0      # bonus when the target is below half health
    cap: int = 0                # attached-card cap for DRAW_ATTACHED
    evade_on_even: bool = False  # each target rolls a d6 and dodges on even
    status: Optional[StatusKind] = None
    condition: Optional[Condition] = None


@dataclass(frozen=True)
class MonsterAction:
    name: str
    text: str
    effects: Tuple[MonsterEffect, ...] = ()


@dataclass(frozen=True)
class MonsterDefinition:
    monster_id: str
    name: str
    category: MonsterCategory
    health: int
    min_gold: int
    special: MonsterAction
    roll_table: Dict[int, MonsterAction] = field(default_factory=dict, hash=False)
    gold_multiplier: int = 0
    die_sides: int = 20
    table_domain: Tuple[int, int] = (1, 6)
    description: str = ""

    @property
    def rank(self) -> Optional[Rank]:
        return CATEGORY_RANKS.get(self.category)

    def clamp_roll(self, roll: int) -> int:
        low, high = self.table_domain
        return min(high, max(low, roll))


# =============================================================================
# Authoring helpers
# =============================================================================

def deal(amount: int, target: Target = Target.CURRENT_HERO, **extra) -> MonsterEffect:
    return MonsterEffect(EffectKind.DAMAGE, amount, target, **extra)


def heal(amount: int) -> MonsterEffect:
    return MonsterEffect(EffectKind.HEAL_SELF, amount, Target.MONSTER)


def status(kind: StatusKind, target: Target = Target.CURRENT_HERO) -> MonsterEffect:
    return MonsterEffect(EffectKind.APPLY_STATUS, target=target, status=kind)


def aura(kind: StatusKind) -> MonsterEffect:
    return MonsterEffect(EffectKind.APPLY_MONSTER_STATUS, target=Target.MONSTER, status=kind)


def act(name: str, text: str, *effects: MonsterEffect) -> MonsterAction:
    return MonsterAction(name, text, tuple(effects))


def hit(amount: int, target: Target = Target.CURRENT_HERO, **extra) -> MonsterAction:
    """A plain attack with generated rules text."""
    where = {
        Target.CURRENT_HERO: "the Hero*",
        Target.PARTY: "the party",
        Target.LOWEST_HEALTH: "the lowest-health Hero",
        Target.HIGHEST_HEALTH: "the highest-health Hero",
    }.get(target, target.value.replace("_", " "))
    return act("Attack", f"Deal {amount} damage to {where}.", deal(amount, target, **extra))


def regen(amount: int) -> MonsterAction:
    return act("Regenerate", f"Regenerate {amount} health.", heal(amount))


def ranges(*spans: Tuple[int, int, MonsterAction]) -> Dict[int, MonsterAction]:
    """Expand (low, high, action) spans into a per-value table."""
    table: Dict[int, MonsterAction] = {}
    for low, high, action in spans:
        for value in range(low, high + 1):
            table[value] = action
    return table


# =============================================================================
# Jacks
# =============================================================================

ABYSSAL_OOZE = MonsterDefinition(
    monster_id="abyssal_ooze",
    name="Abyssal Ooze",
    category=MonsterCategory.JACK,
    health=12,
    gold_multiplier=7,
    min_gold=20,
    description="A corrosive slime that leaves damaging trails and reflects attacks.",
    special=act(
        "Ooze Trail",
        "Hero rolls of 1-2 now reflect 3 damage. Deal 1 damage to the party.",
        aura(StatusKind.OOZE_TRAIL),
        deal(1, Target.PARTY),
    ),
    roll_table={
        1: hit(1),
        3: hit(2, Target.PARTY),
        4: regen(4),
        5: act(
            "Engulf",
            "Draw two attached cards (max 3). Deal 3 damage to the Hero*.",
            MonsterEffect(EffectKind.DRAW_ATTACHED, 2, Target.MONSTER, cap=3),
            deal(3),
        ),
        6: act(
            "Growing Pains",
            "Draw one attached card (max 3). Deal 2 damage (+2 per attached card) to the Hero*.",
            MonsterEffect(EffectKind.DRAW_ATTACHED, 1, Target.MONSTER, cap=3),
            deal(2, per_monster_card=2),
        ),
    },
)

TREANT = MonsterDefinition(
    monster_id="treant",
    name="Treant",
    category=MonsterCategory.JACK,
    health=14,
    min_gold=25,
    description="A walking tree whose thorned branches punish attackers.",
    special=act("Thorns", "Hero rolls of 1-2 now reflect 2 damage.", aura(StatusKind.THORNS)),
    roll_table={
        1: act(
            "Verdant Bloom",
            "Heal the party by 1 and itself by 4.",
            MonsterEffect(EffectKind.HEAL_PARTY, 1, Target.PARTY),
            heal(4),
        ),
        2: hit(2),
        3: regen(5),
        4: hit(4, Target.HIGHEST_HEALTH),
        5: act(
            "Entangle",
            "Tap the Hero*'s class card and deal 1 damage.",
            MonsterEffect(EffectKind.TAP_CLASS_CARD),
            deal(1),
        ),
        6: act(
            "Ensnaring Root",
            "Nullify all weapon enchantments. Deal 3 damage to the party.",
            MonsterEffect(EffectKind.STRIP_ENCHANTMENTS, target=Target.PARTY),
            deal(3, Target.PARTY),
        ),
    },
)

GLIMMERING_SPRITE = MonsterDefinition(
    monster_id="glimmering_sprite",
    name="The Glimmering Sprite",
    category=MonsterCategory.JACK,
    health=13,
    min_gold=25,
    description="A mischievous fairy that confuses heroes with illusions.",
    special=act(
        "Illusionary Assault",
        "Attack the lowest-health Hero for 5 damage.",
        deal(5, Target.LOWEST_HEALTH),
    ),
    roll_table={
        1: hit(3),
        2: hit(2),
        3: hit(1, Target.PARTY),
        4: act(
            "Swap",
            "Take an attached card from the Hero* and deal 3 damage.",
            MonsterEffect(EffectKind.STEAL_ATTACHED),
            deal(3),
        ),
        5: act(
            "Pilfer",
            "Steal an attached card from the Hero*; deal 3 damage.",
            MonsterEffect(EffectKind.STEAL_ATTACHED),
            deal(3),
        ),
        6: hit(6),
    },
)

SHADOWY_ASSASSIN = MonsterDefinition(
    monster_id="shadowy_assassin",
    name="Shadowy Assassin",
    category=MonsterCategory.JACK,
    health=14,
    min_gold=35,
    description="A rogue who targets the weakest member of the party.",
    special=act("Assassinate", "Deal 4 damage to the lowest-health Hero.", deal(4, Target.LOWEST_HEALTH)),
    roll_table={
        1: hit(2),
        2: act("Cut", "Deal 3 damage to the Hero* and heal for 2.", deal(3), heal(2)),
        3: act("Gash", "Deal 4 damage to the Hero* and heal for 1.", deal(4), heal(1)),
        4: hit(3),
        5: hit(5),
        6: act(
            "Killing Spree",
            "Deal 4 damage to the Hero*, 3 to the next Hero and 2 to the last Hero.",
            deal(4),
            deal(3, Target.NEXT_HERO),
            deal(2, Target.LAST_HERO),
        ),
    },
)


# =============================================================================
# Queens
# =============================================================================

BANSHEE = MonsterDefinition(
    monster_id="banshee",
    name="Banshee",
    category=MonsterCategory.QUEEN,
    health=15,
    min_gold=35,
    description="A wailing spirit whose cries incapacitate heroes.",
    special=act("Psychic Scream", "Deal 2 damage to all heroes.", deal(2, Target.PARTY)),
    roll_table={
        1: hit(1),
        3: act(
            "Haunting Cry",
            "The next Hero loses their roll. Deal 2 damage to the Hero*.",
            status(StatusKind.SKIP_ROLL, Target.NEXT_HERO),
            deal(2),
        ),
        4: act(
            "Intangible",
            "Halve the next incoming damage. Deal 3 damage to the Hero*.",
            aura(StatusKind.INTANGIBLE),
            deal(3),
        ),
        5: act("Wail", "Deal 3 damage to the Hero* and heal for 2.", deal(3), heal(2)),
        6: act("Siphon Life", "Deal 4 damage to the Hero* and heal for 5.", deal(4), heal(5)),
    },
)

LUNAR_SHADE = MonsterDefinition(
    monster_id="lunar_shade",
    name="Lunar Shade",
    category=MonsterCategory.QUEEN,
    health=11,
    min_gold=30,
    description="A moonlight shadow that deals devastating damage when enraged.",
    special=act("Enrage", "Rolls of 1-3 now deal 1.5x damage.", aura(StatusKind.ENRAGED)),
    roll_table={
        1: hit(2),
        2: hit(3),
        3: hit(4, Target.LOWEST_HEALTH),
        4: act("Fade", "Fade from sight and regenerate 6 health.", heal(6)),
        5: hit(6, Target.HIGHEST_HEALTH),
        6: act("Twilight Burst", "Deal 4 damage to the party.", deal(4, Target.PARTY)),
    },
)

ARCANE_ELEMENTAL = MonsterDefinition(
    monster_id="arcane_elemental",
    name="Arcane Elemental",
    category=MonsterCategory.QUEEN,
    health=12,
    min_gold=30,
    description="Pure magical energy that surges with arcane power.",
    special=act("Arcane Surge", "Deal 6 damage to the Hero*.", deal(6)),
    roll_table={
        1: hit(2),
        4: hit(3, Target.PARTY),
        6: act(
            "Arcane Explosion",
            "Deal 7 damage to the party; heroes rolling even avoid it. Then self-destruct.",
            deal(7, Target.PARTY, evade_on_even=True),
            MonsterEffect(EffectKind.SELF_DAMAGE, 99, Target.MONSTER),
        ),
    },
)

PHOENIX = MonsterDefinition(
    monster_id="phoenix",
    name="Phoenix",
    category=MonsterCategory.QUEEN,
    health=14,
    min_gold=45,
    description="A fiery bird that rises again from its own ashes.",
    special=act("Rebirth", "Flare back to life, healing 8.", heal(8)),
    roll_table={
        1: hit(1, Target.PARTY),
        3: act(
            "Twin Flames",
            "Deal 2 damage to the Hero* and the next Hero.",
            deal(2),
            deal(2, Target.NEXT_HERO),
        ),
        4: hit(4),
        5: hit(2),
        6: act("Phoenix Requiem", "Deal 3 damage to the party.", deal(3, Target.PARTY)),
    },
)


# =============================================================================
# Kings
# =============================================================================

GARGOYLE = MonsterDefinition(
    monster_id="gargoyle",
    name="Gargoyle",
    category=MonsterCategory.KING,
    health=17,
    min_gold=40,
    description="An animated statue that hurls rock shards.",
    special=act(
        "Shatter",
        "Rock shards deal 5 damage to a Hero at 15+ health, 4 at 7-14, 3 otherwise.",
        MonsterEffect(EffectKind.SHATTER),
    ),
    roll_table={
        1: hit(2),
        3: hit(2, Target.PARTY),
        5: hit(5),
        6: act("Rock Solid", "Halve the next incoming damage.", aura(StatusKind.INTANGIBLE)),
    },
)

CURSED_KNIGHT = MonsterDefinition(
    monster_id="cursed_knight",
    name="Cursed Knight",
    category=MonsterCategory.KING,
    health=13,
    min_gold=30,
    description="A corrupted warrior with an arsenal of cursed weapons.",
    special=act(
        "Accursed Arsenal",
        "Deal 2 damage (+1 per attached card) to the Hero*.",
        deal(2, per_monster_card=1),
    ),
    roll_table={
        1: hit(1),
        2: hit(2),
        3: hit(3),
        4: hit(2, Target.PARTY),
        5: act("Dark Cleave", "Deal 4 damage to the Hero* and heal for 3.", deal(4), heal(3)),
        6: act(
            "Clashing Steel",
            "Steal an attached card from the Hero* and deal 3 damage.",
            MonsterEffect(EffectKind.STEAL_ATTACHED),
            deal(3),
        ),
    },
)

MINOTAUR = MonsterDefinition(
    monster_id="minotaur",
    name="Minotaur",
    category=MonsterCategory.KING,
    health=15,
    min_gold=40,
    description="A bull-headed guardian that grows more savage as it bleeds.",
    special=act("Maze Guardian", "Enter a rage: +1 damage on all rolls.", aura(StatusKind.EMPOWERED)),
    roll_table={
        1: hit(3, Target.HIGHEST_HEALTH),
        2: regen(4),
        4: hit(2, Target.PARTY),
        5: hit(3, Target.PARTY),
        6: act(
            "Savage Onslaught",
            "Deal 6 damage to the Hero* and take 3 damage.",
            deal(6),
            MonsterEffect(EffectKind.SELF_DAMAGE, 3, Target.MONSTER),
        ),
    },
)

CHIMERA = MonsterDefinition(
    monster_id="chimera",
    name="Chimera",
    category=MonsterCategory.KING,
    health=16,
    min_gold=45,
    description="A hybrid beast whose heads each attack differently.",
    special=act(
        "Hybrid Might",
        "The Goat's Head discards an attached card and the Lion's Head bites for 5.",
        MonsterEffect(EffectKind.DISCARD_ATTACHED),
        deal(5),
    ),
    roll_table={
        1: act(
            "Maul",
            "Deal 2 damage to the highest-health Hero and 1 to the others.",
            deal(2, Target.HIGHEST_HEALTH),
            deal(1, Target.OTHERS),
        ),
        4: hit(2, Target.PARTY),
        5: hit(5),
        6: act(
            "Blood Trail",
            "Deal 5 damage to the lowest-health Hero. Roll even to evade.",
            deal(5, Target.LOWEST_HEALTH, evade_on_even=True),
        ),
    },
)


# =============================================================================
# Aces
# =============================================================================

EMBER_DRAKE = MonsterDefinition(
    monster_id="ember_drake",
    name="Ember Drake",
    category=MonsterCategory.ACE,
    health=15,
    min_gold=45,
    description="A young dragon wreathed in flame.",
    special=act("Flame On", "All roll damage increases by 1.", aura(StatusKind.EMPOWERED)),
    roll_table={
        1: hit(1, Target.PARTY),
        2: hit(2, Target.PARTY),
        3: hit(3, Target.PARTY),
        4: hit(5),
        5: hit(6),
        6: act(
            "Inferno",
            "Burn all attached cards. The Hero* takes 3 damage per attached card.",
            MonsterEffect(EffectKind.TAP_ATTACHED, target=Target.PARTY),
            deal(0, per_target_card=3),
        ),
    },
)

FROST_WYRM = MonsterDefinition(
    monster_id="frost_wyrm",
    name="Frost Wyrm",
    category=MonsterCategory.ACE,
    health=16,
    min_gold=45,
    description="An ancient ice dragon that roots heroes in place.",
    special=act(
        "Glacial Freeze",
        "Root the party: every Hero gets -1 on their next roll.",
        status(StatusKind.ROLL_PENALTY, Target.PARTY),
    ),
    roll_table={
        1: hit(2),
        2: act("Frostbite", "Deal 2 damage to the Hero* and 1 to the others.", deal(2), deal(1, Target.OTHERS)),
        3: hit(4),
        4: act("Ice Storm", "Deal 3 damage to the Hero* and 2 to the others.", deal(3), deal(2, Target.OTHERS)),
        5: hit(4),
        6: act(
            "Frozen Tomb",
            "Trap the Hero* in ice: 6 damage and their next roll is lost.",
            deal(6),
            status(StatusKind.SKIP_ROLL),
        ),
    },
)

NANO_PROTOTYPE = MonsterDefinition(
    monster_id="nano_prototype",
    name="Nano Prototype",
    category=MonsterCategory.ACE,
    health=17,
    min_gold=50,
    description="A construct that infects heroes with nanobots.",
    special=act("Nano Overload", "Nanobots flare up for 6 damage to the Hero*.", deal(6)),
    roll_table={
        1: hit(2),
        2: hit(3),
        3: hit(2),
        4: hit(2, Target.PARTY),
        5: act(
            "Short Circuit",
            "Tap the Hero*'s attached cards and deal 3 damage.",
            MonsterEffect(EffectKind.TAP_ATTACHED),
            deal(3),
        ),
        6: act("Auto-repair Bot", "Heal 5.", heal(5)),
    },
)

LASER_TURRET = MonsterDefinition(
    monster_id="laser_turret",
    name="Laser Turret",
    category=MonsterCategory.ACE,
    health=15,
    min_gold=55,
    description="A weapon system that targets the party's weak points.",
    special=act(
        "Melting Beam",
        "Deal 7 damage if the Hero* is below half health, otherwise 5.",
        deal(5, wounded_bonus=2),
    ),
    roll_table={
        1: hit(4, Target.HIGHEST_HEALTH),
        2: hit(3),
        3: regen(3),
        4: act("Overcharge", "All roll damage increases by 1.", aura(StatusKind.EMPOWERED)),
        5: hit(5, Target.LOWEST_HEALTH),
        6: hit(6),
    },
)


# =============================================================================
# Bosses
# =============================================================================

BEHEMOTH = MonsterDefinition(
    monster_id="behemoth",
    name="Behemoth",
    category=MonsterCategory.BOSS,
    health=20,
    min_gold=75,
    description="A gigantic creature of incredible strength.",
    special=act("Overpowering Presence", "Deal 3 damage to the party.", deal(3, Target.PARTY)),
    roll_table={
        1: hit(3, Target.PARTY),
        3: hit(6),
        5: act(
            "Trample",
            "Deal 5 damage to the lowest-health Hero and 1 to the others.",
            deal(5, Target.LOWEST_HEALTH),
            deal(1, Target.OTHERS),
        ),
        6: act("Colossal Wrath", "Deal 7 damage to the highest-health Hero.", deal(7, Target.HIGHEST_HEALTH)),
    },
)

CYCLOPS = MonsterDefinition(
    monster_id="cyclops",
    name="Cyclops",
    category=MonsterCategory.BOSS,
    health=17,
    min_gold=75,
    description="A one-eyed giant whose gaze marks its next victim.",
    special=act("One Eyed Freak", "Deal 4 damage to the next Hero.", deal(4, Target.NEXT_HERO)),
    roll_table={
        1: hit(2, Target.PARTY),
        2: hit(3, Target.PARTY),
        4: hit(4, Target.PARTY),
        5: hit(6),
        6: act("Laser", "Deal 8 damage to the Hero* unless they roll even.", deal(8, evade_on_even=True)),
    },
)

DRAGON = MonsterDefinition(
    monster_id="dragon",
    name="Dragon",
    category=MonsterCategory.BOSS,
    health=18,
    min_gold=80,
    description="A terrifying dragon that breathes fire and buffets with its wings.",
    special=act(
        "Fire Breath",
        "Deal 6 damage to the Hero* and 5 to the next Hero.",
        deal(6),
        deal(5, Target.NEXT_HERO),
    ),
    roll_table={
        1: hit(2, Target.PARTY),
        2: hit(5),
        4: hit(7, Target.LOWEST_HEALTH),
        5: hit(9, Target.HIGHEST_HEALTH),
        6: act(
            "Wind Buffet",
            "Tap all attached cards. Deal 3 damage + 1 per attached card to every Hero.",
            MonsterEffect(EffectKind.TAP_ATTACHED, target=Target.PARTY),
            deal(3, Target.PARTY, per_target_card=1),
        ),
    },
)

TITAN = MonsterDefinition(
    monster_id="titan",
    name="Titan",
    category=MonsterCategory.BOSS,
    health=19,
    min_gold=70,
    description="A colossus of ancient power.",
    special=act(
        "Unyielding Strength",
        "Enrage (rolls of 1-3 deal 1.5x damage) and heal 2.",
        aura(StatusKind.ENRAGED),
        heal(2),
    ),
    roll_table={
        1: hit(3),
        3: act("Quake", "Deal 4 damage to the Hero* and 2 to the others.", deal(4), deal(2, Target.OTHERS)),
        4: hit(4),
        5: regen(8),
        6: act(
            "Titan's Grip",
            "Deal 6 damage to the Hero*; their next roll is lost.",
            deal(6),
            status(StatusKind.SKIP_ROLL),
        ),
    },
)


# =============================================================================
# Final bosses
# =============================================================================

APEXUS = MonsterDefinition(
    monster_id="apexus",
    name="Apexus, the Astral Overlord",
    category=MonsterCategory.FINAL,
    health=25,
    min_gold=100,
    description="A godlike entity wielding cosmic power.",
    special=act("Cosmic Dominion", "Deal 3 damage to all heroes.", deal(3, Target.PARTY)),
    roll_table={
        1: hit(4, Target.PARTY),
        2: act("Cosmic Shift", "Deal 3 damage to each Hero.", deal(3, Target.PARTY)),
        3: act(
            "Star Fall",
            "Deal 5 damage to the Hero* and the next Hero.",
            deal(5),
            deal(5, Target.NEXT_HERO),
        ),
        4: act(
            "Reality Warp",
            "Disable all heroes' abilities and deal 2 damage to each.",
            status(StatusKind.ABILITY_DISABLED, Target.PARTY),
            deal(2, Target.PARTY),
        ),
        5: act(
            "Gravitational Pull",
            "Draw every Hero's attached cards to Apexus and deal 3 damage to each.",
            MonsterEffect(EffectKind.STEAL_ATTACHED, ALL_CARDS, Target.PARTY),
            deal(3, Target.PARTY),
        ),
        6: act("Dimensional Collapse", "Deal 8 damage to all heroes.", deal(8, Target.PARTY)),
    },
)

VYRIDION = MonsterDefinition(
    monster_id="vyridion",
    name="Vyridion, The Astril Conductor",
    category=MonsterCategory.FINAL,
    health=25,
    min_gold=150,
    table_domain=(1, 20),
    description="The conductor of the Nexus Pinnacle, bending reality with every roll.",
    special=act(
        "Cosmic Resonance",
        "Every Hero discards an attached card.",
        MonsterEffect(EffectKind.DISCARD_ATTACHED, target=Target.PARTY),
    ),
    roll_table=ranges(
        (1, 3, act("Reality Surge", "Deal 2 damage to all heroes.", deal(2, Target.PARTY))),
        (4, 6, act(
            "Astral Pulse",
            "Deal 4 damage to the lowest-health Hero and heal 2.",
            deal(4, Target.LOWEST_HEALTH),
            heal(2),
        )),
        (7, 9, act(
            "Crystalline Shield",
            "The heroes' next attacks deal half damage.",
            status(StatusKind.HALF_DAMAGE, Target.PARTY),
        )),
        (10, 12, act(
            "Temporal Shift",
            "Disable all heroes' abilities.",
            status(StatusKind.ABILITY_DISABLED, Target.PARTY),
        )),
        (13, 15, act(
            "Gravity Flux",
            "Deal 3 damage to a random Hero and nullify enchantments.",
            deal(3, Target.RANDOM_HERO),
            MonsterEffect(EffectKind.STRIP_ENCHANTMENTS, target=Target.PARTY),
        )),
        (16, 17, act(
            "Ethereal Reprisal",
            "All heroes get -1 on their next roll. Heal 3 if any Hero last rolled below 3.",
            status(StatusKind.ROLL_PENALTY, Target.PARTY),
            MonsterEffect(EffectKind.HEAL_SELF, 3, Target.MONSTER, condition=Condition.ANY_HERO_ROLLED_LOW),
        )),
        (18, 19, act(
            "Reality Fracture",
            "Each Hero rolls a d6: odd takes 2 damage, even gains +1 on their next roll.",
            MonsterEffect(EffectKind.FRACTURE, 2, Target.PARTY),
        )),
        (20, 20, act("Astril Unmaking", "Unmake reality and heal 3.", heal(3))),
    ),
)


# =============================================================================
# Roster
# =============================================================================

MONSTERS_BY_CATEGORY: Dict[MonsterCategory, List[MonsterDefinition]] = {
    MonsterCategory.JACK: [ABYSSAL_OOZE, TREANT, GLIMMERING_SPRITE, SHADOWY_ASSASSIN],
    MonsterCategory.QUEEN: [BANSHEE, LUNAR_SHADE, ARCANE_ELEMENTAL, PHOENIX],
    MonsterCategory.KING: [GARGOYLE, CURSED_KNIGHT, MINOTAUR, CHIMERA],
    MonsterCategory.ACE: [EMBER_DRAKE, FROST_WYRM, NANO_PROTOTYPE, LASER_TURRET],
    MonsterCategory.BOSS: [BEHEMOTH, CYCLOPS, DRAGON, TITAN],
    MonsterCategory.FINAL: [APEXUS, VYRIDION],
}

ALL_MONSTERS: Dict[str, MonsterDefinition] = {
    m.monster_id: m
    for monsters in MONSTERS_BY_CATEGORY.values()
    for m in monsters
}


def get_monster(monster_id: str) -> MonsterDefinition:
    """Look up a monster by id. Raises ValueError for unknown ids."""
    try:
        return ALL_MONSTERS[monster_id]
    except KeyError:
        raise ValueError(f"Unknown monster: {monster_id}") from None


__all__ = [
    "MonsterCategory", "CATEGORY_ORDER", "CATEGORY_RANKS",
    "EffectKind", "Target", "Condition", "ALL_CARDS",
    "MonsterEffect", "MonsterAction", "MonsterDefinition",
    "deal", "heal", "status", "aura", "act", "hit", "regen", "ranges",
    "MONSTERS_BY_CATEGORY", "ALL_MONSTERS", "get_monster",
]
