"""
Item and Enchantment Definitions.

Items live in the party inventory and are spent with use_item() during
combat. Weapons are carried between fights and cannot be used in combat.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from enum import Enum


class ItemType(Enum):
    POTION = "potion"
    CHARM = "charm"
    SCROLL = "scroll"
    WEAPON = "weapon"


class Enchantment(Enum):
    """Scroll enchantments placed on a hero's weapon."""
    TOXIC = "toxic"
    FIERY = "fiery"
    NOXIOUS = "noxious"
    FORTUNE = "fortune"
    CRUSADER = "crusader"


@dataclass(frozen=True)
class ItemDescriptor:
    item_id: str
    name: str
    item_type: ItemType
    description: str
    requires_target: bool = False
    costs_roll: bool = False
    heal: int = 0  # -1 = full heal
    enchantment: Optional[Enchantment] = None

    @property
    def usable_in_combat(self) -> bool:
        return self.item_type != ItemType.WEAPON

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "type": self.item_type.value,
            "description": self.description,
        }


FULL_HEAL = -1


ITEMS: Dict[str, ItemDescriptor] = {
    "minor_potion": ItemDescriptor(
        "minor_potion", "Minor Health Potion", ItemType.POTION,
        "Heal a hero for 12. Costs the current hero's roll.",
        requires_target=True, costs_roll=True, heal=12,
    ),
    "major_potion": ItemDescriptor(
        "major_potion", "Major Health Potion", ItemType.POTION,
        "Fully heal a hero. Costs the current hero's roll.",
        requires_target=True, costs_roll=True, heal=FULL_HEAL,
    ),
    "ability_blocker": ItemDescriptor(
        "ability_blocker", "Ability Blocker", ItemType.CHARM,
        "Negate the monster's next special ability.",
    ),
    "guardian_angel": ItemDescriptor(
        "guardian_angel", "Guardian Angel", ItemType.CHARM,
        "The next time this hero falls, revive them at half health.",
        requires_target=True,
    ),
    "toxic_scroll": ItemDescriptor(
        "toxic_scroll", "Toxic Scroll", ItemType.SCROLL,
        "Enchant: +1 damage on rolls of 1-2.",
        requires_target=True, enchantment=Enchantment.TOXIC,
    ),
    "fiery_scroll": ItemDescriptor(
        "fiery_scroll", "Fiery Scroll", ItemType.SCROLL,
        "Enchant: +2 damage on rolls of 3-4.",
        requires_target=True, enchantment=Enchantment.FIERY,
    ),
    "noxious_scroll": ItemDescriptor(
        "noxious_scroll", "Noxious Scroll", ItemType.SCROLL,
        "Enchant: +1 damage on rolls of 1-4.",
        requires_target=True, enchantment=Enchantment.NOXIOUS,
    ),
    "fortune_scroll": ItemDescriptor(
        "fortune_scroll", "Fortune Scroll", ItemType.SCROLL,
        "Enchant: on a roll of 6 gain 7 gold and roll again; chains on 6.",
        requires_target=True, enchantment=Enchantment.FORTUNE,
    ),
    "crusader_scroll": ItemDescriptor(
        "crusader_scroll", "Crusader Scroll", ItemType.SCROLL,
        "Enchant: a roll of 5 triggers the hero's unused ability.",
        requires_target=True, enchantment=Enchantment.CRUSADER,
    ),
    "common_weapon": ItemDescriptor(
        "common_weapon", "Common Weapon", ItemType.WEAPON,
        "A plain weapon, ready for enchantment.",
    ),
    "weapon_upgrade": ItemDescriptor(
        "weapon_upgrade", "Weapon Upgrade", ItemType.WEAPON,
        "Upgrade a carried weapon.",
    ),
}

# Damage bonus on the first hit of a roll, keyed by table value
ENCHANTMENT_DAMAGE_BONUS: Dict[Enchantment, Dict[int, int]] = {
    Enchantment.TOXIC: {1: 1, 2: 1},
    Enchantment.FIERY: {3: 2, 4: 2},
    Enchantment.NOXIOUS: {1: 1, 2: 1, 3: 1, 4: 1},
}

FORTUNE_GOLD = 7


def get_item(item_id: str) -> ItemDescriptor:
    """Look up an item by id. Raises ValueError for unknown items."""
    try:
        return ITEMS[item_id]
    except KeyError:
        raise ValueError(f"Unknown item: {item_id}") from None


def enchantment_bonus(enchantment: Optional[Enchantment], roll_value: int) -> int:
    if enchantment is None:
        return 0
    return ENCHANTMENT_DAMAGE_BONUS.get(enchantment, {}).get(roll_value, 0)


__all__ = [
    "ItemType", "Enchantment", "ItemDescriptor", "ITEMS", "FULL_HEAL",
    "ENCHANTMENT_DAMAGE_BONUS", "FORTUNE_GOLD", "get_item", "enchantment_bonus",
]
