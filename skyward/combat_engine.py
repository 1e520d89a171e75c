"""
Combat Engine - the turn state machine for Skyward Ascent encounters.

This module drives one encounter from setup to victory or defeat:
1. Turn order choice, attach phase (with bounded redeal) and environment flip
2. Monster flip (special on a match) and monster roll
3. Each living hero's flip (special or match damage) and roll
4. Items used between steps
5. Rewards and pile cleanup when the fight ends

Design principles:
- The CombatState is owned by the engine and threaded through every call
- Every public call fully resolves before returning; presentation layers
  drain the combat log as an event stream at their own pace
- Player input in the wrong phase is rejected without touching state

Usage:
    from skyward.combat_engine import create_combat

    engine = create_combat(["bladedancer", "tracker", "guardian"], seed=42)
    engine.choose_turn_order("right")

    while not engine.is_combat_over():
        engine.advance()

    result = engine.get_result()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union
import logging

from .calc import pipeline
from .calc.matching import (
    apply_environment,
    calculate_match_damage,
    class_card_matched,
    hero_roll_bonus,
    monster_roll_bonus,
    rank_matches,
)
from .config import CombatConfig, DEFAULT_CONFIG
from .content.cards import Card, count_ranks
from .content.heroes import HERO_CLASSES, HeroClass, get_roll_entry
from .content.items import (
    FULL_HEAL,
    Enchantment,
    ItemDescriptor,
    ItemType,
    FORTUNE_GOLD,
    enchantment_bonus,
    get_item,
)
from .content.monsters import get_monster
from .content.statuses import MarkerKind, REFLECT_DAMAGE, StatusKind
from .generation.encounters import RoomKind, build_environment_pile, select_monster, setup_adventure
from .generation.rewards import Rewards, generate_rewards
from .registry import (
    HeroContext,
    MonsterContext,
    execute_hero_roll,
    execute_hero_special,
    execute_monster_action,
    execute_monster_special,
)
from .state.combat import (
    CombatLogEntry,
    CombatPhase,
    CombatState,
    Hero,
    TurnOrder,
    create_monster,
)
from .state.piles import PileManager
from .state.rng import BattleRNG


logger = logging.getLogger(__name__)

FLIP_COUNT = 2
MONSTER_ATTACH_COUNT = 2
REFLECT_MAX_ROLL = 2
CRUSADER_ROLL = 5
FORTUNE_ROLL = 6

ITEM_PHASES = (CombatPhase.MONSTER_FLIP, CombatPhase.HERO_FLIP, CombatPhase.HERO_ROLL)


# =============================================================================
# Results
# =============================================================================

@dataclass
class ActionOutcome:
    """Answer to a player input: accepted, or rejected with a reason."""
    accepted: bool
    error: Optional[str] = None
    events: List[CombatLogEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accepted": self.accepted,
            "error": self.error,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class CombatResult:
    """Result of a completed encounter."""
    victory: bool
    updated_heroes: List[Hero]
    rewards: Optional[Rewards]
    piles: PileManager
    inventory: List[ItemDescriptor]
    stats: Dict[str, int]
    rounds: int
    monster_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "victory": self.victory,
            "monster": self.monster_id,
            "rounds": self.rounds,
            "heroes": [h.to_dict() for h in self.updated_heroes],
            "rewards": self.rewards.to_dict() if self.rewards else None,
            "inventory": [i.item_id for i in self.inventory],
            "stats": dict(self.stats),
            "piles": {
                "peon": len(self.piles.peon),
                "discard": len(self.piles.discard),
                "environment": len(self.piles.environment),
            },
        }


# =============================================================================
# COMBAT ENGINE
# =============================================================================

class CombatEngine:
    """
    Turn state machine for one encounter.

    Public inputs (each returns an ActionOutcome):
    - choose_turn_order(direction)
    - request_flip()
    - request_roll()
    - use_item(item_ref, target_hero_ref=None)
    """

    def __init__(
        self,
        state: CombatState,
        rng: Optional[BattleRNG] = None,
        config: CombatConfig = DEFAULT_CONFIG,
    ):
        """
        Initialize combat engine.

        Args:
            state: Encounter state, in SETUP
            rng: Seeded RNG streams (dice, shuffle, monster, treasure)
            config: Engine tunables
        """
        self.state = state
        self.rng = rng or BattleRNG(seed=0)
        self.config = config
        self.result: Optional[CombatResult] = None
        self._event_cursor = 0

    # =========================================================================
    # Core State Access
    # =========================================================================

    @property
    def phase(self) -> CombatPhase:
        return self.state.phase

    def is_combat_over(self) -> bool:
        return self.state.is_over

    def is_victory(self) -> bool:
        return self.state.phase == CombatPhase.VICTORY

    def drain_events(self) -> List[CombatLogEntry]:
        """Log entries added since the last drain, oldest first."""
        entries = self.state.log.entries[self._event_cursor:]
        self._event_cursor = len(self.state.log.entries)
        return list(entries)

    def _set_phase(self, phase: CombatPhase) -> None:
        logger.debug("Phase %s -> %s", self.state.phase.value, phase.value)
        self.state.phase = phase

    def _context(self, hero: Hero, **kwargs) -> HeroContext:
        return HeroContext(self.state, self.rng, self.config, hero=hero, **kwargs)

    def _monster_context(self, **kwargs) -> MonsterContext:
        return MonsterContext(self.state, self.rng, self.config, **kwargs)

    # =========================================================================
    # Setup
    # =========================================================================

    def start(self) -> ActionOutcome:
        """Prepare heroes and the environment pile, then wait for a turn order."""
        state = self.state
        if state.phase != CombatPhase.SETUP:
            return self._reject("Combat has already started")
        mark = len(state.log)

        for hero in state.heroes:
            hero.reset_for_encounter()

        if not state.piles.environment:
            unused = [c for c in HeroClass if c not in {h.hero_class for h in state.heroes}]
            if unused:
                state.piles.environment = build_environment_pile(state.piles.royalty, unused[0])

        monster = state.monster
        state.add_log(
            "start",
            f"{monster.name} appears! Health: {monster.health}",
            monster=monster.id, health=monster.health, room=state.room, tier=state.tier,
        )
        self._set_phase(CombatPhase.CHOOSE_TURN_ORDER)
        return self._accept(mark)

    def choose_turn_order(self, direction: Union[str, TurnOrder]) -> ActionOutcome:
        """
        Fix the rotation direction, then deal attached cards and flip the environment.

        Raises:
            ValueError: direction is not 'left' or 'right'
        """
        state = self.state
        if state.phase != CombatPhase.CHOOSE_TURN_ORDER:
            return self._reject(f"Cannot choose turn order during {state.phase.value}")
        order = TurnOrder.parse(direction)
        mark = len(state.log)

        state.turn_order = order
        state.add_log("turn", f"Turn order: {order.value}", direction=order.value)

        self._set_phase(CombatPhase.ATTACH_CARDS)
        self._attach_cards()

        self._set_phase(CombatPhase.FLIP_ENVIRONMENT)
        self._flip_environment()

        self._begin_round()
        return self._accept(mark)

    def _attach_cards(self) -> None:
        """Deal attached cards, redealing while any rank shows up too often."""
        state = self.state
        config = self.config
        shuffle_rng = self.rng.shuffle_rng

        for attempt in range(1, config.max_redeal_attempts + 1):
            drawn: List[Card] = []
            for hero in state.living_heroes:
                card = state.draw_card(shuffle_rng)
                hero.attached_cards.append(card)
                drawn.append(card)
            for _ in range(MONSTER_ATTACH_COUNT):
                card = state.draw_card(shuffle_rng)
                state.monster.attached_cards.append(card)
                drawn.append(card)

            counts = count_ranks(drawn)
            rank, count = max(counts.items(), key=lambda kv: kv[1])
            if count < config.redeal_rank_limit:
                self._log_attached()
                return

            if attempt == config.max_redeal_attempts:
                logger.warning(
                    "Redeal limit (%d) reached with %d x %s; keeping the deal",
                    config.max_redeal_attempts, count, rank.value,
                )
                state.add_log("redeal", "Redeal limit reached. Keeping the current deal.", forced=True)
                self._log_attached()
                return

            state.redeal_attempts += 1
            state.add_log(
                "redeal",
                f"{count} cards of rank {rank.value} were dealt. Redealing.",
                rank=rank.value, attempt=attempt,
            )
            for combatant in [state.monster] + state.heroes:
                combatant.attached_cards = [c for c in combatant.attached_cards if c not in drawn]
            state.piles.return_to_peon(drawn)
            state.piles.shuffle_peon(shuffle_rng)

    def _log_attached(self) -> None:
        state = self.state
        for combatant in state.living_heroes + [state.monster]:
            labels = [c.label for c in combatant.attached_cards]
            state.add_log("cards", f"{combatant.name} attaches {', '.join(labels)}", target=combatant.id, cards=labels)

    def _flip_environment(self) -> None:
        state = self.state
        card = state.piles.environment_top
        if card is None:
            state.add_log("environment", "There is no environment to reveal.")
            return
        apply_environment(state, card, self.rng.shuffle_rng, self.config)
        state.piles.rotate_environment()

    # =========================================================================
    # Turn flow
    # =========================================================================

    def _begin_round(self) -> None:
        """Start a round: the monster acts against the round's first hero."""
        state = self.state
        if state.is_over:
            return
        start = 0 if state.heroes[0].is_alive else state.next_living_index(0)
        if start is None:
            pipeline.check_outcome(state)
            return
        state.current_hero_index = start
        state.heroes_acted = []
        state.add_log(
            "turn",
            f"Round {state.round_count + 1}: {state.monster.name}'s turn",
            round=state.round_count + 1,
        )
        self._set_phase(CombatPhase.MONSTER_FLIP)

    def _begin_hero_turns(self) -> None:
        state = self.state
        if not state.current_hero.is_alive:
            index = state.next_living_index(state.current_hero_index)
            if index is None:
                pipeline.check_outcome(state)
                return
            state.current_hero_index = index
        state.heroes_acted = []
        self._announce_hero()

    def _announce_hero(self) -> None:
        hero = self.state.current_hero
        self.state.add_log("turn", f"It's {hero.name}'s turn.", hero=hero.id, index=self.state.current_hero_index)
        self._set_phase(CombatPhase.HERO_FLIP)

    def _advance_turn(self) -> None:
        """Pass to the next living hero, or close the round."""
        state = self.state
        if state.is_over:
            return
        state.heroes_acted.append(state.current_hero_index)
        index = state.next_living_index(state.current_hero_index)
        if index is None or index in state.heroes_acted:
            state.round_count += 1
            state.stats["combat_rounds"] += 1
            self._begin_round()
            return
        state.current_hero_index = index
        self._announce_hero()

    # =========================================================================
    # Flips
    # =========================================================================

    def request_flip(self) -> ActionOutcome:
        """Flip two cards for the monster or the current hero."""
        state = self.state
        if state.phase not in (CombatPhase.MONSTER_FLIP, CombatPhase.HERO_FLIP):
            return self._reject(f"Cannot flip during {state.phase.value}")
        mark = len(state.log)
        if state.phase == CombatPhase.MONSTER_FLIP:
            self._monster_flip()
        else:
            self._hero_flip()
        return self._accept(mark)

    def _draw_flip(self, actor_id: str, actor_name: str) -> List[Card]:
        state = self.state
        flipped = [state.draw_card(self.rng.shuffle_rng) for _ in range(FLIP_COUNT)]
        state.last_flip = flipped
        labels = [c.label for c in flipped]
        state.add_log("flip", f"{actor_name} flips {' and '.join(labels)}", actor=actor_id, cards=labels)
        return flipped

    def _monster_flip(self) -> None:
        state = self.state
        monster = state.monster
        flipped = self._draw_flip(monster.id, monster.name)

        matched = rank_matches(flipped, monster.attached_cards)
        ranks = {c.rank for c in flipped}
        for card in monster.attached_cards:
            if card.tapped and card.rank in ranks:
                card.tapped = False
                state.add_log("cards", f"{monster.name}'s {card.label} is untapped.", card=card.label)

        if matched:
            special = monster.definition.special
            if monster.consume_status(StatusKind.ABILITY_BLOCKED):
                state.add_log("special", f"{monster.name}'s {special.name} is blocked!", monster=monster.id)
                target = self._monster_context().current_hero
                if target is not None:
                    pipeline.apply_damage_to_hero(state, target, self.config.match_damage)
            else:
                state.add_log(
                    "special",
                    f"{monster.name} uses {special.name}! {special.text}",
                    monster=monster.id, special=special.name,
                )
                execute_monster_special(self._monster_context(is_special=True))
        else:
            state.add_log("flip", "No match.", actor=monster.id)

        state.piles.discard_cards(flipped)
        if not state.is_over:
            self._set_phase(CombatPhase.MONSTER_ROLL)

    def _hero_flip(self) -> None:
        state = self.state
        hero = state.current_hero
        flipped = self._draw_flip(hero.id, hero.name)

        damage = 0
        if not hero.is_tapped and class_card_matched(hero, flipped):
            data = HERO_CLASSES[hero.hero_class]
            if hero.consume_status(StatusKind.ABILITY_DISABLED):
                state.add_log("special", f"{hero.name}'s {data.ability_name} is disabled!", hero=hero.id)
                damage = calculate_match_damage(hero, flipped, self.config)
            else:
                hero.is_tapped = True
                hero.class_card.tapped = True
                state.add_log(
                    "special",
                    f"{hero.name} uses {data.ability_name}! {data.ability_text}",
                    hero=hero.id, special=data.ability_name,
                )
                execute_hero_special(self._context(hero, flipped=flipped))
        else:
            damage = calculate_match_damage(hero, flipped, self.config)

        if damage and not state.is_over:
            state.add_log("match", f"Match! {hero.name} strikes for {damage}.", hero=hero.id, amount=damage)
            pipeline.apply_damage_to_monster(state, damage, source=hero)

        state.piles.discard_cards(flipped)
        if not state.is_over:
            self._set_phase(CombatPhase.HERO_ROLL)

    # =========================================================================
    # Rolls
    # =========================================================================

    def request_roll(self) -> ActionOutcome:
        """Roll for the monster or the current hero."""
        state = self.state
        if state.phase not in (CombatPhase.MONSTER_ROLL, CombatPhase.HERO_ROLL):
            return self._reject(f"Cannot roll during {state.phase.value}")
        mark = len(state.log)
        if state.phase == CombatPhase.MONSTER_ROLL:
            self._monster_roll()
        else:
            self._hero_roll()
        return self._accept(mark)

    def _monster_roll(self) -> None:
        state = self.state
        monster = state.monster
        definition = monster.definition

        bonus = monster_roll_bonus(state, self.config)
        die = self.rng.dice_rng.roll_die(monster.die_sides)
        monster.rolls_made += 1
        value = definition.clamp_roll(die + bonus)
        state.add_log(
            "roll",
            f"{monster.name} rolls {die}{_bonus_text(bonus)}: {value}",
            actor=monster.id, die=die, bonus=bonus, value=value,
        )

        action = definition.roll_table.get(value)
        if action is None:
            state.add_log("roll", f"{monster.name} does nothing this turn.", actor=monster.id)
        else:
            state.add_log("action", f"{monster.name} uses {action.name}: {action.text}", actor=monster.id, action=action.name)
            execute_monster_action(self._monster_context(roll=value), action)

        if not state.is_over:
            self._begin_hero_turns()

    def _hero_roll(self) -> None:
        state = self.state
        hero = state.current_hero

        if hero.consume_status(StatusKind.SKIP_ROLL):
            hero.consume_marker(MarkerKind.EXTRA_ROLL)
            state.add_log("roll", f"{hero.name} loses their roll!", hero=hero.id)
        else:
            self._resolve_hero_roll(hero)
            if not state.is_over and hero.is_alive and hero.consume_marker(MarkerKind.EXTRA_ROLL):
                state.add_log("special", f"{hero.name} rolls again with +1!", hero=hero.id)
                self._resolve_hero_roll(hero, extra=1)

        self._advance_turn()

    def _resolve_hero_roll(self, hero: Hero, extra: int = 0) -> None:
        """
        One hero roll: die + modifiers, clamped, then reflection, the
        table effect and enchantment triggers.
        """
        state = self.state
        config = self.config

        die = self.rng.dice_rng.roll_die(config.hero_die)
        bonus = extra + hero_roll_bonus(state, hero, config)
        if hero.consume_marker(MarkerKind.ROLL_BONUS):
            bonus += 1
        if hero.consume_status(StatusKind.ROLL_BONUS):
            bonus += 1
        if hero.consume_status(StatusKind.ROLL_PENALTY):
            bonus -= 1
        hero.has_rolled = True

        low, high = hero.table_domain
        value = min(high, max(low, die + bonus))
        hero.last_roll = value
        state.add_log(
            "roll",
            f"{hero.name} rolls {die}{_bonus_text(bonus)}: {value}",
            hero=hero.id, die=die, bonus=bonus, value=value,
        )

        if value <= REFLECT_MAX_ROLL:
            for status, amount in REFLECT_DAMAGE.items():
                if state.monster.has_status(status):
                    state.add_log("special", f"{state.monster.name}'s {status.value} lashes back!", status=status.value)
                    pipeline.apply_damage_to_hero(state, hero, amount, is_attack=False)
            if state.is_over or hero.is_dead:
                return

        ctx = self._context(
            hero,
            roll=value,
            raw_roll=die + bonus,
            flipped=list(state.last_flip),
            enchant_bonus=enchantment_bonus(hero.enchantment, value),
        )
        entry = get_roll_entry(hero.hero_class, value)
        if entry is not None:
            state.add_log("action", f"{hero.name} uses {entry.name}!", hero=hero.id, action=entry.name)
        if not execute_hero_roll(ctx):
            state.add_log("roll", f"{hero.name} does nothing this turn.", hero=hero.id)

        if state.is_over or hero.is_dead:
            return

        if hero.enchantment == Enchantment.CRUSADER and value == CRUSADER_ROLL and not hero.is_tapped:
            hero.is_tapped = True
            if hero.class_card is not None:
                hero.class_card.tapped = True
            state.add_log("special", f"The crusader enchantment calls on {hero.name}'s ability!", hero=hero.id)
            execute_hero_special(ctx)

        if hero.enchantment == Enchantment.FORTUNE and value == FORTUNE_ROLL:
            self._fortune(hero)

    def _fortune(self, hero: Hero) -> None:
        state = self.state
        for _ in range(self.config.max_follow_up_chain):
            state.bonus_gold += FORTUNE_GOLD
            state.add_log("reward", f"Fortune smiles on {hero.name}: +{FORTUNE_GOLD} gold!", hero=hero.id, gold=FORTUNE_GOLD)
            value = self.rng.dice_rng.roll_die(self.config.secondary_die)
            state.add_log("roll", f"Fortune roll: {value}", value=value, die=self.config.secondary_die)
            if value != FORTUNE_ROLL:
                return

    # =========================================================================
    # Items
    # =========================================================================

    def _find_item(self, item_ref: Union[int, str, ItemDescriptor]) -> Optional[int]:
        inventory = self.state.inventory
        if isinstance(item_ref, ItemDescriptor):
            for i, item in enumerate(inventory):
                if item is item_ref:
                    return i
            item_ref = item_ref.item_id
        if isinstance(item_ref, int) and not isinstance(item_ref, bool):
            return item_ref if 0 <= item_ref < len(inventory) else None
        for i, item in enumerate(inventory):
            if item.item_id == item_ref:
                return i
        return None

    def use_item(
        self,
        item_ref: Union[int, str, ItemDescriptor],
        target_hero_ref: Union[int, str, Hero, None] = None,
    ) -> ActionOutcome:
        """
        Use an inventory item.

        Potions cost the current hero's roll and are only usable in
        HERO_ROLL. Charms and scrolls are free in either flip phase or
        HERO_ROLL. Targeted items default to the current hero.
        """
        state = self.state
        if state.is_over:
            return self._reject("Combat is over")

        index = self._find_item(item_ref)
        if index is None:
            return self._reject(f"No such item: {item_ref}")
        item = state.inventory[index]

        if not item.usable_in_combat:
            return self._reject(f"{item.name} cannot be used in combat")
        if item.costs_roll and state.phase != CombatPhase.HERO_ROLL:
            return self._reject(f"{item.name} can only be used in place of a hero's roll")
        if state.phase not in ITEM_PHASES:
            return self._reject(f"Items cannot be used during {state.phase.value}")

        target: Optional[Hero] = None
        if item.requires_target:
            target = state.current_hero if target_hero_ref is None else state.get_hero(target_hero_ref)
            if target is None:
                return self._reject(f"No such hero: {target_hero_ref}")
            if target.is_dead:
                return self._reject(f"{target.name} has fallen")

        mark = len(state.log)
        state.inventory.pop(index)
        state.stats["items_used"] += 1
        who = f" on {target.name}" if target else ""
        state.add_log("item", f"Used {item.name}{who}.", item=item.item_id, target=target.id if target else None)

        if item.item_type == ItemType.POTION:
            amount = target.max_health if item.heal == FULL_HEAL else item.heal
            pipeline.heal_hero(state, target, amount)
        elif item.item_id == "ability_blocker":
            state.monster.status_effects.add(StatusKind.ABILITY_BLOCKED)
        elif item.item_id == "guardian_angel":
            target.markers.add(MarkerKind.GUARDIAN_ANGEL)
        elif item.enchantment is not None:
            target.enchantment = item.enchantment
            state.add_log("status", f"{target.name}'s weapon is now {item.enchantment.value}.", hero=target.id)

        if item.costs_roll:
            # the potion replaces the roll, so the roll-again marker goes too
            state.current_hero.consume_marker(MarkerKind.EXTRA_ROLL)
            self._advance_turn()
        return self._accept(mark)

    # =========================================================================
    # Autoplay
    # =========================================================================

    def advance(self) -> ActionOutcome:
        """Take the default step for the current phase (right turn order)."""
        phase = self.state.phase
        if phase == CombatPhase.SETUP:
            return self.start()
        if phase == CombatPhase.CHOOSE_TURN_ORDER:
            return self.choose_turn_order(TurnOrder.RIGHT)
        if phase in (CombatPhase.MONSTER_FLIP, CombatPhase.HERO_FLIP):
            return self.request_flip()
        if phase in (CombatPhase.MONSTER_ROLL, CombatPhase.HERO_ROLL):
            return self.request_roll()
        return self._reject("Combat is over")

    def run_to_completion(self, max_steps: int = 10000) -> CombatResult:
        """Autoplay until the encounter ends."""
        for _ in range(max_steps):
            if self.is_combat_over():
                break
            self.advance()
        else:
            raise RuntimeError(f"Combat did not finish within {max_steps} steps")
        return self.get_result()

    # =========================================================================
    # Completion
    # =========================================================================

    def _accept(self, mark: int) -> ActionOutcome:
        if self.state.is_over and self.result is None:
            self._end_combat()
        return ActionOutcome(accepted=True, events=list(self.state.log.entries[mark:]))

    def _reject(self, error: str) -> ActionOutcome:
        logger.debug("Rejected input: %s", error)
        return ActionOutcome(accepted=False, error=error)

    def _end_combat(self) -> None:
        state = self.state
        monster = state.monster
        rewards: Optional[Rewards] = None

        if state.phase == CombatPhase.VICTORY:
            state.add_log("victory", f"Victory! {monster.name} has been defeated.", monster=monster.id)
            rewards = generate_rewards(self.rng.treasure_rng, monster.definition, state.room, self.config)
            rewards.gold += state.bonus_gold
            self._apply_rewards(rewards)
            logger.info("Victory over %s after %d rounds", monster.name, state.round_count)
        else:
            state.add_log("defeat", "The party has fallen.", monster=monster.id)
            logger.info("Defeat against %s after %d rounds", monster.name, state.round_count)

        state.rewards = rewards
        for combatant in [monster] + state.heroes:
            state.piles.discard_cards(combatant.attached_cards)
            combatant.attached_cards = []

        self.result = CombatResult(
            victory=state.phase == CombatPhase.VICTORY,
            updated_heroes=state.heroes,
            rewards=rewards,
            piles=state.piles,
            inventory=state.inventory,
            stats=state.stats,
            rounds=state.round_count,
            monster_id=monster.id,
        )

    def _apply_rewards(self, rewards: Rewards) -> None:
        """Heal, revive and stock the inventory. The pipeline is closed by now."""
        state = self.state
        for tier, value, text in rewards.rolls:
            state.add_log("reward", f"Reward roll (tier {tier}): {value}, {text}", tier=tier, roll=value)

        if rewards.revive:
            fallen = next((h for h in state.heroes if h.is_dead), None)
            if fallen is not None:
                fallen.health = max(1, fallen.max_health // 2)
                state.add_log("heal", f"{fallen.name} is revived with {fallen.health} health!", target=fallen.id)

        if rewards.party_heal:
            for hero in state.living_heroes:
                hero.health = min(hero.max_health, hero.health + rewards.party_heal)
            state.add_log("heal", f"The party heals {rewards.party_heal}.", amount=rewards.party_heal)

        for item_id in rewards.items:
            state.inventory.append(get_item(item_id))

        state.add_log(
            "reward",
            f"Rewards: {rewards.gold} gold" + (f", {', '.join(rewards.items)}" if rewards.items else ""),
            gold=rewards.gold, items=list(rewards.items),
        )

    def get_result(self) -> Optional[CombatResult]:
        """The completion result, or None while the fight is running."""
        return self.result

    def get_state_dict(self) -> Dict[str, Any]:
        """Get current combat state as a dictionary."""
        state = self.state
        return {
            "phase": state.phase.value,
            "round": state.round_count,
            "room": state.room,
            "tier": state.tier,
            "turn_order": state.turn_order.value,
            "current_hero": state.current_hero_index,
            "environment": state.environment.to_dict() if state.environment else None,
            "monster": state.monster.to_dict(),
            "heroes": [h.to_dict() for h in state.heroes],
            "inventory": [i.to_dict() for i in state.inventory],
            "piles": {
                "peon": len(state.piles.peon),
                "discard": len(state.piles.discard),
                "environment": len(state.piles.environment),
            },
            "stats": dict(state.stats),
            "rng": {"seed": self.rng.seed, **self.rng.get_counters()},
            "combat_over": state.is_over,
            "victory": self.is_victory(),
        }


def _bonus_text(bonus: int) -> str:
    if bonus == 0:
        return ""
    return f" ({bonus:+d})"


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

def create_encounter(
    heroes: List[Hero],
    piles: PileManager,
    room: Union[str, RoomKind] = RoomKind.CLUB,
    tier: int = 1,
    inventory: Optional[List[ItemDescriptor]] = None,
    rng: Optional[BattleRNG] = None,
    config: CombatConfig = DEFAULT_CONFIG,
    monster_id: Optional[str] = None,
) -> CombatEngine:
    """
    Create and start an encounter for an existing party and piles.

    Args:
        heroes: The party (dead heroes stay in their seats)
        piles: Peon, discard, environment and royalty piles
        room: club / spade / spade+ / final
        tier: Floor tier (1+)
        inventory: Party items usable in the fight
        rng: Seeded RNG streams
        monster_id: Fight this monster instead of rolling one

    Returns:
        CombatEngine waiting for a turn order
    """
    room = RoomKind.parse(room)
    if not heroes:
        raise ValueError("An encounter needs at least one hero")
    if tier < 1:
        raise ValueError(f"Tier must be at least 1, got {tier}")
    rng = rng or BattleRNG(seed=0)

    if monster_id is not None:
        definition = get_monster(monster_id)
        max_health = config.elite_max_health if room.is_elite else None
    else:
        definition, max_health = select_monster(rng.monster_rng, room, tier, config)

    state = CombatState(
        monster=create_monster(definition, max_health),
        heroes=list(heroes),
        piles=piles,
        room=room.value,
        tier=tier,
        inventory=inventory if inventory is not None else [],
    )
    engine = CombatEngine(state, rng=rng, config=config)
    engine.start()
    return engine


def create_combat(
    classes: Sequence[Union[str, HeroClass]] = ("bladedancer", "tracker", "guardian"),
    room: Union[str, RoomKind] = RoomKind.CLUB,
    tier: int = 1,
    seed: Union[int, str] = 0,
    monster_id: Optional[str] = None,
    items: Optional[Sequence[str]] = None,
    config: CombatConfig = DEFAULT_CONFIG,
) -> CombatEngine:
    """Set up a fresh adventure and start its first encounter."""
    rng = BattleRNG.from_string(seed) if isinstance(seed, str) else BattleRNG(seed=seed)
    adventure = setup_adventure(rng.shuffle_rng, classes, config)
    inventory = [get_item(item_id) for item_id in (items or [])]
    return create_encounter(
        adventure.heroes,
        adventure.piles,
        room=room,
        tier=tier,
        inventory=inventory,
        rng=rng,
        config=config,
        monster_id=monster_id,
    )


__all__ = [
    "ActionOutcome",
    "CombatResult",
    "CombatEngine",
    "create_encounter",
    "create_combat",
]
