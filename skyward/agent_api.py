"""
Agent API - JSON-serializable action and observation interfaces.

This module is the surface scripted players, the CLI and the HTTP server
use to drive a CombatEngine. All actions and observations are plain dicts.

Key types:
- ActionDict: JSON-serializable action with id, type, label, params, phase
- ActionResult: Result of executing an action
- ObservationDict: Complete observable encounter state

Usage:
    engine = create_combat(seed=42)

    # Get current observation
    obs = get_observation(engine)

    # Get available actions as dicts
    actions = get_available_action_dicts(engine)

    # Execute action dict
    result = take_action_dict(engine, actions[0])
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict

from .combat_engine import ActionOutcome, CombatEngine
from .state.combat import CombatPhase, TurnOrder


# =============================================================================
# Type Definitions
# =============================================================================

class ActionDict(TypedDict, total=False):
    """JSON-serializable action dict."""
    id: str  # Stable identifier for the action
    type: str  # choose_turn_order / flip / roll / use_item
    label: str  # Human-readable summary
    params: Dict[str, Any]  # Required parameters
    requires: List[str]  # Optional hints for missing params
    phase: str  # Current phase


class ActionResult(TypedDict, total=False):
    """Result of executing an action."""
    success: bool
    error: Optional[str]
    data: Dict[str, Any]


class ObservationDict(TypedDict, total=False):
    """Complete observable encounter state."""
    phase: str
    round: int
    combat: Dict[str, Any]
    events: List[Dict[str, Any]]
    result: Optional[Dict[str, Any]]


# =============================================================================
# Action ID Generation
# =============================================================================

def generate_action_id(action_type: str, *args) -> str:
    """
    Generate a deterministic action ID from type and parameters.

    IDs are stable for identical state + phase.
    """
    parts = [action_type]
    for arg in args:
        if arg is not None and arg != -1:
            parts.append(str(arg))
    return "_".join(parts)


# =============================================================================
# Action Dict Generators
# =============================================================================

def generate_item_actions(engine: CombatEngine) -> List[ActionDict]:
    """Generate use_item actions for every item usable right now."""
    state = engine.state
    phase = state.phase
    if phase not in (CombatPhase.MONSTER_FLIP, CombatPhase.HERO_FLIP, CombatPhase.HERO_ROLL):
        return []

    actions: List[ActionDict] = []
    for i, item in enumerate(state.inventory):
        if not item.usable_in_combat:
            continue
        if item.costs_roll and phase != CombatPhase.HERO_ROLL:
            continue
        if not item.requires_target:
            actions.append({
                "id": generate_action_id("use_item", i),
                "type": "use_item",
                "label": f"Use {item.name}",
                "params": {"item_index": i},
                "phase": phase.value,
            })
            continue
        for j, hero in enumerate(state.heroes):
            if hero.is_dead:
                continue
            actions.append({
                "id": generate_action_id("use_item", i, j),
                "type": "use_item",
                "label": f"Use {item.name} on {hero.name}",
                "params": {"item_index": i, "target_index": j},
                "phase": phase.value,
            })
    return actions


def get_available_action_dicts(engine: CombatEngine) -> List[ActionDict]:
    """
    Get all valid actions for the current encounter state.

    Returns:
        List of ActionDict objects
    """
    state = engine.state
    phase = state.phase
    if state.is_over:
        return []

    actions: List[ActionDict] = []
    if phase == CombatPhase.CHOOSE_TURN_ORDER:
        for order in TurnOrder:
            actions.append({
                "id": generate_action_id("choose_turn_order", order.value),
                "type": "choose_turn_order",
                "label": f"Play to the {order.value}",
                "params": {"direction": order.value},
                "phase": phase.value,
            })
    elif phase in (CombatPhase.MONSTER_FLIP, CombatPhase.HERO_FLIP):
        actor = state.monster.name if phase == CombatPhase.MONSTER_FLIP else state.current_hero.name
        actions.append({
            "id": generate_action_id("flip"),
            "type": "flip",
            "label": f"Flip two cards for {actor}",
            "params": {},
            "phase": phase.value,
        })
    elif phase in (CombatPhase.MONSTER_ROLL, CombatPhase.HERO_ROLL):
        actor = state.monster.name if phase == CombatPhase.MONSTER_ROLL else state.current_hero.name
        actions.append({
            "id": generate_action_id("roll"),
            "type": "roll",
            "label": f"Roll for {actor}",
            "params": {},
            "phase": phase.value,
        })

    actions.extend(generate_item_actions(engine))
    return actions


def _outcome_to_result(outcome: ActionOutcome) -> ActionResult:
    return {
        "success": outcome.accepted,
        "error": outcome.error,
        "data": {"events": [e.to_dict() for e in outcome.events]},
    }


def take_action_dict(engine: CombatEngine, action: ActionDict) -> ActionResult:
    """
    Execute a JSON action dict and return the result.

    Args:
        action: ActionDict with type and params

    Returns:
        ActionResult with success status and any error message
    """
    if not isinstance(action, dict):
        return {"success": False, "error": "Action must be a JSON object"}
    action_type = action.get("type", "")
    params = action.get("params", {}) or {}
    if not isinstance(params, dict):
        return {"success": False, "error": "Action params must be a JSON object"}

    try:
        if action_type == "choose_turn_order":
            outcome = engine.choose_turn_order(params.get("direction", TurnOrder.RIGHT.value))
        elif action_type == "flip":
            outcome = engine.request_flip()
        elif action_type == "roll":
            outcome = engine.request_roll()
        elif action_type == "use_item":
            outcome = engine.use_item(params.get("item_index", 0), params.get("target_index"))
        else:
            return {"success": False, "error": f"Unknown action type: {action_type}"}
    except ValueError as e:
        return {"success": False, "error": str(e)}

    return _outcome_to_result(outcome)


# =============================================================================
# Observation
# =============================================================================

def get_observation(engine: CombatEngine, include_events: bool = False) -> ObservationDict:
    """
    Build the observation for the current encounter state.

    Args:
        include_events: Include the full combat log

    Returns:
        ObservationDict
    """
    state = engine.state
    result = engine.get_result()
    obs: ObservationDict = {
        "phase": state.phase.value,
        "round": state.round_count,
        "combat": engine.get_state_dict(),
        "result": result.to_dict() if result else None,
    }
    if include_events:
        obs["events"] = [e.to_dict() for e in state.log.entries]
    return obs


__all__ = [
    "ActionDict",
    "ActionResult",
    "ObservationDict",
    "generate_action_id",
    "generate_item_actions",
    "get_available_action_dicts",
    "take_action_dict",
    "get_observation",
]
