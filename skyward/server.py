"""
Skyward Ascent Combat Server

A small JSON API that hosts combat sessions in memory so a browser or a
remote agent can play encounters step by step.

Endpoints:
    POST /api/combat                  start a session
    GET  /api/combat/{id}             observation
    GET  /api/combat/{id}/actions     available actions
    POST /api/combat/{id}/action      take an action
    GET  /api/combat/{id}/events      combat log (?since=N)
    DELETE /api/combat/{id}           end a session

Usage:
    python cli.py serve --port 8765
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from .agent_api import get_available_action_dicts, get_observation, take_action_dict
from .combat_engine import CombatEngine, create_combat
from .config import ServerConfig
from .state.piles import DeckExhaustedError


logger = logging.getLogger(__name__)

app = FastAPI(title="Skyward Ascent Combat Server")

# session id -> engine
SESSIONS: Dict[str, CombatEngine] = {}


def _session_or_404(session_id: str) -> Optional[CombatEngine]:
    return SESSIONS.get(session_id)


def _not_found(session_id: str) -> JSONResponse:
    return JSONResponse({"error": f"Unknown combat session: {session_id}"}, status_code=404)


# ============================================================================
# ROUTES
# ============================================================================

@app.post("/api/combat")
async def create_session(request: Request):
    """Start a new encounter.

    Request body (all optional):
    {
        "classes": ["bladedancer", "tracker", "guardian"],
        "room": "club",
        "tier": 1,
        "seed": 42,
        "monster_id": "treant",
        "items": ["minor_potion"]
    }
    """
    try:
        body: Dict[str, Any] = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        return JSONResponse({"error": "Body must be a JSON object"}, status_code=400)

    try:
        engine = create_combat(
            classes=body.get("classes", ("bladedancer", "tracker", "guardian")),
            room=body.get("room", "club"),
            tier=int(body.get("tier", 1)),
            seed=body.get("seed", 0),
            monster_id=body.get("monster_id"),
            items=body.get("items"),
        )
    except (ValueError, TypeError) as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = engine
    logger.info("Started session %s against %s", session_id, engine.state.monster.name)
    return JSONResponse({
        "id": session_id,
        "observation": get_observation(engine),
        "actions": get_available_action_dicts(engine),
    })


@app.get("/api/combat/{session_id}")
async def get_session(session_id: str):
    """Get the current observation."""
    engine = _session_or_404(session_id)
    if engine is None:
        return _not_found(session_id)
    return JSONResponse(get_observation(engine))


@app.get("/api/combat/{session_id}/actions")
async def get_actions(session_id: str):
    """List the actions available right now."""
    engine = _session_or_404(session_id)
    if engine is None:
        return _not_found(session_id)
    return JSONResponse({"actions": get_available_action_dicts(engine)})


@app.post("/api/combat/{session_id}/action")
async def post_action(session_id: str, request: Request):
    """Take an action. The body is an ActionDict ({"type": ..., "params": {...}})."""
    engine = _session_or_404(session_id)
    if engine is None:
        return _not_found(session_id)

    try:
        action = await request.json()
    except ValueError:
        return JSONResponse({"error": "Body must be a JSON action"}, status_code=400)
    if not isinstance(action, dict):
        return JSONResponse({"error": "Body must be a JSON action"}, status_code=400)

    try:
        result = take_action_dict(engine, action)
    except DeckExhaustedError as e:
        logger.error("Session %s cannot continue: %s", session_id, e)
        return JSONResponse({"error": str(e)}, status_code=500)

    if not result.get("success"):
        return JSONResponse(result, status_code=400)
    return JSONResponse({
        **result,
        "observation": get_observation(engine),
        "actions": get_available_action_dicts(engine),
    })


@app.get("/api/combat/{session_id}/events")
async def get_events(session_id: str, since: int = 0):
    """Combat log entries, starting at index `since`."""
    engine = _session_or_404(session_id)
    if engine is None:
        return _not_found(session_id)
    entries = engine.state.log.entries[max(0, since):]
    return JSONResponse({
        "events": [e.to_dict() for e in entries],
        "next": len(engine.state.log.entries),
    })


@app.delete("/api/combat/{session_id}")
async def delete_session(session_id: str):
    """Drop a session and return its final result (None if unfinished)."""
    engine = SESSIONS.pop(session_id, None)
    if engine is None:
        return _not_found(session_id)
    result = engine.get_result()
    logger.info("Closed session %s", session_id)
    return JSONResponse({
        "id": session_id,
        "result": result.to_dict() if result else None,
    })


# ============================================================================
# MAIN
# ============================================================================

def serve(config: Optional[ServerConfig] = None) -> None:
    """Run the server with uvicorn."""
    config = config or ServerConfig.from_env()
    logger.info("Serving on http://%s:%d", config.host, config.port)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level,
    )
