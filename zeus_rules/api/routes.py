"""API routes for hosted games."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..action_gen.schema import Action
from ..phases import acting_player
from ..resource import Resource
from ..rules_engine import (
    check_win_condition,
    declare_recoloring,
    do_action,
    get_available_actions,
    select_resource,
)
from .store import GameEntry, GameStore

logger = logging.getLogger(__name__)

router = APIRouter()

_store = GameStore()


def get_store() -> GameStore:
    return _store


# Request models
class CreateGameRequest(BaseModel):
    seed: Optional[int] = None
    player_count: Optional[int] = Field(default=None, ge=1, le=4)


class ActionRequest(BaseModel):
    action: Dict[str, Any]


class SelectRequest(BaseModel):
    resource: Optional[Dict[str, Any]] = None
    recoloring: int = 0


def _summary(entry: GameEntry) -> Dict[str, Any]:
    state = entry.state
    winner = check_win_condition(state)
    return {
        "phase": state.phase.value,
        "round": state.round,
        "current_player": state.current_player_index,
        "acting_player": acting_player(state).id,
        "winner": winner.id if winner else None,
    }


def _require(entry: Optional[GameEntry], game_id: str) -> GameEntry:
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Game '{game_id}' not found")
    return entry


# ============================================================================
# Games
# ============================================================================

@router.post("/games")
def create_game(request: CreateGameRequest, store: GameStore = Depends(get_store)) -> Dict[str, Any]:
    """Start a new game and return its id."""
    game_id = store.create(seed=request.seed, player_count=request.player_count)
    with store.locked(game_id) as entry:
        return {"id": game_id, **_summary(_require(entry, game_id))}


@router.get("/games/{game_id}")
def get_game(game_id: str, store: GameStore = Depends(get_store)) -> Dict[str, Any]:
    with store.locked(game_id) as entry:
        entry = _require(entry, game_id)
        return {"id": game_id, **_summary(entry), "state": entry.state.to_dict()}


# ============================================================================
# Actions
# ============================================================================

@router.get("/games/{game_id}/actions")
def list_actions(game_id: str, store: GameStore = Depends(get_store)) -> Dict[str, Any]:
    with store.locked(game_id) as entry:
        entry = _require(entry, game_id)
        actions: List[Dict[str, Any]] = [a.to_dict() for a in get_available_actions(entry.state)]
        return {**_summary(entry), "actions": actions}


@router.post("/games/{game_id}/actions")
def submit_action(game_id: str, request: ActionRequest, store: GameStore = Depends(get_store)) -> Dict[str, Any]:
    """Validate and apply one action. A rejected action still answers 200."""
    try:
        action = Action.from_dict(request.action)
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Malformed action: {e}")

    with store.locked(game_id) as entry:
        entry = _require(entry, game_id)
        result = do_action(entry.state, action, entry.rng)
        if not result.success:
            logger.info("game %s rejected %s: %s", game_id, action.describe(), result.message)
        return {**result.to_dict(), **_summary(entry)}


@router.post("/games/{game_id}/select")
def select(game_id: str, request: SelectRequest, store: GameStore = Depends(get_store)) -> Dict[str, Any]:
    """Pick a die or card and declare how much favor goes into recoloring it."""
    try:
        resource = Resource.from_dict(request.resource)
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Malformed resource: {e}")

    with store.locked(game_id) as entry:
        entry = _require(entry, game_id)
        selection = entry.state.selection
        previous = (selection.resource, selection.recoloring)
        result = select_resource(entry.state, resource)
        if result.success and not resource.is_none and request.recoloring:
            result = declare_recoloring(entry.state, request.recoloring)
            if not result.success:
                # A refused declaration leaves the earlier selection in place.
                selection.resource, selection.recoloring = previous
        return {
            **result.to_dict(),
            "selection": {
                "resource": selection.resource.to_dict(),
                "recoloring": selection.recoloring,
            },
        }
