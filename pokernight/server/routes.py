"""
HTTP API Routes for Poker Night.

One table per server: the human plays seat 0 through these routes and the
computer seats act in between, driven by the decision dispatcher.
"""

import logging
import random
from typing import Dict, Any, List, Optional
from fastapi import APIRouter, HTTPException

from pokernight.agents import DecisionDispatcher, HeuristicAgent, LLMAgent
from pokernight.config import get_settings
from pokernight.core.game import TexasHoldemGame
from pokernight.core.rules import ActionType, GameMode, PlayerStatus, HUMAN_SEAT
from pokernight.server.schemas import (
    InitGameRequest, ActionRequest, SetModeRequest,
    ActionResultSchema, LegalActionsSchema, StartHandSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Single-table session
_game: Optional[TexasHoldemGame] = None
_dispatcher: Optional[DecisionDispatcher] = None


def get_game() -> TexasHoldemGame:
    """Get the current game instance."""
    if _game is None:
        raise HTTPException(status_code=400, detail="Game not initialized")
    return _game


def get_dispatcher() -> DecisionDispatcher:
    """Get the dispatcher driving the current game's bots."""
    if _dispatcher is None:
        raise HTTPException(status_code=400, detail="Game not initialized")
    return _dispatcher


def parse_mode(mode: str) -> GameMode:
    try:
        return GameMode(mode.lower())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid mode: {mode}")


def hand_summary(game: TexasHoldemGame) -> Dict[str, Any]:
    """Winners, revealed hole cards and board of a finished hand."""
    if game.is_hand_running() or not game.winners:
        return {}
    return {
        "winners": game.get_winners(),
        "players_cards": [
            {"id": p.id, "cards": [c.to_dict() for c in p.hole_cards]}
            for p in game.players if p.hole_cards and p.status != PlayerStatus.FOLDED
        ],
        "board": [c.to_dict() for c in game.community_cards],
    }


def bot_messages(results: List) -> List[str]:
    return [r.message for r in results]


@router.post("/init_game")
async def init_game(req: InitGameRequest) -> Dict[str, Any]:
    """
    Initialize a new session with the requested number of seats.

    The human always sits at seat 0; the mode defaults to online when a
    language model key is configured.
    """
    global _game, _dispatcher
    settings = get_settings()
    mode = parse_mode(req.mode) if req.mode else settings.default_mode
    # Separate streams so the deal does not depend on how often bots roll
    deal_rng = random.Random(req.seed) if req.seed is not None else None
    bot_rng = random.Random(req.seed + 1) if req.seed is not None else None

    try:
        _game = TexasHoldemGame(
            num_players=req.player_count,
            small_blind=settings.small_blind,
            big_blind=settings.big_blind,
            starting_chips=req.starting_chips,
            human_seat=HUMAN_SEAT,
            game_mode=mode,
            rng=deal_rng,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    online_agent = None
    if settings.api_key:
        online_agent = LLMAgent(settings.api_key, settings.llm_base_url, settings.llm_model)
    _dispatcher = DecisionDispatcher(
        _game,
        online_agent=online_agent,
        fallback=HeuristicAgent(rng=bot_rng),
        timeout=settings.decision_timeout,
    )

    logger.info(f"Game initialized: {req.player_count} players, {req.starting_chips} chips, {mode.value}")
    return {
        "success": True,
        "message": f"Game initialized with {req.player_count} players",
        "player_count": req.player_count,
        "mode": mode.value,
    }


@router.post("/start_hand", response_model=StartHandSchema)
async def start_hand() -> Dict[str, Any]:
    """
    Start a new hand.

    Deals cards, posts blinds and lets the computer seats act until the
    human must act or the hand is over.
    """
    game = get_game()

    if game.is_hand_running():
        raise HTTPException(status_code=400, detail="Hand already in progress")

    if not game.start_hand():
        return {
            "success": False,
            "message": game.logs[-1],
            "hand_number": game.hand_number,
            "session_outcome": game.session_outcome.name,
        }

    results = await get_dispatcher().play_bot_turns()

    response = {
        "success": True,
        "message": f"Hand #{game.hand_number} started",
        "hand_number": game.hand_number,
        "session_outcome": game.session_outcome.name,
        "bot_actions": bot_messages(results),
    }
    response.update(hand_summary(game))
    return response


@router.get("/get_game_state")
async def get_game_state() -> Dict[str, Any]:
    """
    Get the current game state.

    Returns public information and the human seat's private information.
    """
    game = get_game()
    return game.get_state(for_player_id=game.human_seat)


@router.get("/legal_actions", response_model=LegalActionsSchema)
async def get_legal_actions() -> Dict[str, Any]:
    """
    Get legal actions for the human seat.
    """
    game = get_game()

    if not game.is_hand_running():
        return {"actions": [], "message": "No hand in progress"}

    human = game.human
    current = game.current_player
    if current is None or current.id != human.id:
        return {"actions": [], "message": "Not your turn"}

    return {
        "actions": [a.value for a in game.get_legal_actions(human)],
        "chips_to_call": max(0, game.current_bet - human.current_bet),
        "raise_range": game.get_raise_range(human),
    }


@router.post("/take_action", response_model=ActionResultSchema)
async def take_action(req: ActionRequest) -> Dict[str, Any]:
    """
    Take an action for the human seat.

    The computer seats act afterwards. If the hand ends, the response
    includes winners, revealed cards and the board.
    """
    game = get_game()

    try:
        action_type = ActionType(req.action_type.lower())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action type: {req.action_type}")

    current = game.current_player
    if current is None or not current.is_human:
        raise HTTPException(status_code=400, detail="Not your turn")

    # Checks facing a bet are left to the engine, which treats them as folds
    legal = game.get_legal_actions(current)
    if action_type not in legal and action_type != ActionType.CHECK:
        raise HTTPException(status_code=400, detail=f"Illegal action: {action_type.value}")

    if action_type == ActionType.RAISE and req.amount is not None:
        if req.amount < game.get_raise_range(current)["min"]:
            raise HTTPException(status_code=400, detail=f"Raise below minimum: {req.amount}")

    result = game.take_action(action_type, req.amount)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)

    results = await get_dispatcher().play_bot_turns()

    response: Dict[str, Any] = {
        "success": True,
        "message": result.message,
        "action_type": result.action_type.value if result.action_type else None,
        "amount": result.amount,
        "bot_actions": bot_messages(results),
    }
    response.update(hand_summary(game))
    return response


@router.post("/set_mode")
async def set_mode(req: SetModeRequest) -> Dict[str, Any]:
    """Switch the computer seats between online and offline play."""
    game = get_game()
    game.game_mode = parse_mode(req.mode)
    logger.info(f"Game mode set to {game.game_mode.value}")
    return {"success": True, "mode": game.game_mode.value}


@router.post("/reset_game")
async def reset_game() -> Dict[str, Any]:
    """
    Drop the current session.
    """
    global _game, _dispatcher
    _game = None
    _dispatcher = None
    return {"success": True, "message": "Game reset"}
