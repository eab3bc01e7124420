"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from pokernight.core.rules import MIN_PLAYERS, MAX_PLAYERS, DEFAULT_NUM_PLAYERS, DEFAULT_STARTING_CHIPS


# ============= Request Schemas =============

class InitGameRequest(BaseModel):
    """Request to initialize a game."""
    player_count: int = Field(ge=MIN_PLAYERS, le=MAX_PLAYERS, default=DEFAULT_NUM_PLAYERS)
    starting_chips: int = Field(gt=0, default=DEFAULT_STARTING_CHIPS)
    mode: Optional[str] = Field(default=None, description="online or offline; defaults by API key")
    seed: Optional[int] = Field(default=None, description="Seed for shuffles and bot choices")


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: fold, check, call, raise")
    amount: Optional[int] = Field(default=None, ge=0, description="Total street bet for raise")


class SetModeRequest(BaseModel):
    """Request to switch the opponents' strategy."""
    mode: str = Field(..., description="online or offline")


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    value: int
    text: str
    color: str


class RaiseRangeSchema(BaseModel):
    """Valid raise totals."""
    min: int
    max: int


class LegalActionsSchema(BaseModel):
    """Actions open to the human seat."""
    actions: List[str] = []
    chips_to_call: int = 0
    raise_range: Optional[RaiseRangeSchema] = None
    message: Optional[str] = None


class WinnerSchema(BaseModel):
    """Winner information."""
    ids: List[int]
    description: str
    amount: int


class PlayerCardsSchema(BaseModel):
    """Hole cards revealed once the hand is over."""
    id: int
    cards: List[CardSchema]


class HandSummarySchema(BaseModel):
    """Fields filled in when the hand has ended."""
    winners: Optional[List[WinnerSchema]] = None
    players_cards: Optional[List[PlayerCardsSchema]] = None
    board: Optional[List[CardSchema]] = None


class StartHandSchema(HandSummarySchema):
    """Result of starting a hand."""
    success: bool
    message: str
    hand_number: int
    session_outcome: str
    bot_actions: List[str] = []


class ActionResultSchema(HandSummarySchema):
    """Result of an action."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    bot_actions: List[str] = []
