"""
Poker Night Core - Pure Python Texas Hold'em Game Logic

This module contains all game logic without any network dependencies.
"""

from pokernight.core.card import Card, Deck, Rank, Suit
from pokernight.core.player import Player
from pokernight.core.hand import HandRank, HandCategory, evaluate_hand, describe_hand
from pokernight.core.analysis import HandAnalysis, BoardTexture, analyze_hand, get_board_texture
from pokernight.core.decision import Decision, DecisionError, TableView, SeatView, sanitize_decision
from pokernight.core.game import TexasHoldemGame, ActionResult
from pokernight.core.rules import ActionType, GameMode, PlayerStatus, SessionOutcome, Stage

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "Player",
    "HandRank",
    "HandCategory",
    "evaluate_hand",
    "describe_hand",
    "HandAnalysis",
    "BoardTexture",
    "analyze_hand",
    "get_board_texture",
    "Decision",
    "DecisionError",
    "TableView",
    "SeatView",
    "sanitize_decision",
    "TexasHoldemGame",
    "ActionResult",
    "ActionType",
    "GameMode",
    "PlayerStatus",
    "SessionOutcome",
    "Stage",
]
