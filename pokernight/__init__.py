"""
Poker Night - Texas Hold'em Against Computer Opponents

A single-table Texas Hold'em simulator with:
- Pure Python betting and hand evaluation engine
- Interchangeable opponent strategies (heuristic, language model, random)
- FastAPI server exposing the table to a front end

Usage:
    from pokernight.core import Card, Deck, Player, TexasHoldemGame
    from pokernight.agents import HeuristicAgent, DecisionDispatcher
"""

__version__ = "0.2.0"

from pokernight.core.card import Card, Deck
from pokernight.core.player import Player
from pokernight.core.game import TexasHoldemGame
from pokernight.core.hand import HandRank, evaluate_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "TexasHoldemGame",
    "HandRank",
    "evaluate_hand",
    "__version__",
]
