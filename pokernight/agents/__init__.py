"""
Poker Night Agents - Opponent Strategies

This module provides the strategy interface, the local and remote
strategies, and the dispatcher that runs them for computer seats.
"""

from pokernight.agents.base import BaseAgent
from pokernight.agents.random_agent import RandomAgent, CallAgent
from pokernight.agents.heuristic_agent import HeuristicAgent
from pokernight.agents.llm_agent import LLMAgent
from pokernight.agents.dispatcher import DecisionDispatcher

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "CallAgent",
    "HeuristicAgent",
    "LLMAgent",
    "DecisionDispatcher",
]
