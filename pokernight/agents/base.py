"""
Base Agent Interface for Poker Night.

This module defines the abstract base class for all opponent strategies.
Strategies never touch the game object: they receive a read-only
TableView and return a Decision, which the dispatcher sanitizes before the
engine applies it.

Usage:
    class MyAgent(BaseAgent):
        def decide(self, seat, view, legal_actions, min_raise):
            if ActionType.CHECK in legal_actions:
                return Decision(ActionType.CHECK)
            return Decision(ActionType.FOLD)
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from pokernight.core.decision import Decision, SeatView, TableView
from pokernight.core.rules import ActionType


class BaseAgent(ABC):
    """
    Abstract base class for opponent strategies.

    This interface supports:
    - Rule-based agents (the offline heuristic)
    - Remote agents (language model services)
    - Baselines for testing (random, call-only)

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    @abstractmethod
    def decide(
        self,
        seat: SeatView,
        view: TableView,
        legal_actions: List[ActionType],
        min_raise: int,
    ) -> Decision:
        """
        Choose an action for the seat to act.

        Args:
            seat: The deciding seat, including its hole cards
            view: Table snapshot (other seats' cards hidden)
            legal_actions: Actions the seat may choose from
            min_raise: Minimum raise increment

        Returns:
            Decision; for RAISE the amount is the total street bet
        """

    async def decide_async(
        self,
        seat: SeatView,
        view: TableView,
        legal_actions: List[ActionType],
        min_raise: int,
    ) -> Decision:
        """
        Asynchronous variant used by the dispatcher.

        Local strategies answer immediately; remote ones override this to
        await their service.
        """
        return self.decide(seat, view, legal_actions, min_raise)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"

