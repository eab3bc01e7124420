"""
Random Agent Implementation.

Simple strategies that ignore their cards.
Useful for testing and as a baseline for evaluation.
"""

import random
from typing import List, Optional

from pokernight.agents.base import BaseAgent
from pokernight.core.decision import Decision, SeatView, TableView
from pokernight.core.rules import ActionType


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when something is owed
    - raise_probability: How likely to raise vs check/call
    """

    def __init__(
        self,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the random agent.

        Args:
            name: Optional name
            fold_probability: Probability of folding (0-1)
            raise_probability: Probability of raising (0-1)
            rng: Random source (seed it for reproducible games)
        """
        super().__init__(name)
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self.rng = rng or random.Random()

    def decide(
        self,
        seat: SeatView,
        view: TableView,
        legal_actions: List[ActionType],
        min_raise: int,
    ) -> Decision:
        if not legal_actions:
            return Decision(ActionType.FOLD)

        roll = self.rng.random()

        # Folding for free is pointless
        if ActionType.CALL in legal_actions and roll < self.fold_probability:
            return Decision(ActionType.FOLD)

        if ActionType.RAISE in legal_actions and roll < self.fold_probability + self.raise_probability:
            min_total = view.current_bet + min_raise
            max_total = seat.chips + seat.current_bet
            if max_total > min_total:
                amount = self.rng.randint(min_total, max_total)
            else:
                amount = max_total
            return Decision(ActionType.RAISE, amount)

        if ActionType.CHECK in legal_actions:
            return Decision(ActionType.CHECK)
        return Decision(ActionType.CALL)


class CallAgent(BaseAgent):
    """
    An agent that always calls (or checks).

    Useful for testing and as a simple baseline.
    """

    def decide(
        self,
        seat: SeatView,
        view: TableView,
        legal_actions: List[ActionType],
        min_raise: int,
    ) -> Decision:
        """Always check or call."""
        if ActionType.CHECK in legal_actions:
            return Decision(ActionType.CHECK)
        if ActionType.CALL in legal_actions:
            return Decision(ActionType.CALL)
        return Decision(ActionType.FOLD)
