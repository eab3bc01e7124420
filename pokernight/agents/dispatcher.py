"""
Asynchronous decision dispatch for computer-controlled seats.

The dispatcher asks the strategy selected by the game mode for a decision,
waits for it under a timeout, falls back to the local heuristic on any
failure, sanitizes the result and applies it to the game.

Usage:
    dispatcher = DecisionDispatcher(game, online_agent=LLMAgent(api_key))
    game.start_hand()
    await dispatcher.play_bot_turns()   # until the human must act
"""

import asyncio
import logging
import random
from typing import List, Optional

from pokernight.agents.base import BaseAgent
from pokernight.agents.heuristic_agent import HeuristicAgent
from pokernight.core.decision import (
    Decision, DEFAULT_RAISE_MULTIPLE, legal_actions_for, sanitize_decision,
)
from pokernight.core.game import ActionResult, TexasHoldemGame
from pokernight.core.rules import GameMode


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class DecisionDispatcher:
    """
    Drives the computer opponents of one game.

    Attributes:
        game: The table being played
        online_agent: Strategy used in online mode (None = always offline)
        fallback: Local strategy for offline mode and for every failure
        timeout: Seconds to wait for a decision
        raise_multiple: Anti min-raise factor handed to the sanitizer
    """

    def __init__(
        self,
        game: TexasHoldemGame,
        online_agent: Optional[BaseAgent] = None,
        fallback: Optional[BaseAgent] = None,
        timeout: float = DEFAULT_TIMEOUT,
        raise_multiple: float = DEFAULT_RAISE_MULTIPLE,
        rng: Optional[random.Random] = None,
    ):
        self.game = game
        self.online_agent = online_agent
        self.fallback = fallback or HeuristicAgent(rng=rng)
        self.timeout = timeout
        self.raise_multiple = raise_multiple

    def strategy(self) -> BaseAgent:
        """Strategy for the current game mode."""
        if self.game.game_mode == GameMode.ONLINE and self.online_agent is not None:
            return self.online_agent
        return self.fallback

    async def request_decision(self) -> Decision:
        """
        Get a sanitized decision for the seat to act.

        Raises:
            RuntimeError: If a decision is already outstanding or nobody can act
        """
        game = self.game
        if game.is_thinking:
            raise RuntimeError("A decision is already being computed")

        player = game.current_player
        if player is None or not player.is_active:
            raise RuntimeError("No player can act")

        view = game.view(for_player_id=player.id)
        seat = view.players[player.id]
        legal = legal_actions_for(seat, view)
        min_raise = view.min_raise
        strategy = self.strategy()

        game.is_thinking = True
        try:
            try:
                decision = await asyncio.wait_for(
                    strategy.decide_async(seat, view, legal, min_raise), self.timeout
                )
            except asyncio.TimeoutError:
                logger.warning(f"{strategy!r} timed out after {self.timeout}s deciding for {player.name}, using fallback")
                decision = self.fallback.decide(seat, view, legal, min_raise)
            except Exception as e:
                logger.warning(f"{strategy!r} failed for {player.name} ({e}), using fallback")
                decision = self.fallback.decide(seat, view, legal, min_raise)
        finally:
            game.is_thinking = False

        return sanitize_decision(decision, seat, view, min_raise, self.raise_multiple)

    async def play_bot_turn(self) -> ActionResult:
        """Decide for the seat to act and apply the decision."""
        player = self.game.current_player
        decision = await self.request_decision()
        if decision.reasoning:
            logger.debug(f"{player.name}: {decision.reasoning}")
        return self.game.take_action(decision.action, decision.amount)

    async def play_bot_turns(self) -> List[ActionResult]:
        """
        Let computer seats act until the human must act or the hand ends.

        Returns:
            Results of the actions taken, in order
        """
        results = []
        while self.game.is_hand_running():
            player = self.game.current_player
            if player is None or player.is_human:
                break
            results.append(await self.play_bot_turn())
        return results
