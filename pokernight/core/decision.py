"""
Decision interface between the table and opponent strategies.

Strategies receive an immutable TableView snapshot and return a Decision.
Whatever produced the decision, sanitize_decision brings it back inside the
table rules before the engine applies it.
"""

from __future__ import annotations
import logging
import math
from typing import List, Optional, Tuple
from dataclasses import dataclass, replace

from pokernight.core.analysis import analyze_hand
from pokernight.core.card import Card
from pokernight.core.rules import ActionType, PlayerStatus, Stage


logger = logging.getLogger(__name__)

# Raises are pushed up to current_bet + min_raise * DEFAULT_RAISE_MULTIPLE
DEFAULT_RAISE_MULTIPLE = 2.0

# An owed call is worth making with at least a pair or this many outs
WORTH_CALLING_OUTS = 6


class DecisionError(Exception):
    """A strategy could not produce a usable decision."""


@dataclass
class Decision:
    """An action chosen by a strategy."""
    action: ActionType
    amount: Optional[int] = None  # Total street bet for RAISE
    reasoning: Optional[str] = None


@dataclass(frozen=True)
class SeatView:
    """Read-only copy of one seat."""
    id: int
    name: str
    is_human: bool
    chips: int
    current_bet: int
    total_invested: int
    status: PlayerStatus
    last_action: Optional[str]
    hole_cards: Tuple[Card, ...] = ()


@dataclass(frozen=True)
class TableView:
    """Read-only snapshot of the hand, as seen by a deciding seat."""
    stage: Stage
    pot: int
    community_cards: Tuple[Card, ...]
    current_bet: int
    min_raise: int
    big_blind: int
    dealer_index: int
    current_player_index: int
    last_aggressor_index: Optional[int]
    players: Tuple[SeatView, ...]

    @property
    def num_seats(self) -> int:
        return len(self.players)

    def to_call(self, seat: SeatView) -> int:
        return max(0, self.current_bet - seat.current_bet)


def legal_actions_for(seat: SeatView, view: TableView) -> List[ActionType]:
    """
    Actions a seat may choose from.

    Fold is always offered; check when nothing is owed, otherwise call;
    raise while the stack exceeds the amount owed.
    """
    to_call = view.current_bet - seat.current_bet
    actions = [ActionType.FOLD]
    actions.append(ActionType.CHECK if to_call <= 0 else ActionType.CALL)
    if seat.chips > to_call:
        actions.append(ActionType.RAISE)
    return actions


def sanitize_decision(
    decision: Decision,
    seat: SeatView,
    view: TableView,
    min_raise: int,
    raise_multiple: float = DEFAULT_RAISE_MULTIPLE,
) -> Decision:
    """
    Force a strategy's decision back inside the table rules.

    Args:
        decision: Raw decision from any strategy
        seat: The deciding seat
        view: Table snapshot the decision was made on
        min_raise: Minimum raise increment
        raise_multiple: Raises below current_bet + min_raise * raise_multiple
            are lifted to that size

    Returns:
        A new Decision safe to hand to the engine
    """
    to_call = view.current_bet - seat.current_bet
    legal = legal_actions_for(seat, view)
    action = decision.action
    amount = decision.amount
    reasoning = decision.reasoning

    if action == ActionType.CHECK and to_call > 0:
        analysis = analyze_hand(seat.hole_cards, view.community_cards, view.stage.value)
        worth_calling = analysis.rank_value >= 1 or analysis.outs >= WORTH_CALLING_OUTS
        action = ActionType.CALL if worth_calling else ActionType.FOLD
        reasoning = "Auto-corrected illegal check"
        logger.warning(f"Illegal check from {seat.name} with {to_call} owed, converted to {action.value}")

    if action == ActionType.RAISE and ActionType.RAISE not in legal:
        action = ActionType.CALL if to_call > 0 else ActionType.CHECK
        amount = None
        logger.warning(f"{seat.name} cannot raise, converted to {action.value}")

    if action == ActionType.CALL and to_call <= 0:
        action = ActionType.CHECK

    if action == ActionType.RAISE:
        amount = clamp_raise(amount or 0, seat, view, min_raise, raise_multiple)
    else:
        amount = None

    return replace(decision, action=action, amount=amount, reasoning=reasoning)


def clamp_raise(
    target: int,
    seat: SeatView,
    view: TableView,
    min_raise: int,
    raise_multiple: float = DEFAULT_RAISE_MULTIPLE,
) -> int:
    """Clamp a raise total into [current_bet + min_raise, chips + current_bet]."""
    min_legal_total = view.current_bet + min_raise
    max_total = seat.chips + seat.current_bet

    preferred = view.current_bet + math.ceil(min_raise * raise_multiple)
    target = max(target, preferred, min_legal_total)
    return min(target, max_total)
