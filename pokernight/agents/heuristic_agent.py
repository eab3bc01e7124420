"""
Heuristic Agent Implementation.

The offline strategy: a fixed rule set built on the hand analyzer. It is
also the fallback whenever a remote strategy fails or times out, so it must
always return a decision without raising.

Preflop:
    Hands are scored from the high card, pairs, suitedness and gap, then
    compared with raise/call thresholds that loosen in late position and
    tighten when facing a bet. Opens are sized to three big blinds.

Postflop:
    Equity is estimated from outs (4% per out on the flop, 2% on the turn)
    and from made-hand strength. The preflop aggressor continuation-bets
    depending on board texture; strong hands bet for value; big draws
    semi-bluff or call with pot odds; everything else checks or folds.
"""

import random
from typing import List, Optional

from pokernight.agents.base import BaseAgent
from pokernight.core.analysis import BoardTexture, HandAnalysis, analyze_hand, get_board_texture
from pokernight.core.decision import Decision, SeatView, TableView
from pokernight.core.rules import ActionType, PlayerStatus, Stage


# Share of the stack already invested beyond which a paired hand never folds
POT_COMMITMENT_RATIO = 0.4

# Preflop scoring
PAIR_WEIGHT = 2.2
SUITED_BONUS = 2.5
CONNECTOR_BONUS = 1.5
ONE_GAP_PENALTY = 0.5
WIDE_GAP_PENALTY = 2
RAISE_THRESHOLD = 22
CALL_THRESHOLD = 14
LATE_POSITION_RAISE_DISCOUNT = 5
LATE_POSITION_CALL_DISCOUNT = 4
FACING_BET_RAISE_PREMIUM = 5
FACING_BET_CALL_PREMIUM = 3
TRAP_PROBABILITY = 0.2

# Postflop equity
FLOP_EQUITY_PER_OUT = 0.04
TURN_EQUITY_PER_OUT = 0.02
PAIRED_BOARD_OUTS_PENALTY = 2
TOP_PAIR_EQUITY = 0.80
MIDDLE_PAIR_EQUITY = 0.55
WEAK_PAIR_EQUITY = 0.35
TWO_PAIR_PLUS_EQUITY = 0.95
DRAW_EQUITY = 0.25


class HeuristicAgent(BaseAgent):
    """
    Rule-based opponent driven by hand analysis, position and pot odds.

    Attributes:
        rng: Random source for mixed strategies (slow-plays, bluffs, traps)
    """

    def __init__(self, name: Optional[str] = None, rng: Optional[random.Random] = None):
        super().__init__(name)
        self.rng = rng or random.Random()

    def decide(
        self,
        seat: SeatView,
        view: TableView,
        legal_actions: List[ActionType],
        min_raise: int,
    ) -> Decision:
        analysis = analyze_hand(seat.hole_cards, view.community_cards, view.stage.value)
        to_call = view.to_call(seat)
        can_check = to_call == 0
        can_raise = ActionType.RAISE in legal_actions
        roll = self.rng.random()

        # Pot commitment: with a pair or better and a big share of the stack in, never fold
        stack = seat.chips + seat.total_invested
        if stack > 0 and seat.total_invested / stack > POT_COMMITMENT_RATIO and analysis.rank_value >= 1:
            return Decision(ActionType.CHECK if can_check else ActionType.CALL, reasoning="Pot committed")

        if view.stage == Stage.PREFLOP:
            return self._decide_preflop(seat, view, min_raise, to_call, can_raise, roll)
        return self._decide_postflop(seat, view, analysis, to_call, can_raise, roll)

    def _decide_preflop(
        self,
        seat: SeatView,
        view: TableView,
        min_raise: int,
        to_call: int,
        can_raise: bool,
        roll: float,
    ) -> Decision:
        can_check = to_call == 0
        score = preflop_score(seat)
        late = is_late_position(seat, view)

        raise_threshold = RAISE_THRESHOLD
        call_threshold = CALL_THRESHOLD
        if late:
            raise_threshold -= LATE_POSITION_RAISE_DISCOUNT
            call_threshold -= LATE_POSITION_CALL_DISCOUNT
        if to_call > 0:
            raise_threshold += FACING_BET_RAISE_PREMIUM
            call_threshold += FACING_BET_CALL_PREMIUM

        if score >= raise_threshold and can_raise:
            factor = 2.5 if late else 3.5
            amount = int(view.current_bet * factor)
            # Unopened pot: open to three big blinds
            if view.current_bet == view.min_raise:
                amount = view.min_raise * 3
            min_legal = view.current_bet + min_raise
            if amount < min_legal + min_raise:
                amount = min_legal + min_raise

            is_pair = seat.hole_cards[0].value == seat.hole_cards[1].value
            if not is_pair and to_call > 0 and roll < TRAP_PROBABILITY:
                return Decision(ActionType.CALL, reasoning="Flatting to balance")
            return Decision(ActionType.RAISE, amount, reasoning=f"Preflop score {score:.1f}")

        if score >= call_threshold:
            return Decision(ActionType.CHECK if can_check else ActionType.CALL)
        return Decision(ActionType.CHECK if can_check else ActionType.FOLD)

    def _decide_postflop(
        self,
        seat: SeatView,
        view: TableView,
        analysis: HandAnalysis,
        to_call: int,
        can_raise: bool,
        roll: float,
    ) -> Decision:
        can_check = to_call == 0
        pot = view.pot
        texture = get_board_texture(view.community_cards)
        pot_odds = to_call / (pot + to_call) if pot + to_call > 0 else 0.0
        is_aggressor = view.last_aggressor_index == seat.id
        opponents = sum(
            1 for p in view.players if p.status == PlayerStatus.ACTIVE and p.id != seat.id
        )

        draw_equity = estimate_draw_equity(analysis, view)
        total_equity = max(draw_equity, showdown_equity(analysis))

        # Continuation bet into an unbet pot
        if is_aggressor and can_raise and view.current_bet == 0:
            if texture in (BoardTexture.DRY, BoardTexture.NEUTRAL):
                if roll < 0.70:
                    return Decision(ActionType.RAISE, view.current_bet + int(pot * 0.33), reasoning="C-bet")
            elif total_equity > 0.6 and roll < 0.8:
                return Decision(ActionType.RAISE, view.current_bet + int(pot * 0.66), reasoning="C-bet for value")
            return Decision(ActionType.CHECK)

        # Sets and better
        if analysis.rank_value >= 3:
            if texture == BoardTexture.DRY and roll < 0.3 and can_check:
                return Decision(ActionType.CHECK, reasoning="Slow-play")
            if can_raise:
                bet = int((pot + to_call) * 0.75)
                return Decision(ActionType.RAISE, view.current_bet + bet, reasoning="Fast-play")
            return Decision(ActionType.CALL)

        # Two pair, top pair
        if analysis.rank_value >= 2 or (analysis.rank_value == 1 and "Top" in analysis.description):
            if to_call > 0:
                if texture == BoardTexture.VERY_WET:
                    return Decision(ActionType.CALL)
                if can_raise and to_call < pot * 0.3 and roll < 0.4:
                    return Decision(ActionType.RAISE, view.current_bet + int(pot * 0.6), reasoning="Value raise")
                return Decision(ActionType.CALL)
            if can_raise:
                return Decision(ActionType.RAISE, view.current_bet + int(pot * 0.5), reasoning="Value bet")

        # Draws
        if draw_equity > DRAW_EQUITY:
            if can_raise and roll < 0.3 and opponents <= 2:
                return Decision(ActionType.RAISE, view.current_bet + int(pot * 0.6), reasoning="Semi-bluff")
            if total_equity > pot_odds - 0.05:
                return Decision(ActionType.CALL, reasoning="Drawing with odds")

        if can_check:
            return Decision(ActionType.CHECK)
        if total_equity > pot_odds + 0.1:
            return Decision(ActionType.CALL, reasoning="Bluff catch")
        return Decision(ActionType.FOLD)


def preflop_score(seat: SeatView) -> float:
    """Score two hole cards; roughly 10 for junk up to 30+ for big pairs."""
    c1, c2 = seat.hole_cards[0], seat.hole_cards[1]
    high, low = max(c1.value, c2.value), min(c1.value, c2.value)

    score = float(high)
    if high == low:
        score *= PAIR_WEIGHT
    if c1.suit == c2.suit:
        score += SUITED_BONUS

    gap = high - low
    if gap == 1:
        score += CONNECTOR_BONUS
    elif gap == 2:
        score -= ONE_GAP_PENALTY
    elif gap > 2:
        score -= WIDE_GAP_PENALTY
    return score


def is_late_position(seat: SeatView, view: TableView) -> bool:
    """Button or cutoff."""
    relative = (seat.id - view.dealer_index) % view.num_seats
    return relative == 0 or relative == view.num_seats - 1


def estimate_draw_equity(analysis: HandAnalysis, view: TableView) -> float:
    outs = analysis.outs
    board_values = [c.value for c in view.community_cards]
    if len(set(board_values)) < len(board_values):
        outs = max(0, outs - PAIRED_BOARD_OUTS_PENALTY)

    if view.stage == Stage.FLOP:
        return outs * FLOP_EQUITY_PER_OUT
    if view.stage == Stage.TURN:
        return outs * TURN_EQUITY_PER_OUT
    return 0.0


def showdown_equity(analysis: HandAnalysis) -> float:
    if analysis.rank_value == 0:
        return 0.0
    if analysis.rank_value == 1:
        if "Top Pair" in analysis.description:
            return TOP_PAIR_EQUITY
        if "Middle Pair" in analysis.description:
            return MIDDLE_PAIR_EQUITY
        return WEAK_PAIR_EQUITY
    return TWO_PAIR_PLUS_EQUITY
