"""
Texas Hold'em Game Engine - State Machine Implementation.

This module implements the table for one human against computer opponents.
It handles:
- Hand lifecycle (busted players, button rotation, dealing, blinds)
- Player actions (fold, check, call, raise) with chip accounting
- Betting round closure and street advancement
- Automatic board run-out when nobody can act
- Showdown and fold-win resolution with a single main pot
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any
from dataclasses import dataclass
import logging
import random

from pokernight.core.card import Card, Deck
from pokernight.core.player import Player
from pokernight.core.hand import evaluate_hand, describe_hand
from pokernight.core.decision import SeatView, TableView, legal_actions_for
from pokernight.core.rules import (
    Stage, ActionType, PlayerStatus, GameMode, SessionOutcome,
    BETTING_STAGES, get_blind_positions, next_seat, is_full_raise,
    DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND, DEFAULT_STARTING_CHIPS,
    DEFAULT_NUM_PLAYERS, HUMAN_SEAT, MIN_PLAYERS, MAX_PLAYERS,
    HOLE_CARDS, FLOP_CARDS, TURN_CARDS, RIVER_CARDS, WELCOME_MESSAGE,
)


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a player action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0


@dataclass
class WinnerRecord:
    """Who won a pot, how, and how much each of them received."""
    ids: List[int]
    description: str
    amount: int

    def to_dict(self) -> Dict[str, Any]:
        return {"ids": list(self.ids), "description": self.description, "amount": self.amount}


class TexasHoldemGame:
    """
    Texas Hold'em table implementing a state machine.

    Usage:
        game = TexasHoldemGame(num_players=8)
        game.start_hand()

        while game.is_hand_running():
            result = game.take_action(ActionType.CALL)

        winners = game.get_winners()
    """

    def __init__(
        self,
        num_players: int = DEFAULT_NUM_PLAYERS,
        small_blind: int = DEFAULT_SMALL_BLIND,
        big_blind: int = DEFAULT_BIG_BLIND,
        starting_chips: int = DEFAULT_STARTING_CHIPS,
        human_seat: Optional[int] = HUMAN_SEAT,
        player_names: Optional[List[str]] = None,
        game_mode: GameMode = GameMode.OFFLINE,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a new session.

        Args:
            num_players: Number of seats (2-8)
            small_blind: Small blind amount
            big_blind: Big blind amount
            starting_chips: Starting stack for each seat
            human_seat: Seat of the human participant (None for bots only)
            player_names: Optional display names
            game_mode: Strategy selection for computer opponents
            rng: Random source for shuffling
        """
        if num_players < MIN_PLAYERS or num_players > MAX_PLAYERS:
            raise ValueError(f"Number of players must be {MIN_PLAYERS}-{MAX_PLAYERS}")
        if player_names is not None and len(player_names) != num_players:
            raise ValueError("player_names must name every seat")

        self.small_blind = small_blind
        self.big_blind = big_blind
        self.starting_chips = starting_chips
        self.human_seat = human_seat
        self.game_mode = game_mode
        self.rng = rng
        self._seat_count = num_players
        self._player_names = player_names

        self.reset_session()

    def reset_session(self) -> None:
        """Restore every seat's starting stack and clear all hand state."""
        names = self._player_names or [
            "You" if i == self.human_seat else f"Bot {i}"
            for i in range(self._seat_count)
        ]
        self.players: List[Player] = [
            Player(id=i, name=name, chips=self.starting_chips, is_human=(i == self.human_seat))
            for i, name in enumerate(names)
        ]

        self.deck = Deck(cards=[], shuffle=False)
        self.community_cards: List[Card] = []
        self.stage = Stage.GAME_OVER
        self.hand_number = 0

        # Position tracking
        self.dealer_index = 0
        self.small_blind_index = -1
        self.big_blind_index = -1
        self.current_player_index = -1  # -1 until a hand starts

        # Betting state
        self.pot = 0
        self.current_bet = 0  # Table bet every active seat must match
        self.min_raise = self.big_blind
        self.last_aggressor_index: Optional[int] = None

        self.winners: List[WinnerRecord] = []
        self.logs: List[str] = [WELCOME_MESSAGE]
        self.is_thinking = False
        self.session_outcome = SessionOutcome.IN_PROGRESS

        # Odd chips lost to split pots; kept so chip conservation stays checkable
        self.undistributed_chips = 0
        self._total_chips = self.starting_chips * len(self.players)

    @property
    def num_players(self) -> int:
        """Number of seats at the table."""
        return len(self.players)

    @property
    def num_in_hand(self) -> int:
        """Number of seats still contesting the pot."""
        return sum(1 for p in self.players if p.is_in_hand)

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_hand_running() or self.current_player_index < 0:
            return None
        return self.players[self.current_player_index]

    @property
    def human(self) -> Optional[Player]:
        if self.human_seat is None:
            return None
        return self.players[self.human_seat]

    def active_players(self) -> List[Player]:
        return [p for p in self.players if p.status == PlayerStatus.ACTIVE]

    def is_hand_running(self) -> bool:
        """Check if a betting round is in progress."""
        return self.stage in BETTING_STAGES

    def is_session_over(self) -> bool:
        return self.session_outcome != SessionOutcome.IN_PROGRESS

    # ------------------------------------------------------------------
    # Hand lifecycle
    # ------------------------------------------------------------------

    def start_hand(self, deck: Optional[Deck] = None) -> bool:
        """
        Start a new hand.

        Args:
            deck: Pre-arranged deck (the last card is dealt first). A fresh
                shuffled deck is used when omitted.

        Returns:
            True if the hand started, False if the session is over
            (see session_outcome)
        """
        if self.is_hand_running():
            logger.warning("Cannot start hand: a hand is already in progress")
            return False

        for player in self.players:
            player.reset_for_new_hand()

        if self.human is not None and self.human.status == PlayerStatus.SPECTATOR:
            self.session_outcome = SessionOutcome.HUMAN_ELIMINATED
            self._log("You went bankrupt! Game over.")
            logger.info("Session over: human eliminated")
            return False

        if len(self.active_players()) < MIN_PLAYERS:
            self.session_outcome = SessionOutcome.LAST_PLAYER_STANDING
            self._log("You won the tournament!")
            logger.info("Session over: one player left standing")
            return False

        self.hand_number += 1
        logger.info(f"Starting hand #{self.hand_number}")

        # Reset for new hand
        self.community_cards = []
        self.winners = []
        self.last_aggressor_index = None
        self.current_bet = self.big_blind
        self.min_raise = self.big_blind

        self._move_dealer_button()
        self.deck = deck if deck is not None else Deck(rng=self.rng)
        self._deal_hole_cards()

        statuses = [p.status for p in self.players]
        self.small_blind_index, self.big_blind_index, first_to_act = get_blind_positions(
            statuses, self.dealer_index
        )
        sb_posted, bb_posted = self._post_blinds()

        self.pot = sb_posted + bb_posted
        self.stage = Stage.PREFLOP
        self.logs = [
            f"New Hand. Blinds: {sb_posted}/{bb_posted}. Mode: {self.game_mode.value.upper()}"
        ]

        # A blind poster may already be all-in
        first_active = self._next_active_seat(first_to_act)
        self.current_player_index = first_active if first_active is not None else first_to_act
        self._run_out_if_no_one_can_act()
        self._check_invariants()
        return True

    def _move_dealer_button(self) -> None:
        """Move the button to the next seat that is still in the session."""
        start = (self.dealer_index + 1) % self.num_players
        self.dealer_index = next_seat(
            [p.status for p in self.players], start, skip=(PlayerStatus.SPECTATOR,)
        )

    def _deal_hole_cards(self) -> None:
        """Deal two cards to every active seat, in seat order."""
        for player in self.players:
            if player.is_active:
                player.deal_cards(self.deck.deal(HOLE_CARDS))

    def _post_blinds(self) -> tuple:
        """Post small and big blinds; returns the amounts actually posted."""
        sb_player = self.players[self.small_blind_index]
        bb_player = self.players[self.big_blind_index]

        sb_posted = sb_player.put_in(self.small_blind)
        bb_posted = bb_player.put_in(self.big_blind)

        logger.debug(f"Blinds posted: SB={sb_posted} ({sb_player.name}) BB={bb_posted} ({bb_player.name})")
        return sb_posted, bb_posted

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def take_action(self, action_type: ActionType, amount: Optional[int] = None) -> ActionResult:
        """
        Apply an action for the seat to act, then advance the turn.

        Args:
            action_type: FOLD, CHECK, CALL or RAISE
            amount: Intended total street bet for RAISE (not an increment);
                defaults to the minimum legal raise

        Returns:
            ActionResult describing what was actually done
        """
        if not self.is_hand_running():
            return ActionResult(False, "No hand in progress")

        player = self.current_player
        if player is None or not player.is_active:
            return ActionResult(False, "No player can act")

        result = self._execute_action(player, ActionType(action_type), amount)
        self._check_invariants()
        self.advance_turn()
        self._check_invariants()
        return result

    def _execute_action(self, player: Player, action_type: ActionType, amount: Optional[int]) -> ActionResult:
        """Execute the action for the player."""
        to_call = self.current_bet - player.current_bet

        if action_type == ActionType.CHECK and to_call > 0:
            logger.warning(f"{player.name} attempted an illegal check with {to_call} owed, forcing fold")
            action_type = ActionType.FOLD

        if action_type == ActionType.FOLD:
            player.fold()
            self._log(f"{player.name} folds.")
            return ActionResult(True, "Folded", ActionType.FOLD, 0)

        if action_type == ActionType.CHECK:
            player.check()
            self._log(f"{player.name} checks.")
            return ActionResult(True, "Checked", ActionType.CHECK, 0)

        if action_type == ActionType.CALL:
            actual = player.call(to_call)
            self.pot += actual
            self._log(f"{player.name} calls ${actual}.")
            return ActionResult(True, f"Called ${actual}", ActionType.CALL, actual)

        # Raise: amount is the total street bet
        target = amount if amount else self.current_bet + self.min_raise
        actual = player.raise_to(target)
        self.pot += actual
        final_total = player.current_bet

        if is_full_raise(final_total, self.current_bet, self.min_raise):
            self.min_raise = final_total - self.current_bet
        else:
            logger.debug(f"Short raise by {player.name} to {final_total}, minimum raise stays {self.min_raise}")

        self.current_bet = max(self.current_bet, final_total)
        self.last_aggressor_index = player.id
        self._log(f"{player.name} raises to {final_total}.")
        return ActionResult(True, f"Raised to ${final_total}", ActionType.RAISE, actual)

    def advance_turn(self) -> None:
        """Pass the turn on, close the betting round, or end the hand."""
        if not self.is_hand_running():
            return

        active = self.active_players()

        if self.num_in_hand == 1:
            self.resolve_hand(by_fold=True)
            return

        next_index = self._next_active_seat((self.current_player_index + 1) % self.num_players)

        if next_index is None or not active:
            self.next_street()
            return

        all_matched = all(p.current_bet == self.current_bet for p in active)
        everyone_acted = all(p.last_action is not None for p in active)

        if all_matched and everyone_acted:
            self.next_street()
            return

        self.current_player_index = next_index

    def next_street(self) -> None:
        """Close the betting round and deal the next street (or go to showdown)."""
        self._deal_next_street()
        self._run_out_if_no_one_can_act()

    def _deal_next_street(self) -> None:
        for player in self.players:
            player.reset_for_new_street()

        if self.stage == Stage.PREFLOP:
            self.deck.burn()
            self.community_cards.extend(self.deck.deal(FLOP_CARDS))
            self.stage = Stage.FLOP
        elif self.stage == Stage.FLOP:
            self.deck.burn()
            self.community_cards.extend(self.deck.deal(TURN_CARDS))
            self.stage = Stage.TURN
        elif self.stage == Stage.TURN:
            self.deck.burn()
            self.community_cards.extend(self.deck.deal(RIVER_CARDS))
            self.stage = Stage.RIVER
        elif self.stage == Stage.RIVER:
            self.stage = Stage.SHOWDOWN
            self.resolve_hand()
            return

        self.current_bet = 0
        self.min_raise = self.big_blind
        # last_aggressor_index carries over: the aggressor keeps the initiative

        first_actor = self._next_active_seat((self.dealer_index + 1) % self.num_players)
        if first_actor is not None:
            self.current_player_index = first_actor

        self._log(f"--- {self.stage.value.upper()} ---")
        logger.debug(f"{self.stage.value}: {' '.join(str(c) for c in self.community_cards)}")

    def _run_out_if_no_one_can_act(self) -> None:
        """Everyone left is all-in: deal the remaining streets without input."""
        while self.is_hand_running() and not self.active_players():
            self._deal_next_street()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_hand(self, by_fold: bool = False) -> List[WinnerRecord]:
        """
        Award the pot and finish the hand.

        Args:
            by_fold: Every seat but one has folded

        Returns:
            Winner records
        """
        contenders = [
            p for p in self.players
            if p.status not in (PlayerStatus.FOLDED, PlayerStatus.SPECTATOR, PlayerStatus.BUST)
        ]

        if by_fold or len(contenders) == 1:
            winner = contenders[0]
            winners = [WinnerRecord([winner.id], f"{winner.name} wins by fold", self.pot)]
            winner.chips += self.pot
        else:
            scored = [(p, evaluate_hand(p.hole_cards, self.community_cards)) for p in contenders]
            for player, rank in scored:
                self._log(f"{player.name} shows {' '.join(str(c) for c in player.hole_cards)} ({describe_hand(rank)})")

            best_score = max(rank.score for _, rank in scored)
            tying = [(p, rank) for p, rank in scored if rank.score == best_score]

            win_amount = self.pot // len(tying)
            self.undistributed_chips += self.pot - win_amount * len(tying)
            for player, _ in tying:
                player.chips += win_amount

            names = ", ".join(p.name for p, _ in tying)
            winners = [WinnerRecord(
                [p.id for p, _ in tying],
                f"{names} with {tying[0][1].name}",
                win_amount,
            )]

        self.winners = winners
        self.pot = 0
        self.stage = Stage.GAME_OVER

        for player in self.players:
            if player.chips == 0 and player.status != PlayerStatus.SPECTATOR:
                player.status = PlayerStatus.BUST

        self._log(f"Winner: {winners[0].description}")
        logger.info(f"Hand #{self.hand_number} won: {winners[0].description} ({winners[0].amount})")
        return winners

    def get_winners(self) -> List[Dict[str, Any]]:
        """Get winner information after the hand is complete."""
        if self.stage != Stage.GAME_OVER:
            return []
        return [w.to_dict() for w in self.winners]

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_legal_actions(self, player: Optional[Player] = None) -> List[ActionType]:
        """
        Get legal actions for the specified player (or current player).
        """
        if player is None:
            player = self.current_player

        if player is None or not player.is_active or not self.is_hand_running():
            return []

        return legal_actions_for(self._seat_view(player, reveal=False), self.view())

    def get_raise_range(self, player: Player) -> Dict[str, int]:
        """Get the valid raise totals for a player."""
        max_total = player.chips + player.current_bet
        return {
            "min": min(self.current_bet + self.min_raise, max_total),
            "max": max_total,
        }

    def view(self, for_player_id: Optional[int] = None) -> TableView:
        """
        Immutable snapshot of the table.

        Args:
            for_player_id: Seat whose hole cards are included; other seats'
                cards are hidden
        """
        return TableView(
            stage=self.stage,
            pot=self.pot,
            community_cards=tuple(self.community_cards),
            current_bet=self.current_bet,
            min_raise=self.min_raise,
            big_blind=self.big_blind,
            dealer_index=self.dealer_index,
            current_player_index=self.current_player_index,
            last_aggressor_index=self.last_aggressor_index,
            players=tuple(self._seat_view(p, reveal=(p.id == for_player_id)) for p in self.players),
        )

    def _seat_view(self, player: Player, reveal: bool) -> SeatView:
        return SeatView(
            id=player.id,
            name=player.name,
            is_human=player.is_human,
            chips=player.chips,
            current_bet=player.current_bet,
            total_invested=player.total_invested,
            status=player.status,
            last_action=player.last_action,
            hole_cards=tuple(player.hole_cards) if reveal else (),
        )

    def get_state(self, for_player_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Get the current game state.

        Args:
            for_player_id: If specified, include private info for this player

        Returns:
            Game state dictionary
        """
        current = self.current_player
        public_info = {
            "stage": self.stage.value,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "min_raise": self.min_raise,
            "board": [c.to_dict() for c in self.community_cards],
            "dealer_index": self.dealer_index,
            "small_blind_index": self.small_blind_index,
            "big_blind_index": self.big_blind_index,
            "current_player": current.id if current else None,
            "last_aggressor": self.last_aggressor_index,
            "players": [p.to_dict() for p in self.players],
            "winners": self.get_winners(),
            "logs": list(self.logs),
            "is_thinking": self.is_thinking,
            "game_mode": self.game_mode.value,
            "session_outcome": self.session_outcome.name,
        }

        private_info: Dict[str, Any] = {}
        if for_player_id is not None:
            player = self.players[for_player_id]
            is_my_turn = current is not None and current.id == player.id
            private_info = {
                "hand": [c.to_dict() for c in player.hole_cards],
                "is_my_turn": is_my_turn,
                "available_moves": [a.value for a in self.get_legal_actions(player)] if is_my_turn else [],
                "chips_to_call": max(0, self.current_bet - player.current_bet),
                "current_bet": player.current_bet,
                "raise_range": self.get_raise_range(player),
            }

        return {
            "public_info": public_info,
            "private_info": private_info,
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_active_seat(self, start: int) -> Optional[int]:
        """First ACTIVE seat at or clockwise after ``start``."""
        return next_seat(
            [p.status for p in self.players], start,
            skip=tuple(s for s in PlayerStatus if s != PlayerStatus.ACTIVE),
        )

    def _log(self, message: str) -> None:
        """Append a line to the hand transcript."""
        self.logs.append(message)
        logger.debug(message)

    def _check_invariants(self) -> None:
        """Chips are never negative and never created or destroyed."""
        assert all(p.chips >= 0 for p in self.players), "negative stack"
        assert self.pot >= 0, "negative pot"
        on_table = sum(p.chips for p in self.players) + self.pot + self.undistributed_chips
        assert on_table == self._total_chips, f"chip mismatch: {on_table} != {self._total_chips}"
