"""
Texas Hold'em Rules and Constants.

Table rules for a single Poker Night table:

1. Blind order: the small blind is the first seated player left of the
   button, the big blind the next one. Spectators are skipped.

2. Heads-up (2 players): the dealer posts the small blind and acts first
   preflop; the other player posts the big blind.

3. Minimum raise: the increment over the table bet must be at least the
   current minimum raise (the big blind at the start of every street). A
   full raise resets the minimum to its own increment; a short all-in raise
   moves chips but leaves the minimum unchanged.

4. Illegal checks: a check while a call is owed is treated as a fold.

5. Pots: a single main pot; tied winners split it with integer division.
"""

from enum import Enum, auto
from typing import List, Optional


class Stage(Enum):
    """Stages of a Texas Hold'em hand."""
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"    # Pass-through while the pot is awarded
    GAME_OVER = "gameOver"   # Hand complete (also the idle state)


BETTING_STAGES = (Stage.PREFLOP, Stage.FLOP, Stage.TURN, Stage.RIVER)


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"


class PlayerStatus(Enum):
    """Seat states."""
    ACTIVE = "active"         # In the hand, can act
    FOLDED = "folded"         # Has folded this hand
    ALL_IN = "all-in"         # No chips left, no more actions
    BUST = "bust"             # Finished a hand with no chips
    SPECTATOR = "spectator"   # Permanently out of the session


class GameMode(Enum):
    """Which strategy drives the computer opponents."""
    ONLINE = "online"    # Language-model service, heuristic fallback
    OFFLINE = "offline"  # Local heuristic only


class SessionOutcome(Enum):
    """Whether the session can go on."""
    IN_PROGRESS = auto()
    HUMAN_ELIMINATED = auto()  # The human ran out of chips
    LAST_PLAYER_STANDING = auto()  # Fewer than two players still have chips


# Default game settings
DEFAULT_SMALL_BLIND = 5
DEFAULT_BIG_BLIND = 10
DEFAULT_STARTING_CHIPS = 1000
DEFAULT_NUM_PLAYERS = 8
HUMAN_SEAT = 0
MIN_PLAYERS = 2
MAX_PLAYERS = 8

# Cards per street
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1

WELCOME_MESSAGE = "Welcome to GTO Poker Night!"


def next_seat(statuses: List[PlayerStatus], start: int, skip: tuple) -> Optional[int]:
    """
    Find the first seat at or clockwise after ``start`` whose status is not in ``skip``.

    Args:
        statuses: Status of every seat, indexed by seat
        start: Seat to begin scanning from (inclusive)
        skip: Statuses to pass over

    Returns:
        Seat index, or None if every seat is skipped
    """
    num_seats = len(statuses)
    for i in range(num_seats):
        pos = (start + i) % num_seats
        if statuses[pos] not in skip:
            return pos
    return None


def get_blind_positions(statuses: List[PlayerStatus], dealer_position: int) -> tuple:
    """
    Calculate small blind, big blind and first-to-act positions.

    Heads-up: the dealer is the small blind and acts first preflop.

    Args:
        statuses: Seat statuses after busted players were removed
        dealer_position: Seat of the dealer button

    Returns:
        Tuple of (small_blind, big_blind, first_to_act)
    """
    seated = [s for s in statuses if s != PlayerStatus.SPECTATOR]
    if len(seated) < MIN_PLAYERS:
        raise ValueError("Need at least 2 players")

    skip = (PlayerStatus.SPECTATOR,)
    num_seats = len(statuses)

    if len(seated) == 2:
        sb_pos = dealer_position
        bb_pos = next_seat(statuses, (dealer_position + 1) % num_seats, skip)
        return sb_pos, bb_pos, dealer_position

    sb_pos = next_seat(statuses, (dealer_position + 1) % num_seats, skip)
    bb_pos = next_seat(statuses, (sb_pos + 1) % num_seats, skip)
    first_to_act = next_seat(statuses, (bb_pos + 1) % num_seats, skip)
    return sb_pos, bb_pos, first_to_act


def is_full_raise(raise_total: int, current_bet: int, min_raise: int) -> bool:
    """
    Check whether a raise re-opens the betting.

    Args:
        raise_total: Player's total street bet after the raise
        current_bet: Table bet before the raise
        min_raise: Current minimum raise increment

    Returns:
        True if the increment is at least the minimum raise
    """
    return raise_total - current_bet >= min_raise
