"""
Pytest configuration and shared fixtures for Poker Night tests.
"""

import random
from typing import List, Optional, Sequence

import pytest
from pokernight.core.card import Card, Deck, Rank, Suit, create_deck, parse_cards
from pokernight.core.decision import SeatView, TableView
from pokernight.core.game import TexasHoldemGame
from pokernight.core.player import Player
from pokernight.core.rules import PlayerStatus, Stage


def stacked_deck(hands: Sequence[str], board: str = "") -> Deck:
    """
    Build a deck that deals the given hole cards and board.

    Args:
        hands: Hole cards per dealt seat in seat order, e.g. ["As Ah", "2c 7d"]
        board: Up to five community cards, e.g. "Ks Qd 9h 4c 3s"

    Burn cards and anything not named come from the unused cards.
    """
    hole = [c for hand in hands for c in parse_cards(hand)]
    board_cards = parse_cards(board) if board else []
    used = set(hole) | set(board_cards)
    spare = [c for c in create_deck() if c not in used]

    order: List[Card] = list(hole)
    for street in (board_cards[:3], board_cards[3:4], board_cards[4:5]):
        order.append(spare.pop())  # burn
        order.extend(street)

    # The last card is dealt first
    return Deck(cards=spare + list(reversed(order)), shuffle=False)


def total_chips(game: TexasHoldemGame) -> int:
    return sum(p.chips for p in game.players) + game.pot + game.undistributed_chips


@pytest.fixture
def stack_deck():
    """Deck builder, see stacked_deck."""
    return stacked_deck


@pytest.fixture
def chip_total():
    """Chips in stacks, pot and rounding losses."""
    return total_chips


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(7))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(id=0, name="Test", chips=1000)


@pytest.fixture
def two_player_game():
    """Create a 2-player game (heads-up)."""
    return TexasHoldemGame(num_players=2, rng=random.Random(1))


@pytest.fixture
def three_player_game():
    """Create a 3-player game: dealer seat 1, SB seat 2, BB seat 0 on the first hand."""
    return TexasHoldemGame(num_players=3, rng=random.Random(2))


@pytest.fixture
def four_player_game():
    """Create a 4-player game: dealer seat 1, SB seat 2, BB seat 3, UTG seat 0."""
    return TexasHoldemGame(num_players=4, rng=random.Random(3))


@pytest.fixture
def make_view():
    """
    Factory for a two-seat TableView in which seat 0 is deciding.

    The opponent (seat 1) holds the button.
    """
    def _make_view(
        hole: str,
        board: str = "",
        stage: Stage = Stage.PREFLOP,
        current_bet: int = 10,
        seat_bet: int = 0,
        chips: int = 1000,
        pot: int = 100,
        min_raise: int = 10,
        total_invested: Optional[int] = None,
        last_aggressor: Optional[int] = None,
    ):
        seat = SeatView(
            id=0,
            name="Bot 0",
            is_human=False,
            chips=chips,
            current_bet=seat_bet,
            total_invested=seat_bet if total_invested is None else total_invested,
            status=PlayerStatus.ACTIVE,
            last_action=None,
            hole_cards=tuple(parse_cards(hole)),
        )
        opponent = SeatView(
            id=1,
            name="Bot 1",
            is_human=False,
            chips=1000,
            current_bet=current_bet,
            total_invested=current_bet,
            status=PlayerStatus.ACTIVE,
            last_action=None,
        )
        view = TableView(
            stage=stage,
            pot=pot,
            community_cards=tuple(parse_cards(board)) if board else (),
            current_bet=current_bet,
            min_raise=min_raise,
            big_blind=10,
            dealer_index=1,
            current_player_index=0,
            last_aggressor_index=last_aggressor,
            players=(seat, opponent),
        )
        return seat, view

    return _make_view


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
