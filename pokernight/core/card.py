"""
Card and Deck classes for Texas Hold'em.

A card carries its suit, its rank symbol and a numeric value from 2 (deuce)
to 14 (ace high). The deck is a stack: dealing and burning pop from the end,
so the deal order is fully determined by the shuffle output.
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional
from enum import Enum, IntEnum


class Suit(Enum):
    """Card suits."""
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Rank(IntEnum):
    """Card ranks; the integer value is the card's numeric value."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# Deck construction order
SUITS = [Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES]
RANKS = list(Rank)

# suit -> (letter, glyph)
SUIT_NOTATION = {
    Suit.HEARTS: ("h", "♥"),
    Suit.DIAMONDS: ("d", "♦"),
    Suit.CLUBS: ("c", "♣"),
    Suit.SPADES: ("s", "♠"),
}
RED_SUITS = frozenset([Suit.HEARTS, Suit.DIAMONDS])

FACE_SYMBOLS = {Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K", Rank.ACE: "A"}


def rank_symbol(rank: Rank) -> str:
    """'2'..'10', then 'J', 'Q', 'K', 'A'."""
    return FACE_SYMBOLS.get(rank, str(int(rank)))


RANK_BY_SYMBOL = {rank_symbol(r): r for r in RANKS}
RANK_BY_SYMBOL["T"] = Rank.TEN
SUIT_BY_NOTATION = {}
for _suit, (_letter, _glyph) in SUIT_NOTATION.items():
    SUIT_BY_NOTATION[_letter] = _suit
    SUIT_BY_NOTATION[_letter.upper()] = _suit
    SUIT_BY_NOTATION[_glyph] = _suit


class Card:
    """
    An immutable playing card.

    Build one from enums, Card(Rank.ACE, Suit.SPADES), or from text with
    Card.from_string: "As", "10h", "Th" and "K♥" are all accepted.
    """

    __slots__ = ("_rank", "_suit")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "_rank", Rank(rank))
        object.__setattr__(self, "_suit", Suit(suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @classmethod
    def from_string(cls, text: str) -> Card:
        text = text.strip()
        rank = RANK_BY_SYMBOL.get(text[:-1].upper())
        suit = SUIT_BY_NOTATION.get(text[-1:])
        if rank is None or suit is None:
            raise ValueError(f"Not a card: {text!r}")
        return cls(rank, suit)

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def value(self) -> int:
        """Numeric value, 2 (deuce) to 14 (ace)."""
        return int(self._rank)

    @property
    def symbol(self) -> str:
        return rank_symbol(self._rank)

    @property
    def color(self) -> str:
        return "red" if self._suit in RED_SUITS else "black"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return (self._rank, self._suit) == (other._rank, other._suit)

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    def __lt__(self, other: Card) -> bool:
        # Sorting ignores suit
        return self.value < other.value

    def __repr__(self) -> str:
        return f"Card({self.symbol}{SUIT_NOTATION[self._suit][0]})"

    def __str__(self) -> str:
        return f"{self.symbol}{SUIT_NOTATION[self._suit][1]}"

    def to_dict(self) -> dict:
        """JSON form used by the API."""
        return {
            "rank": self.symbol,
            "suit": self._suit.value,
            "value": self.value,
            "text": str(self),
            "color": self.color,
        }


def create_deck() -> List[Card]:
    """Build the 52 unique cards, suit by suit."""
    return [Card(rank, suit) for suit in SUITS for rank in RANKS]


def shuffle_deck(cards: Iterable[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a shuffled copy of ``cards``; the input is left untouched."""
    shuffled = list(cards)
    (rng or random).shuffle(shuffled)
    return shuffled


class Deck:
    """
    A stack of cards for one hand.

    Usage:
        deck = Deck(rng=random.Random(7))
        hole = deck.deal(2)
        deck.burn()
        flop = deck.deal(3)
    """

    def __init__(
        self,
        cards: Optional[List[Card]] = None,
        shuffle: bool = True,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            cards: Explicit stack, dealt from the end. Defaults to all 52 cards.
            shuffle: Shuffle the stack first
            rng: Random source for the shuffle
        """
        stack = list(cards) if cards is not None else create_deck()
        self._stack: List[Card] = shuffle_deck(stack, rng) if shuffle else stack
        self._history: List[Card] = []

    def deal(self, n: int = 1) -> List[Card]:
        """
        Pop ``n`` cards off the end of the stack.

        Raises:
            ValueError: The stack holds fewer than ``n`` cards
        """
        if n > len(self._stack):
            raise ValueError(f"Deck exhausted: wanted {n}, {len(self._stack)} left")
        cards = [self._stack.pop() for _ in range(n)]
        self._history += cards
        return cards

    def deal_one(self) -> Card:
        return self.deal(1)[0]

    def burn(self) -> Card:
        return self.deal_one()

    @property
    def remaining(self) -> int:
        return len(self._stack)

    @property
    def dealt_cards(self) -> List[Card]:
        """Every card dealt or burned so far, in order."""
        return list(self._history)

    def __len__(self) -> int:
        return self.remaining

    def __repr__(self) -> str:
        return f"<Deck {self.remaining}/52>"


def parse_cards(text: str) -> List[Card]:
    """Parse whitespace-separated cards, e.g. ``"As 10h K♦"``."""
    return [Card.from_string(token) for token in text.split()]
