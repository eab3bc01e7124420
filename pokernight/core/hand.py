"""
Hand Evaluation for Texas Hold'em.

Evaluates two hole cards plus zero to five community cards and returns a
HandRank whose integer score totally orders hands: a better hand always
scores higher, and hands of equal strength score exactly the same.

Hand Rankings (best to worst):
8. Straight Flush: 5 consecutive cards of same suit
7. Four of a Kind: 4 cards of same rank
6. Full House: 3 of a kind + pair
5. Flush: 5 cards of same suit
4. Straight: 5 consecutive cards
3. Three of a Kind: 3 cards of same rank
2. Two Pair: 2 different pairs
1. One Pair: 2 cards of same rank
0. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), which is five high.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass
from enum import IntEnum
from collections import Counter

from pokernight.core.card import Card, Rank, Suit


class HandCategory(IntEnum):
    """Hand categories from worst (0) to best (8)."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


HAND_CATEGORY_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "Pair",
    HandCategory.HIGH_CARD: "High Card",
}


# score = category * CATEGORY_MULTIPLIER + kicker_value
# Kickers are weighted by descending powers of 15 (card values stay below 15),
# so five kickers top out at 759374 and never reach the next category.
CATEGORY_MULTIPLIER = 1000000
KICKER_BASE = 15
KICKER_SLOTS = 5


@dataclass(frozen=True)
class HandRank:
    """Result of evaluating a hand."""
    category: HandCategory
    name: str
    score: int
    kickers: Tuple[int, ...]

    def __lt__(self, other: HandRank) -> bool:
        return self.score < other.score


def evaluate_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card] = ()) -> HandRank:
    """
    Evaluate the best hand made from hole and community cards.

    Args:
        hole_cards: The player's hole cards
        community_cards: Zero to five board cards

    Returns:
        HandRank with category, display name, score and deciding values

    Raises:
        ValueError: If the combined card count is not 2-7
    """
    cards = sorted(list(hole_cards) + list(community_cards), key=lambda c: c.value, reverse=True)
    if len(cards) < 2 or len(cards) > 7:
        raise ValueError(f"Need 2-7 cards, got {len(cards)}")

    flush_suit = _flush_suit(cards)
    flush_cards = [c for c in cards if c.suit == flush_suit] if flush_suit else []
    straight_high = _straight_high(cards)
    straight_flush_high = _straight_high(flush_cards) if flush_suit else None

    counts = Counter(c.value for c in cards)
    quads = sorted((v for v, n in counts.items() if n == 4), reverse=True)
    trips = sorted((v for v, n in counts.items() if n == 3), reverse=True)
    pairs = sorted((v for v, n in counts.items() if n == 2), reverse=True)

    if straight_flush_high:
        return _make_rank(HandCategory.STRAIGHT_FLUSH, [straight_flush_high])

    if quads:
        quad = quads[0]
        return _make_rank(HandCategory.FOUR_OF_A_KIND, [quad] + _kickers(cards, {quad}, 1))

    if trips and (len(trips) > 1 or pairs):
        # A second set of trips can serve as the pair
        trip = trips[0]
        pair = max(trips[1:] + pairs)
        return _make_rank(HandCategory.FULL_HOUSE, [trip, pair])

    if flush_suit:
        return _make_rank(HandCategory.FLUSH, [c.value for c in flush_cards[:5]])

    if straight_high:
        return _make_rank(HandCategory.STRAIGHT, [straight_high])

    if trips:
        trip = trips[0]
        return _make_rank(HandCategory.THREE_OF_A_KIND, [trip] + _kickers(cards, {trip}, 2))

    if len(pairs) >= 2:
        high, low = pairs[0], pairs[1]
        return _make_rank(HandCategory.TWO_PAIR, [high, low] + _kickers(cards, {high, low}, 1))

    if pairs:
        pair = pairs[0]
        return _make_rank(HandCategory.ONE_PAIR, [pair] + _kickers(cards, {pair}, 3))

    return _make_rank(HandCategory.HIGH_CARD, [c.value for c in cards[:5]])


def _flush_suit(cards: Sequence[Card]) -> Optional[Suit]:
    """Return the suit held five or more times, if any."""
    suit_counts = Counter(c.suit for c in cards)
    for suit, count in suit_counts.items():
        if count >= 5:
            return suit
    return None


def _straight_high(cards: Sequence[Card]) -> Optional[int]:
    """
    Return the high card of the best straight, or None.

    Distinct values are scanned in descending windows of five, with the ace
    also counted as 1 so the wheel reports a high card of 5.
    """
    values = sorted({c.value for c in cards}, reverse=True)
    if Rank.ACE in values:
        values.append(1)

    for i in range(len(values) - 4):
        window = values[i:i + 5]
        if window[0] - window[4] == 4:
            return window[0]
    return None


def _kickers(cards: Sequence[Card], exclude: set, count: int) -> List[int]:
    """Highest ``count`` card values outside ``exclude`` (cards sorted descending)."""
    return [c.value for c in cards if c.value not in exclude][:count]


def _make_rank(category: HandCategory, deciding: List[int]) -> HandRank:
    return HandRank(
        category=category,
        name=HAND_CATEGORY_NAMES[category],
        score=category * CATEGORY_MULTIPLIER + _kicker_value(deciding),
        kickers=tuple(deciding),
    )


def _kicker_value(values: List[int]) -> int:
    """Left-aligned base-15 number; missing kickers count as 0."""
    padded = (values + [0] * KICKER_SLOTS)[:KICKER_SLOTS]
    total = 0
    for value in padded:
        total = total * KICKER_BASE + value
    return total


def describe_hand(rank: HandRank) -> str:
    """Get a human-readable description such as 'Full House, Kings full of Fives'."""
    k = rank.kickers
    category = rank.category

    if category == HandCategory.STRAIGHT_FLUSH:
        if k[0] == Rank.ACE:
            return "Royal Flush"
        return f"Straight Flush, {_rank_name(k[0])} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(k[0])}"
    elif category == HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(k[0])} full of {_plural(k[1])}"
    elif category == HandCategory.FLUSH:
        return f"Flush, {_rank_name(k[0])} high"
    elif category == HandCategory.STRAIGHT:
        if k[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(k[0])} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(k[0])}"
    elif category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(k[0])} and {_plural(k[1])}"
    elif category == HandCategory.ONE_PAIR:
        return f"Pair of {_plural(k[0])}"
    else:
        return f"High Card, {_rank_name(k[0])}"


def _rank_name(value: int) -> str:
    names = {
        2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six",
        7: "Seven", 8: "Eight", 9: "Nine", 10: "Ten",
        11: "Jack", 12: "Queen", 13: "King", 14: "Ace",
    }
    return names[value]


def _plural(value: int) -> str:
    name = _rank_name(value)
    return name + "es" if name == "Six" else name + "s"
