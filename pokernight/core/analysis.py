"""
Hand and board analysis for decision strategies.

Nothing in the betting engine reads these results; they describe a holding
in the terms opponent strategies reason with (draws, outs, board wetness).
"""

from __future__ import annotations
from typing import List, Sequence
from dataclasses import dataclass, field
from enum import Enum
from collections import Counter

from pokernight.core.card import Card, Rank
from pokernight.core.hand import HandCategory, evaluate_hand


class BoardTexture(Enum):
    """How coordinated the community cards are."""
    DRY = "dry"
    NEUTRAL = "neutral"
    WET = "wet"
    VERY_WET = "very-wet"


FLUSH_DRAW = "Flush Draw"
OPEN_ENDED_DRAW = "Open-Ended Straight Draw"
GUTSHOT_DRAW = "Gutshot Straight Draw"

FLUSH_DRAW_OUTS = 9
OPEN_ENDED_OUTS = 8
GUTSHOT_OUTS = 4
COMBO_DRAW_OVERLAP = 2


@dataclass
class HandAnalysis:
    """Qualitative read of a holding."""
    description: str
    draws: List[str] = field(default_factory=list)
    outs: int = 0
    rank_name: str = "High Card"
    rank_value: int = 0


def get_board_texture(community_cards: Sequence[Card]) -> BoardTexture:
    """Classify the board as dry, neutral, wet or very wet."""
    if len(community_cards) < 3:
        return BoardTexture.NEUTRAL

    values = sorted(c.value for c in community_cards)
    max_suited = max(Counter(c.suit for c in community_cards).values())

    # Longest run of consecutive values, duplicates ignored
    run = longest = 1
    for low, high in zip(values, values[1:]):
        if high - low == 1:
            run += 1
        elif high != low:
            run = 1
        longest = max(longest, run)

    if max_suited >= 3 or longest >= 3:
        return BoardTexture.VERY_WET
    if max_suited == 2 and longest == 2:
        return BoardTexture.WET
    if values[-1] >= Rank.JACK and max_suited < 3 and longest < 2:
        return BoardTexture.DRY
    return BoardTexture.NEUTRAL


def analyze_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card], stage: str) -> HandAnalysis:
    """
    Describe a holding, its draws and its outs.

    Args:
        hole_cards: The two hole cards
        community_cards: Board cards seen so far
        stage: Stage name ("preflop", "flop", ...)
    """
    if stage == "preflop" and len(hole_cards) == 2:
        return HandAnalysis(description=_describe_preflop(hole_cards[0], hole_cards[1]))

    hand_rank = evaluate_hand(hole_cards, community_cards)
    all_cards = list(hole_cards) + list(community_cards)
    draws: List[str] = []
    outs = 0
    description = hand_rank.name

    suit_counts = Counter(c.suit for c in all_cards)
    has_flush_draw = any(count == 4 for count in suit_counts.values())
    if has_flush_draw:
        draws.append(FLUSH_DRAW)
        outs += FLUSH_DRAW_OUTS

    values = sorted({c.value for c in all_cards})
    if Rank.ACE in values:
        values.insert(0, 1)

    # Four distinct values spanning at most five ranks
    open_ended = False
    for i in range(len(values) - 3):
        span = values[i + 3] - values[i]
        if span == 3:
            if not open_ended:
                draws.append(OPEN_ENDED_DRAW)
                outs += OPEN_ENDED_OUTS
                open_ended = True
        elif span == 4:
            if GUTSHOT_DRAW not in draws and not open_ended:
                draws.append(GUTSHOT_DRAW)
                outs += GUTSHOT_OUTS

    if has_flush_draw and (OPEN_ENDED_DRAW in draws or GUTSHOT_DRAW in draws):
        outs -= COMBO_DRAW_OVERLAP

    if hand_rank.category == HandCategory.ONE_PAIR and community_cards:
        description = _describe_pair(hand_rank.kickers[0], community_cards)

    return HandAnalysis(
        description=description,
        draws=draws,
        outs=outs,
        rank_name=hand_rank.name,
        rank_value=int(hand_rank.category),
    )


def _describe_preflop(c1: Card, c2: Card) -> str:
    high, low = max(c1.value, c2.value), min(c1.value, c2.value)
    suited = c1.suit == c2.suit

    if high == low:
        if high >= Rank.JACK:
            return "Premium Pocket Pair"
        if high >= Rank.EIGHT:
            return "Medium Pocket Pair"
        return "Small Pocket Pair"
    if high >= Rank.KING and low >= Rank.TEN:
        return "Premium High Cards"
    if suited and high - low == 1:
        return "Suited Connectors"
    if suited and high == Rank.ACE:
        return "Suited Ace"
    if high >= Rank.TEN and low >= Rank.TEN:
        return "Broadways"
    return "Trash / Weak"


def _describe_pair(pair_value: int, community_cards: Sequence[Card]) -> str:
    board = [c.value for c in community_cards]
    if pair_value >= max(board):
        return "Top Pair"
    if pair_value > min(board):
        return "Middle Pair"
    return "Bottom Pair"
