"""
Tests for hand evaluation.
"""

import pytest
from pokernight.core.card import parse_cards
from pokernight.core.hand import (
    HandCategory, describe_hand, evaluate_hand,
)


def rank_of(cards: str):
    return evaluate_hand(parse_cards(cards))


class TestHandRanking:
    """Tests for hand category recognition."""

    def test_royal_flush(self, royal_flush):
        rank = evaluate_hand(royal_flush)
        assert rank.category == HandCategory.STRAIGHT_FLUSH
        assert rank.kickers == (14,)
        assert rank.score == 8 * 1000000 + 14 * 15 ** 4
        assert describe_hand(rank) == "Royal Flush"

    def test_straight_flush(self, straight_flush):
        rank = evaluate_hand(straight_flush)
        assert rank.category == HandCategory.STRAIGHT_FLUSH
        assert describe_hand(rank) == "Straight Flush, Nine high"

    def test_four_of_a_kind(self):
        rank = rank_of("As Ah Ad Ac Ks")
        assert rank.category == HandCategory.FOUR_OF_A_KIND
        assert rank.kickers == (14, 13)

    def test_full_house(self):
        rank = rank_of("As Ah Ad Kc Ks")
        assert rank.category == HandCategory.FULL_HOUSE
        assert rank.kickers == (14, 13)

    def test_flush(self):
        rank = rank_of("As Ks Js 9s 2s")
        assert rank.category == HandCategory.FLUSH
        assert rank.kickers == (14, 13, 11, 9, 2)

    def test_straight(self):
        rank = rank_of("As Kh Qd Jc 10s")
        assert rank.category == HandCategory.STRAIGHT
        assert rank.kickers == (14,)

    def test_three_of_a_kind(self):
        rank = rank_of("7s 7h 7d Kc 2s")
        assert rank.category == HandCategory.THREE_OF_A_KIND
        assert rank.kickers == (7, 13, 2)

    def test_two_pair(self):
        rank = rank_of("As Ah Kd Kc 2s")
        assert rank.category == HandCategory.TWO_PAIR
        assert describe_hand(rank) == "Two Pair, Aces and Kings"

    def test_one_pair(self):
        rank = rank_of("6s 6h Kd Qc 2s")
        assert rank.category == HandCategory.ONE_PAIR
        assert rank.name == "Pair"
        assert describe_hand(rank) == "Pair of Sixes"

    def test_high_card(self):
        rank = rank_of("As Jh 9d 6c 2s")
        assert rank.category == HandCategory.HIGH_CARD
        assert describe_hand(rank) == "High Card, Ace"


class TestWheel:
    """The ace plays low in A-2-3-4-5."""

    def test_wheel_is_five_high_straight(self, wheel_straight):
        rank = evaluate_hand(wheel_straight)
        assert rank.category == HandCategory.STRAIGHT
        assert rank.kickers == (5,)
        assert describe_hand(rank) == "Straight, Five high (Wheel)"

    def test_wheel_below_six_high(self, wheel_straight):
        six_high = rank_of("2h 3d 4c 5s 6h")
        assert evaluate_hand(wheel_straight).score < six_high.score

    def test_steel_wheel(self):
        rank = rank_of("Ah 2h 3h 4h 5h")
        assert rank.category == HandCategory.STRAIGHT_FLUSH
        assert rank.kickers == (5,)


class TestSevenCards:
    """Best five of seven."""

    def test_flush_beats_straight_on_same_cards(self):
        rank = evaluate_hand(parse_cards("2h 9h"), parse_cards("3h 4d 5h 6c Kh"))
        assert rank.category == HandCategory.FLUSH
        assert rank.kickers == (13, 9, 5, 3, 2)

    def test_full_house_from_two_trips(self):
        rank = evaluate_hand(parse_cards("Ks Kh"), parse_cards("Kd 5c 5h 5d 2s"))
        assert rank.category == HandCategory.FULL_HOUSE
        assert rank.kickers == (13, 5)
        assert describe_hand(rank) == "Full House, Kings full of Fives"

    def test_full_house_uses_highest_pair(self):
        rank = evaluate_hand(parse_cards("As Ah"), parse_cards("Ad Kc Kh Qs Qd"))
        assert rank.kickers == (14, 13)

    def test_best_straight_chosen(self):
        rank = evaluate_hand(parse_cards("9c 10d"), parse_cards("5h 6s 7c 8d 2h"))
        assert rank.category == HandCategory.STRAIGHT
        assert rank.kickers == (10,)

    def test_two_cards_only(self):
        rank = evaluate_hand(parse_cards("As Ad"))
        assert rank.category == HandCategory.ONE_PAIR
        # Missing kickers count as zero
        assert rank.score == 1000000 + 14 * 15 ** 4

    def test_invalid_card_counts(self):
        with pytest.raises(ValueError):
            evaluate_hand(parse_cards("As"))
        with pytest.raises(ValueError):
            evaluate_hand(parse_cards("As Ad"), parse_cards("2c 3c 4c 5c 6c 7c"))


class TestScoreOrdering:
    """Better hands score strictly higher, equal hands tie."""

    def test_categories_strictly_ordered(self):
        hands = [
            "As Jh 9d 6c 2s",   # high card
            "6s 6h Kd Qc 2s",   # pair
            "As Ah Kd Kc 2s",   # two pair
            "7s 7h 7d Kc 2s",   # trips
            "2h 3d 4c 5s 6h",   # straight
            "As Ks Js 9s 2s",   # flush
            "As Ah Ad Kc Ks",   # full house
            "As Ah Ad Ac Ks",   # quads
            "9h 8h 7h 6h 5h",   # straight flush
        ]
        scores = [rank_of(h).score for h in hands]
        assert scores == sorted(scores)
        assert len(set(scores)) == len(scores)

    def test_best_high_card_below_worst_pair(self):
        assert rank_of("As Kh Qd Jc 9s").score < rank_of("2s 2h 3d 4c 5h").score

    def test_kicker_decides(self):
        board = parse_cards("As 8d 7c 4h 2s")
        king_kicker = evaluate_hand(parse_cards("Ah Kc"), board)
        queen_kicker = evaluate_hand(parse_cards("Ad Qc"), board)
        assert king_kicker.score > queen_kicker.score

    def test_board_plays_ties(self):
        board = parse_cards("As Ks Qs Js 10s")
        first = evaluate_hand(parse_cards("2c 3d"), board)
        second = evaluate_hand(parse_cards("4h 5h"), board)
        assert first.score == second.score

    def test_same_strength_different_suits_tie(self):
        assert rank_of("As Kh Qd Jc 9s").score == rank_of("Ah Kd Qc Js 9h").score
