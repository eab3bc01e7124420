"""
Seat state: stack, hole cards, street bet, hand investment and status.
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from pokernight.core.card import Card
from pokernight.core.rules import PlayerStatus


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        id: Seat index, stable for the whole session
        name: Display name
        is_human: True for the single human participant
        chips: Current stack
        hole_cards: Private cards (0 or 2)
        current_bet: Amount bet on the current street
        total_invested: Total amount put in the pot this hand
        status: Current seat status
        last_action: Label of the last action this street (None = not acted)
    """
    id: int
    name: str
    chips: int
    is_human: bool = False
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    total_invested: int = 0
    status: PlayerStatus = PlayerStatus.ACTIVE
    last_action: Optional[str] = None

    def reset_for_new_hand(self) -> None:
        """Demote broke seats to spectator; ready everybody else for a new hand."""
        if self.chips == 0 or self.status in (PlayerStatus.BUST, PlayerStatus.SPECTATOR):
            self.status = PlayerStatus.SPECTATOR
        else:
            self.status = PlayerStatus.ACTIVE
        self.hole_cards = []
        self.current_bet = 0
        self.total_invested = 0
        self.last_action = None

    def reset_for_new_street(self) -> None:
        """Clear the street bet; only active seats lose their action label."""
        self.current_bet = 0
        if self.status == PlayerStatus.ACTIVE:
            self.last_action = None

    def deal_cards(self, cards: List[Card]) -> None:
        self.hole_cards = cards

    def put_in(self, amount: int) -> int:
        """Move up to `amount` chips from the stack to the street bet; returns what moved."""
        moved = max(0, min(amount, self.chips))
        self.chips -= moved
        self.current_bet += moved
        self.total_invested += moved
        if moved and self.chips == 0:
            self.status = PlayerStatus.ALL_IN
        return moved

    def fold(self) -> None:
        self.status = PlayerStatus.FOLDED
        self.last_action = "Fold"

    def check(self) -> None:
        self.last_action = "Check"

    def call(self, amount_to_call: int) -> int:
        """Call; returns the chips actually added (may be all-in)."""
        moved = self.put_in(amount_to_call)
        self.last_action = "Call"
        return moved

    def raise_to(self, total_amount: int) -> int:
        """
        Raise to a total street bet.

        Args:
            total_amount: Intended total bet for the street (not a delta)

        Returns:
            Chips actually added to the pot
        """
        moved = self.put_in(total_amount - self.current_bet)
        self.last_action = f"Raise {self.current_bet}"
        return moved

    @property
    def is_active(self) -> bool:
        """Check if the seat can still act."""
        return self.status == PlayerStatus.ACTIVE

    @property
    def is_in_hand(self) -> bool:
        """Check if the seat is still contesting the pot."""
        return self.status in (PlayerStatus.ACTIVE, PlayerStatus.ALL_IN)

    def to_dict(self, reveal: bool = False) -> Dict[str, Any]:
        """Public seat info; hole cards only when `reveal` is set."""
        result = {
            "id": self.id,
            "name": self.name,
            "is_human": self.is_human,
            "chips": self.chips,
            "bet": self.current_bet,
            "total_invested": self.total_invested,
            "status": self.status.value,
            "last_action": self.last_action,
        }

        if reveal and self.hole_cards:
            result["cards"] = [c.to_dict() for c in self.hole_cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.id}, {self.name}, chips={self.chips}, "
            f"bet={self.current_bet}, status={self.status.value})"
        )

    def __str__(self) -> str:
        hole = " ".join(map(str, self.hole_cards)) or "??"
        return f"{self.name} [{hole}] ${self.chips}"
