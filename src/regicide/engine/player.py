from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .types import Card, card_values


@dataclass
class Player:
    name: str
    max_hand_size: int
    hand: list[Card] = field(default_factory=list)

    def hand_size(self) -> int:
        return len(self.hand)

    def is_hand_full(self) -> bool:
        return len(self.hand) >= self.max_hand_size

    def free_slots(self) -> int:
        return max(0, self.max_hand_size - len(self.hand))

    def draw_card(self, card: Card) -> bool:
        if self.is_hand_full():
            return False
        self.hand.append(card)
        return True

    def draw_multiple(self, cards: Iterable[Card]) -> list[Card]:
        """Add cards until the hand is full; returns the ones that did not fit."""
        overflow: list[Card] = []
        for card in cards:
            if not self.draw_card(card):
                overflow.append(card)
        return overflow

    def selected(self, indices: Sequence[int]) -> list[Card]:
        return [self.hand[i] for i in indices if 0 <= i < len(self.hand)]

    def play_cards(self, indices: Sequence[int]) -> list[Card]:
        """Remove the cards at `indices` and return them in hand order."""
        wanted = sorted({i for i in indices if 0 <= i < len(self.hand)})
        cards = [self.hand[i] for i in wanted]
        for i in reversed(wanted):
            self.hand.pop(i)
        return cards

    def discard_hand(self) -> list[Card]:
        cards = self.hand
        self.hand = []
        return cards

    def calculate_value(self, indices: Sequence[int]) -> int:
        return card_values(self.selected(indices))

    def hand_value(self) -> int:
        return card_values(self.hand)

    def can_survive(self, damage: int) -> bool:
        return self.hand_value() >= damage
