from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable

from .types import FACE_RANKS, NUMBER_RANKS, SUITS, Card


@dataclass
class Deck:
    """Ordered pile of cards. Index 0 is the top (next draw)."""

    cards: list[Card] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def draw(self) -> Card | None:
        if not self.cards:
            return None
        return self.cards.pop(0)

    def draw_multiple(self, count: int) -> list[Card]:
        # May return fewer than `count` when the deck runs out
        drawn = self.cards[: max(0, count)]
        del self.cards[: len(drawn)]
        return drawn

    def add_to_top(self, card: Card) -> None:
        self.cards.insert(0, card)

    def add_multiple_to_bottom(self, cards: Iterable[Card]) -> None:
        self.cards.extend(cards)

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self.cards)

    @staticmethod
    def create_castle_deck(rng: random.Random) -> "Deck":
        """Jacks on top, then Queens, Kings at the bottom.

        Suits are shuffled inside each layer only, so the draw order never
        depends on suit.
        """
        cards: list[Card] = []
        for rank in FACE_RANKS:
            layer = [Card(suit=s, rank=rank) for s in SUITS]
            rng.shuffle(layer)
            cards.extend(layer)
        return Deck(cards=cards)

    @staticmethod
    def create_tavern_deck(jesters: int, rng: random.Random) -> "Deck":
        cards = [Card(suit=s, rank=r) for s in SUITS for r in NUMBER_RANKS]
        for i in range(max(0, jesters)):
            # Jesters have no suit power; the suit is only a placeholder
            cards.append(Card(suit=SUITS[i % len(SUITS)], rank="jester"))
        deck = Deck(cards=cards)
        deck.shuffle(rng)
        return deck
