from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

Suit = Literal["hearts", "diamonds", "clubs", "spades"]
Rank = Literal["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "jester"]

SUITS: tuple[Suit, ...] = ("hearts", "diamonds", "clubs", "spades")
NUMBER_RANKS: tuple[Rank, ...] = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10")
FACE_RANKS: tuple[Rank, ...] = ("J", "Q", "K")

RANK_VALUES: dict[Rank, int] = {
    "A": 1,
    "2": 2,
    "3": 3,
    "4": 4,
    "5": 5,
    "6": 6,
    "7": 7,
    "8": 8,
    "9": 9,
    "10": 10,
    "J": 10,
    "Q": 15,
    "K": 20,
    "jester": 0,
}

SUIT_SYMBOLS: dict[Suit, str] = {
    "hearts": "♥",
    "diamonds": "♦",
    "clubs": "♣",
    "spades": "♠",
}

RANK_NAMES: dict[Rank, str] = {"J": "Jack", "Q": "Queen", "K": "King"}


def is_red(suit: Suit) -> bool:
    return suit in ("hearts", "diamonds")


@dataclass(frozen=True)
class Card:
    """A single playing card. Value is fixed by rank."""

    suit: Suit
    rank: Rank

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    @property
    def is_companion(self) -> bool:
        # Aces are the "animal companions"
        return self.rank == "A"

    @property
    def is_jester(self) -> bool:
        return self.rank == "jester"

    def label(self) -> str:
        rank = "*" if self.is_jester else self.rank
        return f"{rank}{SUIT_SYMBOLS[self.suit]}"


def card_values(cards: Iterable[Card]) -> int:
    return sum(c.value for c in cards)


def format_cards(cards: Iterable[Card]) -> str:
    return ", ".join(c.label() for c in cards)
