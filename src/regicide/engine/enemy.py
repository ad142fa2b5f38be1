from __future__ import annotations

from dataclasses import dataclass

from .types import RANK_NAMES, Card, Suit

# rank -> (max_hp, attack)
ENEMY_STATS: dict[str, tuple[int, int]] = {
    "J": (20, 10),
    "Q": (30, 15),
    "K": (40, 20),
}


@dataclass
class Enemy:
    card: Card
    max_hp: int
    current_hp: int
    attack: int
    immunity_cancelled: bool = False

    @staticmethod
    def from_card(card: Card) -> "Enemy":
        stats = ENEMY_STATS.get(card.rank)
        if stats is None:
            raise ValueError(f"Cannot create enemy from non-face card: {card.label()}")
        max_hp, attack = stats
        return Enemy(card=card, max_hp=max_hp, current_hp=max_hp, attack=attack)

    @property
    def suit(self) -> Suit:
        return self.card.suit

    @property
    def name(self) -> str:
        return f"{RANK_NAMES[self.card.rank]} of {self.card.suit.title()}"

    def is_immune_to(self, suit: Suit) -> bool:
        """Immunity blocks the matching suit power, never the damage."""
        return not self.immunity_cancelled and self.card.suit == suit

    def take_damage(self, amount: int) -> None:
        self.current_hp = max(0, self.current_hp - max(0, amount))

    def is_defeated(self) -> bool:
        return self.current_hp == 0

    def defeated_exactly(self, total_damage: int) -> bool:
        return total_damage == self.max_hp

    def cancel_immunity(self) -> None:
        self.immunity_cancelled = True

    def get_attack_after_shields(self, shield_value: int) -> int:
        return max(0, self.attack - shield_value)
