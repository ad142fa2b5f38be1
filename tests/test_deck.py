from __future__ import annotations

import random
from collections import Counter

import pytest

from regicide.engine.deck import Deck
from regicide.engine.enemy import Enemy
from regicide.engine.player import Player
from regicide.engine.types import SUITS, Card


def test_castle_deck_layers() -> None:
    castle = Deck.create_castle_deck(random.Random(5))
    assert len(castle) == 12

    for rank in ("J", "Q", "K"):
        layer = [castle.draw() for _ in range(4)]
        assert all(c is not None and c.rank == rank for c in layer)
        assert sorted(c.suit for c in layer if c is not None) == sorted(SUITS)

    assert castle.draw() is None


def test_castle_suit_order_varies_by_seed() -> None:
    orders = {
        tuple(c.suit for c in Deck.create_castle_deck(random.Random(seed)).cards[:4])
        for seed in range(20)
    }
    assert len(orders) > 1


def test_tavern_deck_solo() -> None:
    tavern = Deck.create_tavern_deck(0, random.Random(1))
    assert len(tavern) == 40
    counts = Counter(c.rank for c in tavern.cards)
    assert set(counts) == {"A", "2", "3", "4", "5", "6", "7", "8", "9", "10"}
    assert all(n == 4 for n in counts.values())
    assert len(set(tavern.cards)) == 40


def test_tavern_deck_with_jesters() -> None:
    tavern = Deck.create_tavern_deck(2, random.Random(1))
    assert len(tavern) == 42
    assert sum(1 for c in tavern.cards if c.is_jester) == 2


def test_draw_and_insert() -> None:
    a, b, c = Card("hearts", "A"), Card("clubs", "2"), Card("spades", "3")
    deck = Deck(cards=[a, b])

    deck.add_to_top(c)
    assert deck.cards == [c, a, b]
    deck.add_multiple_to_bottom([Card("diamonds", "4")])
    assert deck.cards[-1] == Card("diamonds", "4")

    assert deck.draw() == c
    assert deck.draw_multiple(10) == [a, b, Card("diamonds", "4")]
    assert deck.draw() is None
    assert deck.draw_multiple(3) == []
    assert deck.is_empty()


def test_card_values_and_labels() -> None:
    assert Card("hearts", "A").value == 1
    assert Card("hearts", "5").value == 5
    assert Card("hearts", "10").value == 10
    assert Card("hearts", "J").value == 10
    assert Card("hearts", "Q").value == 15
    assert Card("hearts", "K").value == 20
    assert Card("hearts", "jester").value == 0
    assert Card("diamonds", "10").label() == "10♦"
    assert Card("spades", "jester").label() == "*♠"


def test_enemy_stats_and_damage() -> None:
    jack = Enemy.from_card(Card("hearts", "J"))
    queen = Enemy.from_card(Card("clubs", "Q"))
    king = Enemy.from_card(Card("spades", "K"))
    assert (jack.max_hp, jack.attack) == (20, 10)
    assert (queen.max_hp, queen.attack) == (30, 15)
    assert (king.max_hp, king.attack) == (40, 20)
    assert king.name == "King of Spades"

    jack.take_damage(25)
    assert jack.current_hp == 0
    assert jack.is_defeated()
    assert jack.defeated_exactly(20)
    assert not jack.defeated_exactly(25)
    assert queen.get_attack_after_shields(40) == 0
    assert queen.get_attack_after_shields(5) == 10


def test_enemy_immunity_cancel_is_one_way() -> None:
    enemy = Enemy.from_card(Card("diamonds", "Q"))
    assert enemy.is_immune_to("diamonds")
    assert not enemy.is_immune_to("hearts")
    enemy.cancel_immunity()
    enemy.cancel_immunity()
    assert not enemy.is_immune_to("diamonds")
    assert enemy.immunity_cancelled


def test_enemy_from_number_card_rejected() -> None:
    with pytest.raises(ValueError):
        Enemy.from_card(Card("hearts", "7"))


def test_player_hand_bounds() -> None:
    player = Player(name="Hero", max_hand_size=2)
    overflow = player.draw_multiple([Card("hearts", "2"), Card("hearts", "3"), Card("hearts", "4")])
    assert overflow == [Card("hearts", "4")]
    assert player.is_hand_full()
    assert player.calculate_value([0, 1]) == 5
    assert player.can_survive(5)
    assert not player.can_survive(6)
    assert player.play_cards([1, 0]) == [Card("hearts", "2"), Card("hearts", "3")]
    assert player.hand == []
