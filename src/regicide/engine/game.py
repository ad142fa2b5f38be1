from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Literal, Sequence

from .actions import Action, DiscardAction, PlayCardsAction, UseJesterAction, YieldAction
from .deck import Deck
from .enemy import Enemy
from .player import Player
from .types import Card, Suit, card_values, format_cards

Event = dict[str, object]
TurnPhase = Literal["play", "discard"]

DEFEAT_CANNOT_SURVIVE = "Cannot survive enemy attack!"

_BLOCKED_MESSAGES: dict[Suit, str] = {
    "hearts": "Hearts power blocked by immunity",
    "diamonds": "Diamonds power blocked by immunity",
    "clubs": "Clubs power blocked by immunity (double damage negated)",
    "spades": "Spades power blocked by immunity",
}


@dataclass(frozen=True)
class GameConfig:
    hand_size: int = 8
    jester_powers: int = 2
    tavern_jesters: int = 0
    log_limit: int = 100
    player_name: str = "Hero"

    def validate(self) -> None:
        if self.hand_size < 1:
            raise ValueError("hand_size must be at least 1.")
        if self.jester_powers < 0 or self.tavern_jesters < 0:
            raise ValueError("Jester counts cannot be negative.")
        if self.log_limit < 1:
            raise ValueError("log_limit must be at least 1.")


@dataclass(frozen=True)
class Playing:
    pass


@dataclass(frozen=True)
class Victory:
    pass


@dataclass(frozen=True)
class Defeat:
    reason: str


GameStatus = Playing | Victory | Defeat


@dataclass
class TurnState:
    """Per-turn bookkeeping that decides whether the enemy strikes back."""

    phase: TurnPhase = "play"
    jester_played: bool = False
    enemy_defeated: bool = False
    required_discard: int = 0

    @property
    def skips_counterattack(self) -> bool:
        return self.jester_played or self.enemy_defeated

    def begin(self) -> None:
        self.jester_played = False
        self.enemy_defeated = False


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None
    enemy_defeated: bool = False
    damage: int | None = None


@dataclass
class Game:
    config: GameConfig
    seed: int
    rng: random.Random
    castle_deck: Deck
    tavern_deck: Deck
    player: Player
    discard_pile: list[Card] = field(default_factory=list)
    current_enemy: Enemy | None = None
    played_cards: list[Card] = field(default_factory=list)
    shield_value: int = 0
    total_damage: int = 0
    game_state: GameStatus = field(default_factory=Playing)
    jester_count: int = 2
    jesters_used: int = 0
    turn: TurnState = field(default_factory=TurnState)
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)
    event_count: int = 0  # total ever emitted, survives log trimming

    @property
    def jester_played_this_turn(self) -> bool:
        return self.turn.jester_played

    @jester_played_this_turn.setter
    def jester_played_this_turn(self, value: bool) -> None:
        self.turn.jester_played = value

    @property
    def jesters_remaining(self) -> int:
        return max(0, self.jester_count - self.jesters_used)

    def is_over(self) -> bool:
        return not isinstance(self.game_state, Playing)

    def log_messages(self) -> list[str]:
        return [str(e.get("message", "")) for e in self.event_log]


def _ok() -> StepResult:
    return StepResult(ok=True, events=[])


def _fail(msg: str) -> StepResult:
    return StepResult(ok=False, events=[], error=msg)


def _log(game: Game, event_type: str, message: str, **details: object) -> None:
    event: Event = {"type": event_type, "message": message}
    event.update(details)
    game.event_log.append(event)
    game.event_count += 1
    excess = len(game.event_log) - game.config.log_limit
    if excess > 0:
        del game.event_log[:excess]


def _events_since(game: Game, mark: int) -> list[Event]:
    emitted = game.event_count - mark
    if emitted <= 0:
        return []
    return list(game.event_log[-emitted:])


def _labels(cards: Iterable[Card]) -> list[str]:
    return [c.label() for c in cards]


def _check_indices(hand: Sequence[Card], indices: Sequence[int]) -> str | None:
    if any(i < 0 or i >= len(hand) for i in indices):
        return "Invalid card indices"
    if len(set(indices)) != len(indices):
        return "Duplicate card indices"
    return None


def _reveal_next_enemy(game: Game) -> None:
    card = game.castle_deck.draw()
    if card is None:
        game.current_enemy = None
        game.game_state = Victory()
        _log(game, "VICTORY", "Victory! All enemies have been defeated!")
        return
    enemy = Enemy.from_card(card)
    game.current_enemy = enemy
    game.shield_value = 0
    game.total_damage = 0
    game.played_cards = []
    _log(game, "ENEMY_REVEALED", f"A {enemy.name} appears!", card=card.label())


def _defeat(game: Game, reason: str) -> None:
    game.game_state = Defeat(reason=reason)
    _log(game, "DEFEAT", f"Defeat: {reason}", reason=reason)


def validate_play(game: Game, indices: Sequence[int]) -> StepResult:
    """Check whether the cards at `indices` form a legal play. Never mutates."""
    hand = game.player.hand
    if not indices:
        return _fail("Must select at least one card")
    bad = _check_indices(hand, indices)
    if bad:
        return _fail(bad)

    cards = [hand[i] for i in indices]

    if any(c.is_jester for c in cards):
        if len(cards) > 1:
            return _fail("Jester must be played alone")
        return _ok()

    if len(cards) == 1:
        return _ok()

    aces = sum(1 for c in cards if c.is_companion)
    if aces:
        # An Ace pairs with exactly one other card of any rank, another Ace included
        if len(cards) == 2:
            return _ok()
        return _fail("Ace can only be paired with one other card")

    if len(cards) > 4:
        return _fail("Cannot play more than 4 cards at once")
    if any(c.rank != cards[0].rank for c in cards):
        return _fail("Combo cards must all have the same rank (or use Ace + 1 card)")
    if card_values(cards) > 10:
        return _fail("Combo total must be 10 or less")
    return _ok()


def _play_jester(game: Game, enemy: Enemy, cards: list[Card]) -> None:
    _log(game, "JESTER_PLAYED", "Played Jester - Enemy immunity cancelled!")
    was_immune = not enemy.immunity_cancelled
    enemy.cancel_immunity()

    # Spades blocked earlier in this encounter count towards the shield once immunity drops.
    if was_immune and enemy.suit == "spades":
        retroactive = card_values(c for c in game.played_cards if c.suit == "spades")
        if retroactive > 0:
            game.shield_value += retroactive
            _log(
                game,
                "SHIELD",
                f"Spades now active! Shield increased by {retroactive} (Total: {game.shield_value})",
                amount=retroactive,
                total=game.shield_value,
                retroactive=True,
            )

    game.discard_pile.extend(cards)
    game.turn.jester_played = True


def _heal(game: Game, amount: int) -> None:
    count = min(amount, len(game.discard_pile))
    if count <= 0:
        return
    pool = Deck(cards=list(game.discard_pile))
    pool.shuffle(game.rng)
    healed = pool.draw_multiple(count)
    game.discard_pile = pool.cards
    game.tavern_deck.add_multiple_to_bottom(healed)
    _log(game, "HEALED", f"Healed {count} cards from discard to tavern deck", count=count)


def _draw(game: Game, amount: int) -> None:
    wanted = min(amount, game.player.free_slots())
    drawn = game.tavern_deck.draw_multiple(wanted)
    game.player.draw_multiple(drawn)
    if drawn:
        _log(game, "DREW", f"Drew {len(drawn)} cards", count=len(drawn))


def _apply_suit_powers(game: Game, enemy: Enemy, cards: list[Card], attack_value: int) -> bool:
    """Resolve suit powers for one combo. Returns True when Clubs doubles damage."""
    active: set[Suit] = set()
    for suit in dict.fromkeys(c.suit for c in cards):
        if enemy.is_immune_to(suit):
            _log(game, "POWER_BLOCKED", _BLOCKED_MESSAGES[suit], suit=suit)
        else:
            active.add(suit)

    # Hearts must refill the tavern before Diamonds draws from it
    if "hearts" in active:
        _heal(game, attack_value)
    if "diamonds" in active:
        _draw(game, attack_value)
    if "clubs" in active:
        _log(game, "DOUBLE_DAMAGE", "Clubs active - double damage!")
    if "spades" in active:
        game.shield_value += attack_value
        _log(
            game,
            "SHIELD",
            f"Shield increased by {attack_value} (Total: {game.shield_value})",
            amount=attack_value,
            total=game.shield_value,
        )
    return "clubs" in active


def _resolve_defeated_enemy(game: Game, enemy: Enemy) -> None:
    game.current_enemy = None
    if enemy.defeated_exactly(game.total_damage):
        game.tavern_deck.add_to_top(enemy.card)
        _log(game, "ENEMY_CAPTURED", f"Exact damage! {enemy.name} captured!", card=enemy.card.label())
    else:
        game.discard_pile.append(enemy.card)
        _log(game, "ENEMY_DEFEATED", f"{enemy.name} defeated!", card=enemy.card.label())

    game.discard_pile.extend(game.played_cards)
    game.played_cards = []
    _reveal_next_enemy(game)


def _deal_damage(game: Game, enemy: Enemy, attack_value: int, doubled: bool) -> bool:
    damage = attack_value * 2 if doubled else attack_value
    game.total_damage += damage
    enemy.take_damage(damage)
    _log(
        game,
        "DAMAGE_DEALT",
        f"Dealt {damage} damage (Total: {game.total_damage}/{enemy.max_hp})",
        amount=damage,
        total=game.total_damage,
    )
    if not enemy.is_defeated():
        return False
    _resolve_defeated_enemy(game, enemy)
    return True


def play_cards(game: Game, indices: Sequence[int]) -> StepResult:
    """Play one card or a combo against the current enemy.

    On success `enemy_defeated` tells whether the enemy fell this call. Any
    validation failure leaves the hand untouched.
    """
    mark = game.event_count
    game.turn.begin()

    check = validate_play(game, indices)
    if not check.ok:
        return check
    enemy = game.current_enemy
    if enemy is None:
        return _fail("No current enemy")

    cards = game.player.play_cards(indices)
    attack_value = card_values(cards)

    if cards[0].is_jester:
        # Jester skips damage and the enemy's counterattack
        _play_jester(game, enemy, cards)
        return StepResult(ok=True, events=_events_since(game, mark))

    _log(
        game,
        "CARDS_PLAYED",
        f"Played: {format_cards(cards)} (Attack: {attack_value})",
        cards=_labels(cards),
        attack=attack_value,
    )
    doubled = _apply_suit_powers(game, enemy, cards, attack_value)

    # Committed before damage; a defeat discards the whole encounter's cards
    game.played_cards.extend(cards)

    defeated = _deal_damage(game, enemy, attack_value, doubled)
    game.turn.enemy_defeated = defeated
    return StepResult(ok=True, events=_events_since(game, mark), enemy_defeated=defeated)


def yield_turn(game: Game) -> StepResult:
    # The multiplayer "everyone yielded" restriction does not exist in solo play
    mark = game.event_count
    game.turn.begin()
    _log(game, "YIELDED", "Yielded turn")
    return StepResult(ok=True, events=_events_since(game, mark))


def enemy_attack(game: Game) -> StepResult:
    """Compute the current enemy's attack net of shields. Hand and shield are untouched."""
    mark = game.event_count
    enemy = game.current_enemy
    if enemy is None:
        return _fail("No current enemy")

    damage = enemy.get_attack_after_shields(game.shield_value)
    if damage > 0:
        _log(game, "ENEMY_ATTACK", f"Enemy attacks for {damage} damage!", amount=damage)
    else:
        _log(game, "ENEMY_ATTACK", "Enemy attack fully blocked by shields!", amount=0)
    return StepResult(ok=True, events=_events_since(game, mark), damage=damage)


def discard_to_survive(game: Game, indices: Sequence[int]) -> StepResult:
    mark = game.event_count
    enemy = game.current_enemy
    if enemy is None:
        return _fail("No current enemy")
    bad = _check_indices(game.player.hand, indices)
    if bad:
        return _fail(bad)

    value = game.player.calculate_value(indices)
    required = enemy.get_attack_after_shields(game.shield_value)
    if value < required:
        return _fail(f"Not enough value (need {required}, have {value})")

    discarded = game.player.play_cards(indices)
    game.discard_pile.extend(discarded)
    _log(
        game,
        "DISCARDED",
        f"Discarded: {format_cards(discarded)} (Value: {value})",
        cards=_labels(discarded),
        value=value,
    )

    if game.turn.phase == "discard":
        game.turn.phase = "play"
        game.turn.required_discard = 0
        _log(game, "SURVIVED", "Survived enemy attack! New turn begins.")
    return StepResult(ok=True, events=_events_since(game, mark))


def _check_survival(game: Game, damage: int) -> None:
    # A remaining Jester power can still rescue a hand that is short
    if not game.player.can_survive(damage) and game.jesters_remaining == 0:
        _defeat(game, DEFEAT_CANNOT_SURVIVE)


def use_jester(game: Game) -> StepResult:
    """Solo Jester power: discard the whole hand and draw a fresh one."""
    mark = game.event_count
    if game.jesters_used >= game.jester_count:
        return _fail("No Jesters remaining")

    discarded = game.player.discard_hand()
    game.discard_pile.extend(discarded)
    game.player.draw_multiple(game.tavern_deck.draw_multiple(game.player.max_hand_size))
    game.jesters_used += 1
    _log(
        game,
        "JESTER_POWER",
        f"Used Jester power! Discarded {len(discarded)} cards and drew fresh hand "
        f"({game.jesters_remaining} Jesters remaining)",
        discarded=len(discarded),
        remaining=game.jesters_remaining,
    )

    if game.turn.phase == "discard" and not game.is_over():
        _check_survival(game, game.turn.required_discard)
    return StepResult(ok=True, events=_events_since(game, mark))


def resolve_enemy_turn(game: Game) -> StepResult:
    """Move from the player's action to the enemy's counterattack.

    Either the turn simply continues (attack skipped or fully shielded), the
    player must discard `required_discard` worth of cards, or the game is lost.
    """
    mark = game.event_count
    if game.is_over():
        return StepResult(ok=True, events=[])

    if game.turn.skips_counterattack:
        why = "Jester played" if game.turn.jester_played else "enemy defeated"
        _log(game, "ATTACK_SKIPPED", f"No enemy attack this turn ({why})")
        game.turn.phase = "play"
        game.turn.required_discard = 0
        return StepResult(ok=True, events=_events_since(game, mark), damage=0)

    attack = enemy_attack(game)
    if not attack.ok:
        return attack
    damage = attack.damage or 0
    if damage == 0:
        game.turn.phase = "play"
        game.turn.required_discard = 0
        return StepResult(ok=True, events=_events_since(game, mark), damage=0)

    game.turn.phase = "discard"
    game.turn.required_discard = damage
    _check_survival(game, damage)
    return StepResult(ok=True, events=_events_since(game, mark), damage=damage)


def step(game: Game, action: Action) -> StepResult:
    """Apply a single action, including the enemy's response to it.

    This mutates `game` in-place but stays deterministic for a given
    (seed, config, action sequence).
    """
    if game.is_over():
        return _fail("Game already ended.")

    # Every attempted action is recorded, rejected ones included
    game.action_log.append(action)
    mark = game.event_count

    if isinstance(action, PlayCardsAction):
        if game.turn.phase == "discard":
            return _fail("Must discard to survive the enemy attack")
        played = play_cards(game, action.indices)
        if not played.ok:
            return played
        follow = resolve_enemy_turn(game)
        return StepResult(
            ok=follow.ok,
            events=_events_since(game, mark),
            error=follow.error,
            enemy_defeated=played.enemy_defeated,
            damage=follow.damage,
        )
    if isinstance(action, YieldAction):
        if game.turn.phase == "discard":
            return _fail("Must discard to survive the enemy attack")
        yield_turn(game)
        follow = resolve_enemy_turn(game)
        return StepResult(
            ok=follow.ok, events=_events_since(game, mark), error=follow.error, damage=follow.damage
        )
    if isinstance(action, DiscardAction):
        if game.turn.phase != "discard":
            return _fail("No enemy attack to survive")
        return discard_to_survive(game, action.indices)
    if isinstance(action, UseJesterAction):
        return use_jester(game)
    return _fail("Unknown action.")


def new_solo(seed: int | None = None, config: GameConfig | None = None) -> Game:
    cfg = config or GameConfig()
    cfg.validate()
    if seed is None:
        seed = random.randrange(2**31)

    rng = random.Random(seed)
    tavern = Deck.create_tavern_deck(cfg.tavern_jesters, rng)
    castle = Deck.create_castle_deck(rng)

    player = Player(name=cfg.player_name, max_hand_size=cfg.hand_size)
    player.draw_multiple(tavern.draw_multiple(cfg.hand_size))

    game = Game(
        config=cfg,
        seed=seed,
        rng=rng,
        castle_deck=castle,
        tavern_deck=tavern,
        player=player,
        jester_count=cfg.jester_powers,
    )
    enemies = len(castle)
    _reveal_next_enemy(game)
    _log(game, "GAME_STARTED", f"Game started! Defeat all {enemies} enemies to win.")
    return game


def replay(
    seed: int,
    actions: Iterable[Action],
    config: GameConfig | None = None,
) -> Game:
    game = new_solo(seed=seed, config=config)
    for a in actions:
        step(game, a)
        if game.is_over():
            break
    return game
