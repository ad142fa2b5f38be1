"""Deterministic, headless combat engine for solo Regicide.

IMPORTANT: This package must never import a presentation library or touch the filesystem.
"""

from .actions import DiscardAction, PlayCardsAction, UseJesterAction, YieldAction
from .game import (
    Defeat,
    Game,
    GameConfig,
    Playing,
    StepResult,
    Victory,
    discard_to_survive,
    enemy_attack,
    new_solo,
    play_cards,
    replay,
    resolve_enemy_turn,
    step,
    use_jester,
    validate_play,
    yield_turn,
)
from .types import Card, Rank, Suit

__all__ = [
    "Card",
    "Defeat",
    "DiscardAction",
    "Game",
    "GameConfig",
    "PlayCardsAction",
    "Playing",
    "Rank",
    "StepResult",
    "Suit",
    "UseJesterAction",
    "Victory",
    "YieldAction",
    "discard_to_survive",
    "enemy_attack",
    "new_solo",
    "play_cards",
    "replay",
    "resolve_enemy_turn",
    "step",
    "use_jester",
    "validate_play",
    "yield_turn",
]
