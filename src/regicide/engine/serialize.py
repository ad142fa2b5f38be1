from __future__ import annotations

from .actions import Action, DiscardAction, PlayCardsAction, UseJesterAction, YieldAction
from .enemy import Enemy
from .game import Defeat, Game, Victory


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, PlayCardsAction):
        return {"type": "play", "indices": list(a.indices)}
    if isinstance(a, YieldAction):
        return {"type": "yield"}
    if isinstance(a, DiscardAction):
        return {"type": "discard", "indices": list(a.indices)}
    if isinstance(a, UseJesterAction):
        return {"type": "use_jester"}
    # should be unreachable
    return {"type": "unknown"}


def _enemy_to_dict(e: Enemy | None) -> dict[str, object] | None:
    if e is None:
        return None
    return {
        "card": e.card.label(),
        "name": e.name,
        "suit": e.suit,
        "max_hp": e.max_hp,
        "current_hp": e.current_hp,
        "attack": e.attack,
        "immunity_cancelled": e.immunity_cancelled,
    }


def _status_to_dict(game: Game) -> dict[str, object]:
    status = game.game_state
    if isinstance(status, Victory):
        return {"state": "victory", "reason": None}
    if isinstance(status, Defeat):
        return {"state": "defeat", "reason": status.reason}
    return {"state": "playing", "reason": None}


def snapshot(game: Game) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the observable game state."""
    return {
        "seed": game.seed,
        "status": _status_to_dict(game),
        "enemy": _enemy_to_dict(game.current_enemy),
        "player": {
            "name": game.player.name,
            "hand": [c.label() for c in game.player.hand],
            "max_hand_size": game.player.max_hand_size,
        },
        "shield_value": game.shield_value,
        "total_damage": game.total_damage,
        "played_cards": [c.label() for c in game.played_cards],
        "castle_remaining": len(game.castle_deck),
        "tavern_remaining": len(game.tavern_deck),
        "discard_size": len(game.discard_pile),
        "jesters": {"count": game.jester_count, "used": game.jesters_used},
        "turn": {
            "phase": game.turn.phase,
            "jester_played": game.turn.jester_played,
            "required_discard": game.turn.required_discard,
        },
        "log": game.log_messages(),
        "action_log": [action_to_dict(a) for a in game.action_log],
    }
