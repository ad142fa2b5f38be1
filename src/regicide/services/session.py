from __future__ import annotations

from dataclasses import dataclass

from regicide.engine.actions import Action
from regicide.engine.game import Defeat, Game, StepResult, Victory, new_solo, step
from regicide.engine.serialize import action_to_dict, snapshot
from regicide.paths import get_paths

from .content import ContentService
from .telemetry import TelemetryService


@dataclass
class GameSession:
    """What a presentation layer holds on to: one game, its history and telemetry."""

    game: Game
    mode: str
    telemetry: TelemetryService | None = None

    @staticmethod
    def start(
        seed: int | None = None,
        mode: str = "solo",
        content: ContentService | None = None,
        telemetry: TelemetryService | None = None,
    ) -> "GameSession":
        if content is None:
            paths = get_paths()
            content = ContentService(paths.data_dir, paths.schema_dir)
        config = content.load_mode(mode)
        game = new_solo(seed=seed, config=config)
        session = GameSession(game=game, mode=mode, telemetry=telemetry)
        if telemetry is not None:
            telemetry.log("game_started", {"seed": game.seed, "mode": mode})
        return session

    @property
    def actions(self) -> list[Action]:
        return list(self.game.action_log)

    def apply(self, action: Action) -> StepResult:
        was_over = self.game.is_over()
        result = step(self.game, action)
        if self.telemetry is None:
            return result

        self.telemetry.log(
            "action",
            {
                "action": action_to_dict(action),
                "ok": result.ok,
                "error": result.error,
                "events": [str(e.get("type")) for e in result.events],
            },
        )
        if not was_over and self.game.is_over():
            status = self.game.game_state
            payload: dict[str, object] = {"seed": self.game.seed, "actions": len(self.game.action_log)}
            if isinstance(status, Victory):
                payload["result"] = "victory"
            elif isinstance(status, Defeat):
                payload["result"] = "defeat"
                payload["reason"] = status.reason
            self.telemetry.log("game_ended", payload)
        return result

    def snapshot(self) -> dict[str, object]:
        return snapshot(self.game)
