from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from regicide.engine.game import GameConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _parse_mode(raw: Mapping[str, object]) -> GameConfig:
    defaults = GameConfig()
    log_limit = raw.get("log_limit", defaults.log_limit)
    name = raw.get("player_name", defaults.player_name)
    if not isinstance(log_limit, int):
        raise ContentError("Expected int for log_limit")
    if not isinstance(name, str):
        raise ContentError("Expected string for player_name")
    config = GameConfig(
        hand_size=_require_int(raw, "hand_size"),
        jester_powers=_require_int(raw, "jester_powers"),
        tavern_jesters=_require_int(raw, "tavern_jesters"),
        log_limit=log_limit,
        player_name=name,
    )
    try:
        config.validate()
    except ValueError as e:
        raise ContentError(str(e)) from e
    return config


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_modes(self) -> dict[str, GameConfig]:
        path = self._data_dir / "modes.json"
        schema = _load_json(self._schema_dir / "modes.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))

        if not isinstance(raw, dict):
            raise ContentError("modes.json must be an object")
        raw_modes = raw.get("modes")
        if not isinstance(raw_modes, dict):
            raise ContentError("modes.json.modes must be an object")

        modes: dict[str, GameConfig] = {}
        for mode_id, cfg in raw_modes.items():
            if not isinstance(mode_id, str) or not isinstance(cfg, dict):
                continue
            modes[mode_id] = _parse_mode(cfg)
        return modes

    def load_mode(self, mode_id: str) -> GameConfig:
        modes = self.load_modes()
        if mode_id not in modes:
            known = ", ".join(sorted(modes)) or "none"
            raise ContentError(f"Unknown game mode: {mode_id} (available: {known})")
        return modes[mode_id]

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_modes()
