from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from regicide.engine.game import GameConfig
from regicide.paths import get_paths
from regicide.services.content import ContentError, ContentService


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_solo_mode_matches_defaults() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    assert content.load_mode("solo") == GameConfig()


def test_unknown_mode_rejected() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    with pytest.raises(ContentError, match="Unknown game mode"):
        content.load_mode("coop-4p")


def _content_with(tmp_path: Path, modes: object) -> ContentService:
    paths = get_paths()
    schema_dir = tmp_path / "schemas"
    schema_dir.mkdir()
    shutil.copy(paths.schema_dir / "modes.schema.json", schema_dir / "modes.schema.json")
    (tmp_path / "modes.json").write_text(json.dumps(modes), encoding="utf-8")
    return ContentService(tmp_path, schema_dir)


def test_schema_violation_reported(tmp_path: Path) -> None:
    content = _content_with(tmp_path, {"modes": {"solo": {"hand_size": 0, "jester_powers": 2}}})
    with pytest.raises(ContentError, match="Schema validation failed"):
        content.load_modes()


def test_missing_content_file(tmp_path: Path) -> None:
    content = ContentService(tmp_path, tmp_path)
    with pytest.raises(ContentError, match="Missing content file"):
        content.load_modes()


def test_custom_mode_loads(tmp_path: Path) -> None:
    content = _content_with(
        tmp_path,
        {"modes": {"practice": {"hand_size": 6, "jester_powers": 0, "tavern_jesters": 2}}},
    )
    cfg = content.load_mode("practice")
    assert cfg == GameConfig(hand_size=6, jester_powers=0, tavern_jesters=2)
