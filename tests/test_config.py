from __future__ import annotations

from pathlib import Path

import pytest

from mars_rover.config import GameConfig, load_config


CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "game.yaml"


def test_bundled_config_loads() -> None:
    cfg = load_config(str(CONFIG_PATH))
    assert cfg.seed is None
    assert cfg.grid.size == 15
    assert (cfg.grid.passable_weight, cfg.grid.impassable_weight) == (4, 1)
    assert cfg.spawn.require_passable is False
    assert cfg.render.mode == "text"
    assert cfg.logging.telemetry_path == "telemetry_logs/turns.jsonl"


def test_partial_config_falls_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "game.yaml"
    path.write_text("seed: 7\ngrid:\n  size: 20\nspawn:\n  require_passable: true\n", encoding="utf-8")

    cfg = load_config(str(path))
    assert cfg.seed == 7
    assert cfg.grid.size == 20
    assert cfg.grid.passable_weight == 4
    assert cfg.spawn.require_passable is True
    assert cfg.render.fps == 30
    assert cfg.logging.telemetry_path is None


def test_empty_config_file(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg == GameConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"grid": {"size": 10}},
        {"grid": {"passable_weight": 0, "impassable_weight": 0}},
        {"grid": {"impassable_weight": -1}},
        {"render": {"mode": "3d"}},
        {"render": {"fps": 0}},
        {"grid": 5},
        {"spawn": ["require_passable"]},
        {"spawn": {"require_passable": "false"}},
        {"spawn": {"require_passable": 1}},
    ],
)
def test_invalid_values_are_rejected(data) -> None:
    with pytest.raises(ValueError):
        GameConfig.from_dict(data)


def test_non_mapping_document_is_rejected(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- grid\n- spawn\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))
