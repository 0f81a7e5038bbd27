from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from mars_rover.commands import Command
from mars_rover.config import GameConfig, GridConfig, SpawnConfig
from mars_rover.game import INVALID_INPUT_MESSAGE, Game
from mars_rover.rover import IMPASSABLE_MESSAGE, Direction, Rover
from mars_rover.terrain import TerrainGrid
from telemetry.logger import TelemetryLogger
from telemetry.replay import load_telemetry, summarize_turns


MAPS_DIR = Path(__file__).resolve().parent.parent / "maps"


def scripted_input(lines: List[str]):
    remaining = list(lines)

    def read_line() -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read_line, remaining


def test_play_runs_commands_until_quit(make_grid) -> None:
    grid = make_grid(size=11)
    game = Game(grid, Rover(grid, 5, 5, Direction.NORTH))
    read_line, remaining = scripted_input(["w", "bogus", "d", "W", "x", "w"])
    output: List[str] = []

    game.play(read_line=read_line, write=output.append)

    assert game.rover.position == (4, 6)
    assert game.rover.direction is Direction.EAST
    assert game.turns == 3
    assert remaining == ["w"]
    assert INVALID_INPUT_MESSAGE in output
    assert "Rover is at coordinates 5, 5 looking to -> N" in output
    assert "Rover is at coordinates 4, 6 looking to -> E" in output


def test_play_stops_at_end_of_input(make_grid) -> None:
    grid = make_grid(size=11)
    game = Game(grid, Rover(grid, 0, 0))
    read_line, _ = scripted_input(["s"])
    game.play(read_line=read_line, write=lambda _: None)
    assert game.rover.position == (1, 0)
    assert game.turns == 1


def test_play_shows_impassable_warning(make_grid) -> None:
    grid = make_grid(size=11, blocked=[(4, 5)])
    game = Game(grid, Rover(grid, 5, 5, Direction.NORTH))
    read_line, _ = scripted_input(["w", "x"])
    output: List[str] = []
    game.play(read_line=read_line, write=output.append)
    assert IMPASSABLE_MESSAGE in output
    assert game.rejected_moves == 1


def test_step_reports_state_and_rendered_grid(make_grid) -> None:
    grid = make_grid(size=15, blocked=[(5, 6)])
    game = Game(grid, Rover(grid, 5, 5, Direction.EAST))

    report = game.step(Command.FORWARD)
    assert report.position == (5, 5)
    assert report.direction is Direction.EAST
    assert report.message == IMPASSABLE_MESSAGE
    assert " 5-> | - | - | - | - | - | > | # | " in report.grid_text

    report = game.step(Command.ROTATE_LEFT)
    assert report.message is None
    assert report.direction is Direction.NORTH
    assert report.to_dict() == {"x": 5, "y": 5, "direction": "N", "message": None}
    assert game.turns == 2
    assert game.rejected_moves == 1


def test_quit_cannot_be_stepped(make_grid) -> None:
    grid = make_grid(size=11)
    game = Game(grid, Rover(grid, 1, 1))
    with pytest.raises(ValueError):
        game.step(Command.QUIT)


def test_rover_must_share_the_game_grid(make_grid) -> None:
    with pytest.raises(ValueError):
        Game(make_grid(size=11), Rover(make_grid(size=11), 0, 0))


def test_from_config_is_reproducible_with_seed() -> None:
    cfg = GameConfig(seed=42)
    a = Game.from_config(cfg)
    b = Game.from_config(cfg)
    assert a.grid.rows() == b.grid.rows()
    assert a.rover.position == b.rover.position
    assert a.grid.size == 15


def test_from_config_spawns_on_any_cell_by_default() -> None:
    on_impassable = 0
    for seed in range(100):
        game = Game.from_config(GameConfig(seed=seed))
        if game.grid.is_impassable(*game.rover.position):
            on_impassable += 1
    # About a fifth of the cells are impassable and spawning does not avoid them
    assert on_impassable > 0


def test_from_config_can_require_passable_spawn() -> None:
    for seed in range(20):
        game = Game.from_config(GameConfig(seed=seed, spawn=SpawnConfig(require_passable=True)))
        assert not game.grid.is_impassable(*game.rover.position)


def test_from_config_loads_map_file() -> None:
    cfg = GameConfig(seed=1, grid=GridConfig(map_path=str(MAPS_DIR / "crater.json")))
    game = Game.from_config(cfg)
    expected = TerrainGrid.from_map_file(str(MAPS_DIR / "crater.json"))
    assert game.grid.rows() == expected.rows()


def test_turns_are_written_to_telemetry(tmp_path, make_grid) -> None:
    grid = make_grid(size=11, blocked=[(2, 3)])
    path = tmp_path / "logs" / "turns.jsonl"
    with TelemetryLogger(str(path)) as telemetry_logger:
        game = Game(grid, Rover(grid, 3, 3, Direction.NORTH), telemetry_logger=telemetry_logger)
        game.step(Command.FORWARD)
        game.step(Command.ROTATE_RIGHT)
        game.step(Command.BACKWARD)

    df = load_telemetry(str(path))
    assert list(df["command"]) == ["FORWARD", "ROTATE_RIGHT", "BACKWARD"]
    assert list(df["accepted"]) == [False, True, True]
    assert list(df["pose.y"]) == [3, 3, 2]

    summary = summarize_turns(df)
    assert summary["turns"] == 3
    assert summary["rejected_moves"] == 1
    assert summary["cells_visited"] == 2
    assert summary["commands"]["FORWARD"] == 1


def test_play_prints_warning_before_position_and_grid(make_grid) -> None:
    grid = make_grid(size=11, blocked=[(4, 5)])
    game = Game(grid, Rover(grid, 5, 5, Direction.NORTH))
    read_line, _ = scripted_input(["w", "x"])
    output: List[str] = []
    game.play(read_line=read_line, write=output.append)

    warning_at = output.index(IMPASSABLE_MESSAGE)
    assert output[warning_at + 1] == "Rover is at coordinates 5, 5 looking to -> N"
    assert output[warning_at + 2].startswith("      ")
