from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from mars_rover.commands import Command
from mars_rover.config import GameConfig, load_config
from mars_rover.game import Game
from telemetry.logger import TelemetryLogger


KEY_COMMANDS = {
    "w": Command.FORWARD,
    "s": Command.BACKWARD,
    "a": Command.ROTATE_LEFT,
    "d": Command.ROTATE_RIGHT,
    "x": Command.QUIT,
}


def run_window(game: Game, cfg: GameConfig) -> None:
    """Drive the game from pygame key events."""
    import pygame

    from mars_rover.render import PygameGridRenderer

    renderer = PygameGridRenderer(game.grid, cell_size=cfg.render.cell_size)
    keymap = {getattr(pygame, f"K_{k}"): cmd for k, cmd in KEY_COMMANDS.items()}
    message: Optional[str] = None

    print("Keyboard control: W/S forward/back, A/D rotate, X or ESC to quit.")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                    continue
                command = keymap.get(event.key)
                if command is None:
                    continue
                if command is Command.QUIT:
                    running = False
                    continue
                report = game.step(command)
                message = report.message
                print(game.rover.describe())
                if message:
                    print(message)

        renderer.draw(game.rover.get_state(), message)
        renderer.tick(cfg.render.fps)

    renderer.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Drive a rover around a wrapping Mars grid.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/game.yaml",
        help="Path to game YAML config.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Override config seed.")
    parser.add_argument("--map", type=str, default=None, help="JSON map file to play on.")
    parser.add_argument(
        "--window",
        action="store_true",
        help="Open a pygame window instead of the terminal loop.",
    )
    parser.add_argument("--telemetry-path", type=str, default=None, help="Write turn log here.")
    args = parser.parse_args()

    cfg = load_config(args.config) if Path(args.config).is_file() else GameConfig()
    if args.seed is not None:
        cfg.seed = args.seed
    if args.map is not None:
        cfg.grid.map_path = args.map
    if args.window:
        cfg.render.mode = "window"
    if args.telemetry_path is not None:
        cfg.logging.telemetry_path = args.telemetry_path

    telemetry_logger = None
    if cfg.logging.telemetry_path:
        telemetry_logger = TelemetryLogger(cfg.logging.telemetry_path)

    game = Game.from_config(cfg, telemetry_logger=telemetry_logger)
    try:
        if cfg.render.mode == "window":
            run_window(game, cfg)
        else:
            game.play()
    except KeyboardInterrupt:
        print("Stopping (KeyboardInterrupt).")
    finally:
        if telemetry_logger is not None:
            telemetry_logger.close()

    print(f"Turns played: {game.turns}, rejected moves: {game.rejected_moves}")


if __name__ == "__main__":
    main()
