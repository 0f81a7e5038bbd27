from __future__ import annotations

from typing import Optional, Tuple

import pygame

from .rover import Direction, RoverState
from .terrain import TerrainGrid


Color = Tuple[int, int, int]

# Martian palette
THEME = {
    "bg": (30, 18, 14),
    "grid": (70, 44, 34),
    "passable": (168, 92, 60),
    "impassable_fill": (64, 52, 50),
    "impassable_edge": (92, 78, 74),
    "rover_fill": (100, 220, 255),
    "rover_outline": (40, 140, 200),
    "rover_arrow": (140, 240, 255),
    "hud_bg": (28, 34, 48),
    "hud_border": (55, 65, 88),
    "hud_text": (200, 220, 255),
    "hud_warning": (255, 120, 90),
}

HUD_HEIGHT = 28


class PygameGridRenderer:
    """Top-down view of the terrain grid with the rover and a status bar.

    Coordinates:
    - Grid row ``x`` maps to screen y, grid column ``y`` maps to screen x.
    - Row 0 is drawn at the top, below the HUD strip.
    """

    def __init__(self, grid: TerrainGrid, cell_size: int = 40) -> None:
        pygame.init()
        pygame.display.set_caption("Mars Rover")
        self.grid = grid
        self.cell_size = cell_size
        self.window_width = grid.size * cell_size
        self.window_height = grid.size * cell_size + HUD_HEIGHT
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            y * self.cell_size,
            HUD_HEIGHT + x * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def draw(self, rover_state: RoverState, message: Optional[str] = None) -> None:
        """Render one frame."""
        self.screen.fill(THEME["bg"])
        self._draw_terrain()
        self._draw_rover(rover_state)
        self._draw_hud(rover_state, message)
        pygame.display.flip()

    def _draw_terrain(self) -> None:
        cells = self.grid.cells
        for x in range(self.grid.size):
            for y in range(self.grid.size):
                rect = self._cell_rect(x, y)
                if cells[x, y]:
                    pygame.draw.rect(self.screen, THEME["impassable_fill"], rect)
                    pygame.draw.rect(self.screen, THEME["impassable_edge"], rect.inflate(-6, -6), 2)
                else:
                    pygame.draw.rect(self.screen, THEME["passable"], rect)
                pygame.draw.rect(self.screen, THEME["grid"], rect, 1)

    def _draw_rover(self, state: RoverState) -> None:
        rect = self._cell_rect(state.x, state.y)
        center = rect.center
        radius_px = max(2, int(self.cell_size * 0.35))
        pygame.draw.circle(self.screen, THEME["rover_fill"], center, radius_px, 0)
        pygame.draw.circle(self.screen, THEME["rover_outline"], center, radius_px, 2)

        # Heading triangle pointing along the direction of travel
        dx, dy = state.direction.step
        half = self.cell_size * 0.4
        wing = self.cell_size * 0.15
        cx, cy = center
        tip = (cx + dy * half, cy + dx * half)
        base = (cx + dy * half * 0.3, cy + dx * half * 0.3)
        left = (base[0] - dx * wing, base[1] + dy * wing)
        right = (base[0] + dx * wing, base[1] - dy * wing)
        pygame.draw.line(self.screen, THEME["rover_arrow"], center, base, 3)
        pygame.draw.polygon(self.screen, THEME["rover_arrow"], [tip, left, right])
        pygame.draw.polygon(self.screen, THEME["rover_outline"], [tip, left, right], 1)

    def _draw_hud(self, state: RoverState, message: Optional[str]) -> None:
        font = pygame.font.SysFont("monospace", 13)
        panel = pygame.Rect(0, 0, self.window_width, HUD_HEIGHT)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)

        text = f"  ({state.x}, {state.y}) facing {_DIRECTION_NAMES[state.direction]}"
        color = THEME["hud_text"]
        if message:
            text += "   terrain impassable"
            color = THEME["hud_warning"]
        surf = font.render(text, True, color)
        self.screen.blit(surf, (6, (HUD_HEIGHT - surf.get_height()) // 2))

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()


_DIRECTION_NAMES = {d: d.name.title() for d in Direction}
