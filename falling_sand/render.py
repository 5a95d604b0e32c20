import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pygame

from falling_sand.config import BACKGROUND, ZOOM_MAX, ZOOM_MIN
from falling_sand.grid import Grid
from falling_sand.materials import PALETTE


@dataclass
class Camera:
    zoom: int = ZOOM_MIN        # screen pixels per cell
    offset_x: int = 0
    offset_y: int = 0

    def screen_to_cell(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        sx, sy = pos
        return (math.floor((sx - self.offset_x) / self.zoom),
                math.floor((sy - self.offset_y) / self.zoom))

    def viewport_cells(self, size: Tuple[int, int]) -> Tuple[int, int]:
        """Cells needed to cover a screen of ``size`` pixels from the grid origin."""
        w, h = size
        return (max(0, math.ceil((w - self.offset_x) / self.zoom)),
                max(0, math.ceil((h - self.offset_y) / self.zoom)))

    def pan(self, dx: int, dy: int) -> None:
        self.offset_x += dx
        self.offset_y += dy

    def zoom_by(self, delta: int) -> int:
        self.zoom = min(ZOOM_MAX, max(ZOOM_MIN, self.zoom + delta))
        return self.zoom


def to_rgb(grid: Grid) -> np.ndarray:
    """Map grid -> [H, W, 3] uint8 colors; inactive cells get the background."""
    rgb = PALETTE[grid.variants]
    rgb[~grid.active] = BACKGROUND
    return rgb


def draw_grid(screen: pygame.Surface, grid: Grid, camera: Camera) -> None:
    if grid.width == 0 or grid.height == 0:
        return
    rgb = np.ascontiguousarray(to_rgb(grid))
    surf = pygame.image.frombuffer(rgb.tobytes(), (grid.width, grid.height), "RGB")
    if camera.zoom != 1:
        surf = pygame.transform.scale(surf, (grid.width * camera.zoom, grid.height * camera.zoom))
    screen.blit(surf, (camera.offset_x, camera.offset_y))
