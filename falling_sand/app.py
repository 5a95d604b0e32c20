# Run:
#   pip install -e .
#   falling-sand            (or: python -m falling_sand)
#
# Controls: LMB paint selected material, RMB paint Brick,
#           Q=Sand D=Dirt W=Water E=Brick, keypad +/- or [ / ] brush size,
#           arrows pan, mouse wheel zoom, C clear, Esc quit

import random
import sys

import pygame

from falling_sand.brush import Brush, PointerState
from falling_sand.config import (BRUSH_DEFAULT, FPS, H, HUD_COLOR, PAN_STEP,
                                 PIXEL_SCALE, W)
from falling_sand.grid import Grid
from falling_sand.logging_config import configure_logging, get_logger
from falling_sand.materials import NAMES, Variant
from falling_sand.render import Camera, draw_grid
from falling_sand.simulation import step

log = get_logger(__name__)

MATERIAL_KEYS = {
    pygame.K_q: Variant.SAND,
    pygame.K_d: Variant.DIRT,
    pygame.K_w: Variant.WATER,
    pygame.K_e: Variant.BRICK,
}
GROW_KEYS = (pygame.K_KP_PLUS, pygame.K_RIGHTBRACKET)
SHRINK_KEYS = (pygame.K_KP_MINUS, pygame.K_LEFTBRACKET)
PAN_KEYS = {
    pygame.K_LEFT: (PAN_STEP, 0),
    pygame.K_RIGHT: (-PAN_STEP, 0),
    pygame.K_UP: (0, PAN_STEP),
    pygame.K_DOWN: (0, -PAN_STEP),
}


def _hud(font, screen, primary: Brush) -> None:
    lines = [
        "LMB paint  RMB brick  Q:Sand D:Dirt W:Water E:Brick  C clear  Esc quit",
        f"Material: {NAMES[primary.variant]}   Paint size: {primary.radius}  (+ / -)",
    ]
    y = 6
    for line in lines:
        screen.blit(font.render(line, True, HUD_COLOR), (6, y))
        y += 18


def main():
    configure_logging()
    pygame.init()
    screen = pygame.display.set_mode((W * PIXEL_SCALE, H * PIXEL_SCALE), pygame.RESIZABLE)
    pygame.display.set_caption("Falling Sand")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 16)

    grid = Grid()
    camera = Camera(zoom=PIXEL_SCALE)
    primary = Brush(Variant.SAND, BRUSH_DEFAULT)
    secondary = Brush(Variant.BRICK, BRUSH_DEFAULT)
    rng = random.Random()
    log.info("Sandbox started: %dx%d cells, zoom %d", W, H, camera.zoom)

    try:
        running = True
        while running:
            released = set()
            # --- input ---
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONUP:
                    released.add(event.button)
                elif event.type == pygame.MOUSEWHEEL:
                    camera.zoom_by(event.y)
                elif event.type == pygame.KEYDOWN:
                    k = event.key
                    if k == pygame.K_ESCAPE:
                        running = False
                    elif k == pygame.K_c:
                        grid.clear()
                        log.info("Grid cleared")
                    elif k in GROW_KEYS or k in SHRINK_KEYS:
                        delta = 1 if k in GROW_KEYS else -1
                        primary.adjust_radius(delta)
                        secondary.adjust_radius(delta)
                    elif k in MATERIAL_KEYS:
                        primary.variant = MATERIAL_KEYS[k]
                        log.info("Selected %s", NAMES[primary.variant])
                    elif k in PAN_KEYS:
                        camera.pan(*PAN_KEYS[k])

            grid.ensure_size(*camera.viewport_cells(screen.get_size()))

            # Paint with mouse
            cell = camera.screen_to_cell(pygame.mouse.get_pos())
            buttons = pygame.mouse.get_pressed(3)
            primary.update(grid, PointerState(cell, buttons[0], 1 in released))
            secondary.update(grid, PointerState(cell, buttons[2], 3 in released))

            # --- simulation ---
            step(grid, rng)

            # --- draw ---
            screen.fill((0, 0, 0))
            draw_grid(screen, grid, camera)
            _hud(font, screen, primary)
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        log.info("Sandbox closed")
        pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
