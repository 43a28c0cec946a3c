"""
Tile selection and tile sprites.

get_tile() maps a cell to the Tile that represents it on screen, and
TileSet turns every Tile into a pygame surface of one cell in size.
"""

import logging
import os
from enum import Enum
from typing import Dict, Optional

import pygame
from pygame.locals import Rect

import config
from components import Cell, CellType

logger = logging.getLogger(__name__)


class Tile(Enum):
    NUM1 = "num1"
    NUM2 = "num2"
    NUM3 = "num3"
    NUM4 = "num4"
    NUM5 = "num5"
    NUM6 = "num6"
    NUM7 = "num7"
    NUM8 = "num8"
    EMPTY = "empty"
    EXPLODED = "exploded"
    FLAG = "flag"
    MINE = "mine"
    UNKNOWN = "unknown"


NUMBER_TILES = {
    1: Tile.NUM1,
    2: Tile.NUM2,
    3: Tile.NUM3,
    4: Tile.NUM4,
    5: Tile.NUM5,
    6: Tile.NUM6,
    7: Tile.NUM7,
    8: Tile.NUM8,
}


def get_tile(cell: Cell) -> Tile:
    if cell.state.is_revealed:
        return get_revealed_tile(cell)
    if cell.state.is_flagged:
        return Tile.FLAG
    return Tile.UNKNOWN


def get_revealed_tile(cell: Cell) -> Tile:
    kind = cell.state.type
    if kind is CellType.EMPTY:
        return Tile.EMPTY
    if kind is CellType.MINE:
        return Tile.EXPLODED if cell.state.is_exploded else Tile.MINE
    if kind is CellType.NUMBER:
        return get_number_tile(cell)
    raise ValueError(f"No tile for revealed {kind.name} cell at ({cell.col}, {cell.row})")


def get_number_tile(cell: Cell) -> Tile:
    try:
        return NUMBER_TILES[cell.state.number]
    except KeyError:
        raise ValueError(f"No tile for number {cell.state.number!r}") from None


class TileSet:
    """One surface per Tile, all cell_size x cell_size.

    When tile_dir holds a <tile value>.png image (e.g. ``num3.png``) it is
    scaled to the cell size; every other tile is drawn from the colors in
    config. Needs pygame.font to be initialised for the number tiles.
    """

    def __init__(self, cell_size: int, tile_dir: Optional[str] = None):
        self.cell_size = cell_size
        self.tile_dir = tile_dir
        self.font = pygame.font.Font(config.font_name, config.font_size)
        self._surfaces: Dict[Tile, pygame.Surface] = {}
        for tile in Tile:
            self._surfaces[tile] = self._load(tile) or self._draw(tile)

    def __getitem__(self, tile: Tile) -> pygame.Surface:
        return self._surfaces[tile]

    def _load(self, tile: Tile) -> Optional[pygame.Surface]:
        if not self.tile_dir:
            return None
        path = os.path.join(self.tile_dir, tile.value + ".png")
        if not os.path.exists(path):
            return None
        logger.debug("Loading tile %s from %s", tile.name, path)
        image = pygame.image.load(path)
        return pygame.transform.smoothscale(image, (self.cell_size, self.cell_size))

    def _draw(self, tile: Tile) -> pygame.Surface:
        surface = pygame.Surface((self.cell_size, self.cell_size))
        rect = surface.get_rect()

        if tile in (Tile.UNKNOWN, Tile.FLAG):
            self._draw_raised(surface, rect)
            if tile is Tile.FLAG:
                self._draw_flag(surface, rect)
            return surface

        background = config.color_cell_exploded if tile is Tile.EXPLODED else config.color_cell_revealed
        surface.fill(background)
        if tile in (Tile.MINE, Tile.EXPLODED):
            self._draw_mine(surface, rect)
        elif tile is not Tile.EMPTY:
            number = int(tile.value[-1])
            color = config.number_colors.get(number, config.color_text)
            label = self.font.render(str(number), True, color)
            surface.blit(label, label.get_rect(center=rect.center))
        pygame.draw.rect(surface, config.color_grid, rect, 1)
        return surface

    def _draw_raised(self, surface: pygame.Surface, rect: Rect) -> None:
        surface.fill(config.color_cell_hidden)
        bevel = max(2, rect.width // 10)
        pygame.draw.rect(surface, config.color_cell_hidden_light, Rect(0, 0, rect.width, bevel))
        pygame.draw.rect(surface, config.color_cell_hidden_light, Rect(0, 0, bevel, rect.height))
        pygame.draw.rect(surface, config.color_cell_hidden_dark, Rect(0, rect.height - bevel, rect.width, bevel))
        pygame.draw.rect(surface, config.color_cell_hidden_dark, Rect(rect.width - bevel, 0, bevel, rect.height))

    def _draw_flag(self, surface: pygame.Surface, rect: Rect) -> None:
        flag_w = max(6, rect.width // 3)
        flag_h = max(8, rect.height // 2)
        pole_x = rect.left + rect.width // 3
        pole_y = rect.top + rect.height // 5
        pygame.draw.line(surface, config.color_flag_pole, (pole_x, pole_y), (pole_x, pole_y + flag_h), 2)
        pygame.draw.polygon(
            surface,
            config.color_flag,
            [
                (pole_x + 2, pole_y),
                (pole_x + 2 + flag_w, pole_y + flag_h // 3),
                (pole_x + 2, pole_y + flag_h * 2 // 3),
            ],
        )

    def _draw_mine(self, surface: pygame.Surface, rect: Rect) -> None:
        radius = rect.width // 4
        pygame.draw.circle(surface, config.color_cell_mine, rect.center, radius)
        cx, cy = rect.center
        spike = radius + radius // 2
        pygame.draw.line(surface, config.color_cell_mine, (cx - spike, cy), (cx + spike, cy), 2)
        pygame.draw.line(surface, config.color_cell_mine, (cx, cy - spike), (cx, cy + spike), 2)
