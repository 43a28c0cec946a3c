"""
Pytest configuration and shared fixtures.
"""
import os

# Headless pygame; must be set before pygame opens a display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

import config
from components import Board, CellType

CONFIG_KEYS = [
    "cols",
    "rows",
    "num_mines",
    "width",
    "height",
    "display_dimension",
    "tile_dir",
    "flood_diagonals",
    "flood_animation",
    "flood_cells_per_frame",
]


@pytest.fixture(autouse=True)
def restore_config():
    """Undo any changes a test makes to the config module."""
    saved = {key: getattr(config, key) for key in CONFIG_KEYS}
    yield
    for key, value in saved.items():
        setattr(config, key, value)


@pytest.fixture
def make_board():
    """Build a board from rows of text, '*' marking a mine."""

    def build(layout, **kwargs) -> Board:
        board = Board(len(layout[0]), len(layout), 0, **kwargs)
        for row, line in enumerate(layout):
            for col, char in enumerate(line):
                if char == "*":
                    board.get_cell(col, row).state.type = CellType.MINE
        board.num_mines = sum(line.count("*") for line in layout)
        board.generate_numbers()
        return board

    return build


@pytest.fixture
def pygame_ready():
    pygame.init()
    yield
    pygame.quit()


class ScriptedRandom:
    """Stand-in for random.Random returning queued randrange values."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, stop):
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value


@pytest.fixture
def scripted_random():
    return ScriptedRandom
