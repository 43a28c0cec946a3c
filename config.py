"""
Game-wide settings for Minesweeper.

Plain module attributes: components.py and run.py read them directly, and
run.Game rewrites the grid/window entries when the difficulty changes.
"""

import logging

# ---------------------------------------------------------------- grid
DIFFICULTY_PRESETS = {
    "EASY": {"cols": 9, "rows": 9, "mines": 10},
    "NORMAL": {"cols": 16, "rows": 16, "mines": 32},
    "HARD": {"cols": 30, "rows": 16, "mines": 99},
}
DEFAULT_DIFFICULTY = "NORMAL"

cols = 16
rows = 16
num_mines = 32

# ---------------------------------------------------------------- flood
# Orthogonal flood unless diagonals are enabled.
flood_diagonals = False
flood_animation = True
flood_cells_per_frame = 4

# ---------------------------------------------------------------- window
title = "Minesweeper"
fps = 60

cell_size = 32
margin_left = 16
margin_right = 16
margin_top = 56
margin_bottom = 16

width = margin_left + cols * cell_size + margin_right
height = margin_top + rows * cell_size + margin_bottom
display_dimension = (width, height)

# Optional directory of <tile name>.png sprites; tiles are drawn when unset.
tile_dir = None

# ---------------------------------------------------------------- fonts
font_name = None
font_size = 22
header_font_size = 24

# ---------------------------------------------------------------- colors
color_bg = (40, 40, 40)
color_header = (25, 25, 25)
color_header_text = (235, 235, 235)
color_cell_hidden = (170, 170, 170)
color_cell_hidden_light = (215, 215, 215)
color_cell_hidden_dark = (110, 110, 110)
color_cell_revealed = (205, 205, 205)
color_cell_exploded = (220, 40, 40)
color_cell_mine = (20, 20, 20)
color_flag = (210, 30, 30)
color_flag_pole = (30, 30, 30)
color_grid = (130, 130, 130)
color_text = (0, 0, 0)

number_colors = {
    1: (25, 71, 232),
    2: (37, 129, 42),
    3: (191, 35, 41),
    4: (37, 17, 129),
    5: (144, 19, 19),
    6: (17, 140, 140),
    7: (0, 0, 0),
    8: (128, 128, 128),
}

# ---------------------------------------------------------------- input
mouse_left = 1
mouse_middle = 2
mouse_right = 3

# ---------------------------------------------------------------- logging
log_level = logging.INFO
log_format = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def clamp_mines(cols: int, rows: int, mines: int) -> int:
    """Clamp a mine count to what fits on a cols x rows grid."""
    return max(0, min(mines, cols * rows))


def apply_grid(new_cols: int, new_rows: int, mines: int) -> None:
    """Set the grid size and recompute the window dimensions from it."""
    global cols, rows, num_mines, width, height, display_dimension
    cols, rows = new_cols, new_rows
    num_mines = clamp_mines(new_cols, new_rows, mines)
    width = margin_left + cols * cell_size + margin_right
    height = margin_top + rows * cell_size + margin_bottom
    display_dimension = (width, height)
