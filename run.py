"""
Pygame presentation layer for Minesweeper.

This module owns:
- Camera: centre the board in the window and map pixels to cells
- Renderer: blit the tile of every cell plus the header line
- InputController: translate mouse clicks into board actions
- Game: window, frame loop, restarts, difficulty and the animated flood

The rules live in components.Board; this module should not implement them.
"""

import argparse
import logging
import random
import sys
from typing import Iterator, Optional, Tuple

import pygame
from pygame.locals import Rect

import config
from components import Board, Cell
from tiles import TileSet, get_tile

logger = logging.getLogger(__name__)

DIFFICULTY_KEYS = {
    pygame.K_1: "EASY",
    pygame.K_2: "NORMAL",
    pygame.K_3: "HARD",
}


# ============================ Camera ============================
class Camera:
    """Places the grid in the middle of the area below the header."""

    def __init__(self, screen_size: Tuple[int, int], cols: int, rows: int, cell_size: int, top: int = 0):
        self.cell_size = cell_size
        screen_w, screen_h = screen_size
        self.origin_x = (screen_w - cols * cell_size) // 2
        self.origin_y = top + (screen_h - top - rows * cell_size) // 2

    def cell_rect(self, col: int, row: int) -> Rect:
        x = self.origin_x + col * self.cell_size
        y = self.origin_y + row * self.cell_size
        return Rect(x, y, self.cell_size, self.cell_size)

    def screen_to_cell(self, x: int, y: int) -> Tuple[int, int]:
        """Return the grid coordinates under a pixel. May be out of bounds."""
        return (x - self.origin_x) // self.cell_size, (y - self.origin_y) // self.cell_size


# ============================ Renderer ============================
class Renderer:
    def __init__(self, screen: pygame.Surface, camera: Camera, tiles: TileSet):
        self.screen = screen
        self.camera = camera
        self.tiles = tiles
        self.header_font = pygame.font.Font(config.font_name, config.header_font_size)

    def draw(self, board: Board) -> None:
        self.screen.fill(config.color_bg)
        for cell in board.cells:
            self.draw_cell(cell)
        self.draw_header(board)

    def draw_cell(self, cell: Cell) -> None:
        rect = self.camera.cell_rect(cell.col, cell.row)
        self.screen.blit(self.tiles[get_tile(cell)], rect)

    @staticmethod
    def header_text(board: Board) -> Tuple[str, str]:
        """Return the (left, right) header labels for the board."""
        if board.win:
            status = "Winner!  R: new game"
        elif board.game_over:
            status = "Game Over!  R: new game"
        else:
            status = f"{board.cols}x{board.rows}"
        return f"Mines: {board.remaining_mines()}", status

    def draw_header(self, board: Board) -> None:
        width = self.screen.get_width()
        pygame.draw.rect(self.screen, config.color_header, Rect(0, 0, width, config.margin_top - 8))
        left_text, right_text = self.header_text(board)
        left = self.header_font.render(left_text, True, config.color_header_text)
        right = self.header_font.render(right_text, True, config.color_header_text)
        self.screen.blit(left, (10, 12))
        self.screen.blit(right, (width - right.get_width() - 10, 12))


# ============================ Input ============================
class InputController:
    def __init__(self, game: "Game"):
        self.game = game

    def handle_mouse(self, pos, button) -> None:
        game = self.game
        col, row = game.camera.screen_to_cell(pos[0], pos[1])
        if button == config.mouse_right:
            game.board.toggle_flag(col, row)
        elif button == config.mouse_left:
            game.pending_flood = game.board.reveal(col, row, lazy=game.animate)
        elif button == config.mouse_middle:
            game.pending_flood = game.board.reveal_adjacent(col, row, lazy=game.animate)


# ============================ Game ============================
class Game:
    def __init__(
        self,
        difficulty: Optional[str] = config.DEFAULT_DIFFICULTY,
        rng: Optional[random.Random] = None,
        animate: Optional[bool] = None,
    ):
        pygame.init()
        pygame.display.set_caption(config.title)
        self.clock = pygame.time.Clock()
        self.rng = rng
        self.animate = config.flood_animation if animate is None else animate
        # None keeps whatever grid config already holds
        self.difficulty = difficulty
        if difficulty is not None:
            self._load_difficulty()
        self.input = InputController(self)
        self.pending_flood: Optional[Iterator[Cell]] = None
        self.screen: Optional[pygame.Surface] = None
        self.board: Optional[Board] = None
        self.new_game()

    def _load_difficulty(self) -> None:
        preset = config.DIFFICULTY_PRESETS[self.difficulty]
        config.apply_grid(preset["cols"], preset["rows"], preset["mines"])

    def set_difficulty(self, difficulty: str) -> None:
        if difficulty in config.DIFFICULTY_PRESETS:
            self.difficulty = difficulty
            self._load_difficulty()
            self.new_game()

    def new_game(self) -> None:
        """Deal a new board; also cancels a flood still being animated."""
        self.pending_flood = None
        if self.screen is None or self.screen.get_size() != config.display_dimension:
            self.screen = pygame.display.set_mode(config.display_dimension)
            self.tiles = TileSet(config.cell_size, config.tile_dir)
        if self.board is not None and (self.board.cols, self.board.rows, self.board.num_mines) == (
            config.cols,
            config.rows,
            config.num_mines,
        ):
            self.board.new_game()
        else:
            self.board = Board(config.cols, config.rows, config.num_mines, rng=self.rng)
        self.camera = Camera(self.screen.get_size(), self.board.cols, self.board.rows, config.cell_size, config.margin_top)
        self.renderer = Renderer(self.screen, self.camera, self.tiles)

    @property
    def flooding(self) -> bool:
        return self.pending_flood is not None

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Apply one pygame event. Returns False when the game should quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_r:
                self.new_game()
            elif event.key in DIFFICULTY_KEYS:
                self.set_difficulty(DIFFICULTY_KEYS[event.key])
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if self.board.game_over or self.flooding:
                return True
            self.input.handle_mouse(event.pos, event.button)
        return True

    def update(self) -> None:
        """Advance an animated flood by a few cells."""
        if self.pending_flood is None:
            return
        for _ in range(config.flood_cells_per_frame):
            if next(self.pending_flood, None) is None:
                self.pending_flood = None
                break

    def run_step(self) -> bool:
        for event in pygame.event.get():
            if not self.handle_event(event):
                return False
        self.update()
        self.renderer.draw(self.board)
        pygame.display.flip()
        self.clock.tick(config.fps)
        return True


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--difficulty",
        choices=sorted(config.DIFFICULTY_PRESETS),
        help="Start with a preset board size",
    )
    parser.add_argument("--width", type=int, help="Number of columns")
    parser.add_argument("--height", type=int, help="Number of rows")
    parser.add_argument("--mines", type=int, help="Number of mines")
    parser.add_argument("--seed", type=int, help="Seed for mine placement")
    parser.add_argument("--no-animation", action="store_true", help="Reveal floods instantly")
    parser.add_argument("--tiles", dest="tile_dir", help="Directory of tile images")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format=config.log_format,
    )
    difficulty = args.difficulty
    custom = (args.width, args.height, args.mines) != (None, None, None)
    if difficulty is None and not custom:
        difficulty = config.DEFAULT_DIFFICULTY
    elif difficulty is None:
        # a preset would overwrite the grid, so only a custom one is checked
        cols = config.cols if args.width is None else args.width
        rows = config.rows if args.height is None else args.height
        mines = config.num_mines if args.mines is None else args.mines
        if cols < 1 or rows < 1:
            logger.error("Board dimensions must be positive, got %dx%d", cols, rows)
            return 2
        config.apply_grid(cols, rows, mines)

    if args.tile_dir:
        config.tile_dir = args.tile_dir
    rng = random.Random(args.seed) if args.seed is not None else None

    game = Game(difficulty=difficulty, rng=rng, animate=not args.no_animation)
    try:
        while game.run_step():
            pass
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
