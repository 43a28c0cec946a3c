"""
Core game logic for Minesweeper.

Board rules only; nothing here imports pygame or deals in pixels.
It defines:
- CellType: what a cell holds (empty, mine or a number)
- CellState: the mutable state of a single cell
- Cell: a cell positioned by (col,row) with an attached CellState
- Board: grid allocation, mine placement, adjacency numbers, reveal/flood/flag

The Board exposes imperative methods that the presentation layer (run.py)
calls in response to user input; it knows nothing about rendering, timing,
or input devices.
"""

import itertools
import logging
import random
from enum import Enum
from typing import Iterator, List, Optional, Tuple

import config

logger = logging.getLogger(__name__)

ORTHOGONAL = [(0, -1), (-1, 0), (1, 0), (0, 1)]
SURROUNDING = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
]


class CellType(Enum):
    INVALID = "invalid"
    EMPTY = "empty"
    MINE = "mine"
    NUMBER = "number"


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class CellState:
    """Mutable state of a single cell.

    Attributes:
        type: What the cell holds. Cells outside the grid are INVALID.
        number: Number of mines in the 8 neighbouring cells.
        is_revealed: Whether the cell has been revealed to the player.
        is_flagged: Whether the player flagged this cell as a mine.
            Never true at the same time as is_revealed.
        is_exploded: Whether this is the mine that ended the game.
    """

    def __init__(
        self,
        type: CellType = CellType.INVALID,
        number: int = 0,
        is_revealed: bool = False,
        is_flagged: bool = False,
        is_exploded: bool = False,
    ):
        self.type = type
        self.number = number
        self.is_revealed = is_revealed
        self.is_flagged = is_flagged
        self.is_exploded = is_exploded

    @property
    def is_mine(self) -> bool:
        return self.type is CellType.MINE


class Cell:
    """Logical cell positioned on the board by column and row."""

    def __init__(self, col: int, row: int, type: CellType = CellType.INVALID):
        self.col = col
        self.row = row
        self.state = CellState(type)

    def __repr__(self) -> str:
        return f"Cell({self.col}, {self.row}, {self.state.type.name})"


class Board:
    """Minesweeper board state and rules.

    Responsibilities:
    - Allocate the grid and place mines, probing linearly on collisions
    - Compute adjacency numbers for every non-mine cell
    - Reveal cells (depth-first flood fill from empty cells)
    - Toggle flags, chord around numbers, check win/lose conditions
    """

    def __init__(
        self,
        cols: int,
        rows: int,
        mines: int,
        rng: Optional[random.Random] = None,
        flood_diagonals: Optional[bool] = None,
    ):
        if cols < 1 or rows < 1:
            raise ValueError(f"Board dimensions must be positive, got {cols}x{rows}")
        self.cols = cols
        self.rows = rows
        self.num_mines = config.clamp_mines(cols, rows, mines)
        if flood_diagonals is None:
            flood_diagonals = config.flood_diagonals
        self.flood_deltas = SURROUNDING if flood_diagonals else ORTHOGONAL
        self._rng = rng or random
        self.cells: List[Cell] = []
        self.status = GameStatus.PLAYING
        self.new_game()

    # ------------------------------------------------------------ setup

    def new_game(self) -> None:
        """Throw away the current grid and deal a fresh one."""
        self.status = GameStatus.PLAYING
        self.generate_cells()
        self.generate_mines()
        self.generate_numbers()
        logger.debug("New %dx%d game with %d mines", self.cols, self.rows, self.num_mines)

    def generate_cells(self) -> None:
        self.cells = [Cell(c, r, CellType.EMPTY) for r in range(self.rows) for c in range(self.cols)]

    def generate_mines(self) -> None:
        """Place num_mines mines at random positions.

        A position that already holds a mine is moved one column right,
        wrapping to the start of the next row and from the last row back
        to the first, until a free cell is found.
        """
        for _ in range(self.num_mines):
            col = self._rng.randrange(self.cols)
            row = self._rng.randrange(self.rows)

            while self.cells[self.index(col, row)].state.is_mine:
                col += 1
                if col >= self.cols:
                    col = 0
                    row += 1
                    if row >= self.rows:
                        row = 0

            self.cells[self.index(col, row)].state.type = CellType.MINE

    def generate_numbers(self) -> None:
        for cell in self.cells:
            if cell.state.is_mine:
                continue
            cell.state.number = self.count_mines(cell.col, cell.row)
            if cell.state.number > 0:
                cell.state.type = CellType.NUMBER

    def count_mines(self, col: int, row: int) -> int:
        """Count the mines among the 8 neighbours of (col,row)."""
        return sum(1 for nc, nr in self.neighbors(col, row) if self.get_cell(nc, nr).state.is_mine)

    # ------------------------------------------------------------ grid

    def index(self, col: int, row: int) -> int:
        """Return the flat list index for (col,row)."""
        return row * self.cols + col

    def is_inbounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def neighbors(self, col: int, row: int, deltas=SURROUNDING) -> List[Tuple[int, int]]:
        result = []
        for dc, dr in deltas:
            nc, nr = col + dc, row + dr
            if self.is_inbounds(nc, nr):
                result.append((nc, nr))
        return result

    def get_cell(self, col: int, row: int) -> Cell:
        """Return the cell at (col,row).

        Outside the grid a detached INVALID cell is returned, so callers can
        test the type instead of checking bounds first.
        """
        if self.is_inbounds(col, row):
            return self.cells[self.index(col, row)]
        return Cell(col, row)

    # ------------------------------------------------------------ status

    @property
    def game_over(self) -> bool:
        return self.status is not GameStatus.PLAYING

    @property
    def win(self) -> bool:
        return self.status is GameStatus.WON

    @property
    def lost(self) -> bool:
        return self.status is GameStatus.LOST

    def flagged_count(self) -> int:
        return sum(1 for cell in self.cells if cell.state.is_flagged)

    def revealed_count(self) -> int:
        return sum(1 for cell in self.cells if cell.state.is_revealed)

    def remaining_mines(self) -> int:
        return max(0, self.num_mines - self.flagged_count())

    # ------------------------------------------------------------ actions

    def toggle_flag(self, col: int, row: int) -> None:
        if self.game_over:
            return
        cell = self.get_cell(col, row)
        # Revealed cells cannot carry a flag
        if cell.state.type is CellType.INVALID or cell.state.is_revealed:
            return
        cell.state.is_flagged = not cell.state.is_flagged

    def reveal(self, col: int, row: int, lazy: bool = False) -> Optional[Iterator[Cell]]:
        """Reveal the cell at (col,row).

        Revealing a mine ends the game. Revealing an empty cell floods
        outwards; with lazy=True the flood is returned as an iterator that
        reveals one cell per step and checks for a win once exhausted.
        Otherwise the flood runs to completion and None is returned.
        """
        if self.game_over:
            return None
        cell = self.get_cell(col, row)
        if cell.state.type is CellType.INVALID or cell.state.is_revealed or cell.state.is_flagged:
            return None

        if cell.state.type is CellType.MINE:
            self.explode(col, row)
        elif cell.state.type is CellType.EMPTY:
            steps = self._flood_then_check(col, row)
            if lazy:
                return steps
            for _ in steps:
                pass
        elif cell.state.type is CellType.NUMBER:
            cell.state.is_revealed = True
            self.check_win()
        else:
            raise ValueError(f"Unknown cell type {cell.state.type!r}")
        return None

    def reveal_adjacent(self, col: int, row: int, lazy: bool = False) -> Optional[Iterator[Cell]]:
        """Chord: reveal the neighbours of a revealed number.

        Only fires when the number of flagged neighbours equals the number
        on the cell. Unflagged neighbours go through reveal(), so a wrong
        flag can still cost the game. With lazy=True the floods started by
        empty neighbours are returned as one iterator, as for reveal();
        they are dropped if another neighbour was a mine.
        """
        if self.game_over:
            return None
        cell = self.get_cell(col, row)
        if not cell.state.is_revealed or cell.state.type is not CellType.NUMBER:
            return None

        neighbours = [self.get_cell(nc, nr) for nc, nr in self.neighbors(col, row)]
        flags = sum(1 for n in neighbours if n.state.is_flagged)
        if flags != cell.state.number:
            return None

        floods = []
        for n in neighbours:
            if not n.state.is_revealed and not n.state.is_flagged:
                steps = self.reveal(n.col, n.row, lazy=lazy)
                if steps is not None:
                    floods.append(steps)
        if self.game_over or not floods:
            return None
        return itertools.chain(*floods)

    def flood(self, col: int, row: int) -> List[Cell]:
        """Reveal outwards from (col,row) and return the revealed cells."""
        return list(self.flood_steps(col, row))

    def flood_steps(self, col: int, row: int) -> Iterator[Cell]:
        """Depth-first flood, yielding each cell as it is revealed.

        Empty cells keep the flood going, numbers are revealed but stop it,
        and mines, flagged and invalid cells are never touched.
        """
        stack = [(col, row)]
        while stack:
            c, r = stack.pop()
            cell = self.get_cell(c, r)
            if cell.state.is_revealed or cell.state.is_flagged:
                continue
            if cell.state.type in (CellType.MINE, CellType.INVALID):
                continue

            cell.state.is_revealed = True
            yield cell

            if cell.state.type is CellType.EMPTY:
                # reversed so the first delta is explored first
                stack.extend(reversed(self.neighbors(c, r, self.flood_deltas)))

    def _flood_then_check(self, col: int, row: int) -> Iterator[Cell]:
        yield from self.flood_steps(col, row)
        self.check_win()

    def explode(self, col: int, row: int) -> None:
        """Blow up the mine at (col,row) and uncover every other mine."""
        logger.info("Game Over!")
        self.status = GameStatus.LOST

        cell = self.get_cell(col, row)
        cell.state.is_exploded = True

        for cell in self.cells:
            if cell.state.is_mine:
                cell.state.is_flagged = False
                cell.state.is_revealed = True

    def check_win(self) -> bool:
        """Finish the game as won once every non-mine cell is revealed."""
        if self.game_over:
            return self.win
        for cell in self.cells:
            if not cell.state.is_mine and not cell.state.is_revealed:
                return False

        logger.info("Winner!")
        self.status = GameStatus.WON
        for cell in self.cells:
            if cell.state.is_mine:
                cell.state.is_flagged = True
        return True
