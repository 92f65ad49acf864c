"""
Board module for Minesweeper.

Implements the game board with mine placement, first-move safety,
cell revealing, flagging, chord gestures and game state management.
The board is the only stateful object a front end talks to; it never
hands out references to its cells.
"""
import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum, auto
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MIN_ROWS = 1
MAX_ROWS = 50
MIN_COLS = 4
MAX_COLS = 50

MINE_GLYPH = "*"


class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class VisualStatus(IntEnum):
    """
    Display codes reported by Board.visual_status.

    Revealed cells report their adjacent mine count (0-8) instead of one
    of these members.
    """

    INVALID = -1
    FLAGGED = 9
    HIGHLIGHTED = 10
    MINE = 11
    HIDDEN = 12


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Out-of-range values are clamped rather than rejected.

    Attributes:
        rows: Number of rows, clamped to [1, 50].
        cols: Number of columns, clamped to [4, 50].
        num_mines: Total mines to place, clamped to [1, rows * cols - 1].
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Clamp configuration after initialization."""
        self._clamp()

    def _clamp(self) -> None:
        """Bring every value into its allowed range."""
        self.rows = _clamp(int(self.rows), MIN_ROWS, MAX_ROWS)
        self.cols = _clamp(int(self.cols), MIN_COLS, MAX_COLS)
        self.num_mines = _clamp(int(self.num_mines), 1, self.total_cells - 1)

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.num_mines


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    chord gestures and win/lose conditions. Mines are laid as soon as
    the board is built; the first reveal of a game moves a mine out of
    the way if it would otherwise lose.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: Optional[random.Random] = field(default=None, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _first_move_done: bool = False
    _held_down: bool = False
    _remaining_safe_cells: int = 0
    _remaining_flags: int = 0
    _fixed_mines: Optional[List[Tuple[int, int]]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Lay out the first game after dataclass creation."""
        if self.rng is None:
            self.rng = random.Random()
        self._new_game()

    @classmethod
    def from_layout(
        cls, layout: Sequence[str], rng: Optional[random.Random] = None
    ) -> "Board":
        """
        Build a board with a fixed mine layout.

        Args:
            layout: One string per row; '*' marks a mine, any other
                character a safe cell.
            rng: Random source used by first-move relocation and reset.

        Returns:
            Board whose mines sit exactly where the layout puts them.

        Raises:
            ValueError: If the layout is ragged, outside the board size
                limits, or has no mine or no safe cell.
        """
        rows = len(layout)
        cols = len(layout[0]) if rows else 0
        if any(len(line) != cols for line in layout):
            raise ValueError("Layout rows must all have the same length")
        if not (MIN_ROWS <= rows <= MAX_ROWS and MIN_COLS <= cols <= MAX_COLS):
            raise ValueError(
                f"Layout size {rows}x{cols} outside "
                f"{MIN_ROWS}-{MAX_ROWS} rows and {MIN_COLS}-{MAX_COLS} columns"
            )
        mines = [
            (row, col)
            for row, line in enumerate(layout)
            for col, char in enumerate(line)
            if char == MINE_GLYPH
        ]
        if not 1 <= len(mines) < rows * cols:
            raise ValueError("Layout needs at least one mine and one safe cell")

        return cls(BoardConfig(rows, cols, len(mines)), rng=rng, _fixed_mines=mines)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _new_game(self) -> None:
        """
        Reset counters and lay a fresh grid.

        A fixed layout handed to the constructor is used for the first game
        only; every reset after that is random.
        """
        self._init_grid()
        self._game_state = GameState.PLAYING
        self._first_move_done = False
        self._held_down = False
        self._remaining_safe_cells = self.config.safe_cells
        self._remaining_flags = self.config.num_mines
        if self._fixed_mines is not None:
            self._lay_mines(self._fixed_mines)
            self._fixed_mines = None
        else:
            self._place_mines()
        self._calculate_adjacent_mines()

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]

    def _place_mines(self) -> None:
        """Drop mines on random cells, skipping cells that already hold one."""
        remaining = self.config.num_mines
        while remaining:
            row = self.rng.randrange(self.config.rows)
            col = self.rng.randrange(self.config.cols)
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.is_mine = True
                remaining -= 1
        logger.debug(
            "Placed %d mines on %dx%d board",
            self.config.num_mines, self.config.rows, self.config.cols,
        )

    def _lay_mines(self, positions: Sequence[Tuple[int, int]]) -> None:
        """Put mines exactly on the given positions of an empty grid."""
        for row, col in positions:
            self._grid[row][col].is_mine = True
        logger.debug(
            "Laid %d mines from fixed layout on %dx%d board",
            len(positions), self.config.rows, self.config.cols,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Recount adjacent mines for every cell from scratch."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                cell = self._grid[row][col]
                if cell.is_mine:
                    cell.adjacent_mines = 0
                else:
                    cell.adjacent_mines = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    def _count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors, never
            including the center itself.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_coordinate(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_coordinate(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        On the first reveal of a game, a mine under the cursor is moved
        elsewhere first. A zero-count cell cascades to its neighbors.
        Revealing a mine loses the game.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the board changed, False otherwise.
        """
        if not self._can_reveal(row, col):
            return False

        if not self._first_move_done:
            self._handle_first_move(row, col)

        cell = self._grid[row][col]
        if cell.is_revealed:
            return False

        if cell.is_mine:
            self._game_state = GameState.LOST
            logger.debug("Mine revealed at (%d, %d); game lost", row, col)
            return True

        self._flood_reveal(row, col)
        self._check_win_condition()
        return True

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a reveal at this position should be processed."""
        if self._game_state != GameState.PLAYING:
            return False
        if not self.is_valid_coordinate(row, col):
            return False
        return not self._grid[row][col].is_flagged

    def _handle_first_move(self, row: int, col: int) -> None:
        """Move a mine away from the first revealed cell and recount."""
        self._first_move_done = True
        cell = self._grid[row][col]
        if cell.is_mine:
            new_row, new_col = self._pick_relocation(row, col)
            self._grid[new_row][new_col].is_mine = True
            cell.is_mine = False
            logger.debug(
                "First move hit a mine at (%d, %d); moved it to (%d, %d)",
                row, col, new_row, new_col,
            )
        self._calculate_adjacent_mines()

    def _pick_relocation(self, row: int, col: int) -> Tuple[int, int]:
        """Pick a random mine-free cell other than (row, col)."""
        while True:
            new_row = self.rng.randrange(self.config.rows)
            new_col = self.rng.randrange(self.config.cols)
            if (new_row, new_col) == (row, col):
                continue
            if not self._grid[new_row][new_col].is_mine:
                return new_row, new_col

    def _flood_reveal(self, row: int, col: int) -> None:
        """
        Reveal a safe cell and cascade through zero-count neighbors.

        Uses an explicit stack so a 50x50 empty region does not hit the
        interpreter recursion limit. Only cells that go from hidden to
        revealed here spread further.
        """
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if cell.is_mine or not cell.reveal():
                continue

            self._remaining_safe_cells -= 1

            if cell.adjacent_mines == 0:
                for neighbor_row, neighbor_col in self.neighbors(
                    current_row, current_col
                ):
                    if self._grid[neighbor_row][neighbor_col].is_hidden:
                        stack.append((neighbor_row, neighbor_col))

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._remaining_safe_cells == 0:
            self._game_state = GameState.WON
            logger.debug("All safe cells revealed; game won")

    def flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Flags are not limited to the mine count; remaining_flags goes
        negative when the player over-flags.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if not self.is_valid_coordinate(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return False
        self._remaining_flags += -1 if cell.is_flagged else 1
        return True

    def hold_start(self, row: int, col: int) -> bool:
        """
        Start a chord gesture over a cell.

        Highlights the neighbors of (row, col) and marks the board as
        held down.

        Returns:
            True if the gesture started, False for an invalid position.
        """
        if not self.is_valid_coordinate(row, col):
            return False
        for neighbor_row, neighbor_col in self._highlight_targets(row, col):
            self._grid[neighbor_row][neighbor_col].is_highlighted = True
        self._held_down = True
        return True

    def hold_release(self, row: int, col: int) -> bool:
        """
        Finish a chord gesture over a cell.

        Clears the highlight, then if the cell is revealed and already
        has as many flagged neighbors as adjacent mines, reveals every
        other hidden neighbor. A misplaced flag can lose the game here.

        Returns:
            True if the gesture was processed, False for an invalid
            position.
        """
        if not self.is_valid_coordinate(row, col):
            return False
        for neighbor_row, neighbor_col in self._highlight_targets(row, col):
            self._grid[neighbor_row][neighbor_col].is_highlighted = False
        self._chord(row, col)
        self._held_down = False
        return True

    def _highlight_targets(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Neighbors affected by a hold; a flagged center blocks them all."""
        if self._grid[row][col].is_flagged:
            return []
        return self.neighbors(row, col)

    def can_chord(self, row: int, col: int) -> bool:
        """
        Check if releasing a hold over (row, col) would reveal anything.

        The cell must be revealed, have exactly as many flagged neighbors
        as adjacent mines, and still have a hidden unflagged neighbor,
        all while the game is running.
        """
        if not self.is_running or not self.is_valid_coordinate(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.is_revealed:
            return False
        if self._count_adjacent_flags(row, col) != cell.adjacent_mines:
            return False
        return any(
            self._grid[neighbor_row][neighbor_col].is_hidden
            for neighbor_row, neighbor_col in self.neighbors(row, col)
        )

    def _chord(self, row: int, col: int) -> bool:
        """Reveal hidden neighbors of a satisfied numbered cell."""
        if not self.can_chord(row, col):
            return False

        revealed_any = False
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_hidden:
                revealed_any |= self.reveal(neighbor_row, neighbor_col)
        return revealed_any

    def reset(self) -> None:
        """Reset board to a fresh random layout, keeping its size and mines."""
        self._new_game()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def remaining_flags(self) -> int:
        """Mines minus flags placed; negative when over-flagged."""
        return self._remaining_flags

    @property
    def remaining_safe_cells(self) -> int:
        """Safe cells still waiting to be revealed."""
        return self._remaining_safe_cells

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def first_move_done(self) -> bool:
        return self._first_move_done

    @property
    def is_running(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def is_held_down(self) -> bool:
        """Check if a chord gesture is in progress."""
        return self._held_down

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get a copy of the cell at position, or None if invalid."""
        if not self.is_valid_coordinate(row, col):
            return None
        return replace(self._grid[row][col])

    def visual_status(self, row: int, col: int) -> int:
        """
        Get the display code for a cell.

        Checks run in order and the first match wins: invalid position,
        highlighted, mine after the game ended, flagged, hidden, and
        finally the adjacent mine count.

        Returns:
            A VisualStatus member, or 0-8 for a revealed cell.
        """
        if not self.is_valid_coordinate(row, col):
            return VisualStatus.INVALID

        cell = self._grid[row][col]
        if cell.appears_highlighted:
            return VisualStatus.HIGHLIGHTED
        if not self.is_running and cell.is_mine:
            return VisualStatus.MINE
        if cell.is_flagged:
            return VisualStatus.FLAGGED
        if not cell.is_revealed:
            return VisualStatus.HIDDEN
        return cell.adjacent_mines

    def get_observation(self) -> np.ndarray:
        """
        Get the visual status of every cell as a numpy array.

        Returns:
            2D int8 array of shape (rows, cols) holding visual status
            codes (0-8 revealed counts, 9 flagged, 10 highlighted,
            11 mine, 12 hidden).
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self.visual_status(row, col)
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells a reveal could still act on.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        actions = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if self._grid[row][col].is_hidden:
                    actions.append((row, col))
        return actions
