"""
Cell module for Minesweeper.

A cell is owned by exactly one Board. It knows whether it hides a mine,
how many mines surround it, whether the player has opened or flagged it,
and whether a chord gesture is currently pressing on it.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """What the player has done to a cell so far."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    One square of the board.

    Opened and flagged are both values of `state`, so a cell can never
    be both at once. The highlight lives outside `state` because it
    only lasts for the length of a hold gesture.

    Attributes:
        is_mine: Set by mine placement; may move on the first reveal.
        adjacent_mines: Mines among the eight neighbours. Kept at 0 for
            mine cells.
        state: HIDDEN until opened or flagged.
        is_highlighted: Pressed down by a hold gesture.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    is_highlighted: bool = False

    def reveal(self) -> bool:
        """
        Open the cell.

        Only a plain hidden cell opens; flags protect a cell and an open
        cell stays open.

        Returns:
            True when the cell went from hidden to revealed.
        """
        if not self.is_hidden:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Put a flag on a hidden cell or take one off.

        Returns:
            True when the flag changed, False for an opened cell.
        """
        if self.is_revealed:
            return False
        self.state = CellState.HIDDEN if self.is_flagged else CellState.FLAGGED
        return True

    @property
    def is_hidden(self) -> bool:
        """Unopened and unflagged."""
        return self.state is CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state is CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state is CellState.FLAGGED

    @property
    def appears_highlighted(self) -> bool:
        """The highlight shows only on cells that are plainly hidden."""
        return self.is_highlighted and self.is_hidden
