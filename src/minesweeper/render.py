"""
Text rendering for Minesweeper boards.

Turns the visual status codes reported by a Board into glyphs, with
optional ANSI colours for terminals. Only the board's public query
surface is used.
"""
from typing import Dict, List

from .board import Board, VisualStatus


# ============================================================================
# Glyph Tables
# ============================================================================

SYMBOLS: Dict[int, str] = {0: " "}
SYMBOLS.update({count: str(count) for count in range(1, 9)})
SYMBOLS.update({
    VisualStatus.FLAGGED: "F",
    VisualStatus.HIGHLIGHTED: "H",
    VisualStatus.MINE: "X",
    VisualStatus.HIDDEN: "O",
})

RESET = "\033[0m"

COLOURS: Dict[str, str] = {
    " ": "\033[30m",
    "1": "\033[94m",
    "2": "\033[32m",
    "3": "\033[91m",
    "4": "\033[34m",
    "5": "\033[31m",
    "6": "\033[36m",
    "7": "\033[95m",
    "8": "\033[37m",
    "F": "\033[91m",
    "H": "\033[93m",
    "X": "\033[33m",
    "O": "\033[97m",
}


def symbol_for(board: Board, row: int, col: int) -> str:
    """Glyph for a cell; '?' for a position off the board."""
    return SYMBOLS.get(board.visual_status(row, col), "?")


# ============================================================================
# Renderers
# ============================================================================

def render_board(board: Board, colour: bool = False) -> str:
    """
    Render a board as a ruled grid with row and column labels.

    Args:
        board: Board to draw.
        colour: Wrap glyphs in ANSI colour escapes.

    Returns:
        Multi-line string ending with the remaining flag count.
    """
    rule = "  " + "---" * board.cols
    lines: List[str] = [
        "   " + "".join(str(col).ljust(3) for col in range(board.cols))
    ]

    for row in range(board.rows):
        lines.append(rule)
        row_str = str(row).ljust(2)
        for col in range(board.cols):
            glyph = symbol_for(board, row, col)
            if colour:
                glyph = f"{COLOURS[glyph]}{glyph}{RESET}"
            row_str += f"|{glyph}|"
        lines.append(row_str)

    lines.append(rule)
    lines.append(f"Number of flags remaining: {board.remaining_flags}")
    return "\n".join(lines)


def render_compact(board: Board) -> str:
    """Render one line per row with glyphs separated by spaces."""
    return "\n".join(
        " ".join(symbol_for(board, row, col) for col in range(board.cols))
        for row in range(board.rows)
    )
