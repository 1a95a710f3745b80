"""Conversion between puzzle text and grids."""

from __future__ import annotations
from typing import List, Union

from .errors import InvalidPuzzleText
from .grid import BOX_SIZE, CELL_COUNT, SIZE, Grid
from .validator import check_givens

PLACEHOLDER = "_"
DIGITS = "0123456789"
# Also read as an empty cell and normalised to PLACEHOLDER.
ALT_PLACEHOLDER = "."

TABLE_RULE = " " + "-" * (SIZE * 2 + BOX_SIZE * 2 + 1)


def filter_valid_chars(text: str) -> str:
    """
    Drop everything except digits and empty-cell placeholders.

    Spaces, newlines and table borders all disappear, so the compact and
    table display formats can be read back in.
    """
    chars = []
    for ch in text:
        if ch in DIGITS or ch == PLACEHOLDER:
            chars.append(ch)
        elif ch == ALT_PLACEHOLDER:
            chars.append(PLACEHOLDER)
    return "".join(chars)


def text_to_values(text: str) -> List[int]:
    """
    Read puzzle text into 81 row-major values (0 for empty).

    Raises:
        InvalidPuzzleText: if the text does not hold exactly 81 cells or
            uses 0 as a cell value.
    """
    chars = filter_valid_chars(text)
    if len(chars) != CELL_COUNT:
        raise InvalidPuzzleText(
            f"Puzzle text must hold {CELL_COUNT} cells, found {len(chars)}"
        )
    values = []
    for idx, ch in enumerate(chars):
        if ch == PLACEHOLDER:
            values.append(0)
        elif ch == "0":
            row, col = divmod(idx, SIZE)
            raise InvalidPuzzleText(
                f"0 at cell {row},{col} is not a valid value; use '{PLACEHOLDER}' for empty cells"
            )
        else:
            values.append(int(ch))
    return values


def parse(text: str) -> Grid:
    """
    Create a grid from text that roughly looks like a Sudoku.

    Any amount of whitespace or border characters is allowed; what remains
    must be 81 characters of 1-9 or ``_`` for an empty cell.

    Raises:
        InvalidPuzzleText: malformed text.
        ContradictionDetected: two givens share a row, column or block.
    """
    values = text_to_values(text)
    check_givens(values)
    return Grid.from_values(values)


def to_string(grid: Grid) -> str:
    """Flat 81-character form, ``_`` for empty cells."""
    return "".join(str(v) if v else PLACEHOLDER for v in grid.values())


def format_puzzle(source: Union[str, Grid]) -> str:
    """
    Compact display form: a space between blocks, a blank line between bands.

    ``source`` may be a grid or any text :func:`filter_valid_chars` reduces
    to 81 characters.
    """
    if isinstance(source, Grid):
        chars = to_string(source)
    else:
        chars = filter_valid_chars(source)
        if len(chars) != CELL_COUNT:
            raise InvalidPuzzleText(
                f"Puzzle text must hold {CELL_COUNT} cells, found {len(chars)}"
            )

    out = []
    for i, ch in enumerate(chars):
        out.append(ch)
        if i % (SIZE * BOX_SIZE) == SIZE * BOX_SIZE - 1 and i != CELL_COUNT - 1:
            out.append("\n")
        if i % SIZE == SIZE - 1:
            out.append("\n")
        elif i % BOX_SIZE == BOX_SIZE - 1:
            out.append(" ")
    return "".join(out)


def format_table(grid: Grid) -> str:
    """Table with a border line every three rows and bars between blocks."""
    lines = [TABLE_RULE]
    for row in range(SIZE):
        row_str = " |"
        for col in range(SIZE):
            value = grid.cell(row, col).value
            row_str += f" {value}" if value else f" {PLACEHOLDER}"
            if col % BOX_SIZE == BOX_SIZE - 1:
                row_str += " |"
        lines.append(row_str)
        if row % BOX_SIZE == BOX_SIZE - 1:
            lines.append(TABLE_RULE)
    return "\n".join(lines) + "\n"
