from __future__ import annotations

import re
from functools import lru_cache
from typing import Sequence

from wordgrid.errors import InvalidBoard
from wordgrid.lexicon import LETTERS

GRID_SIZE = 5

Coord = tuple[int, int]
Path = tuple[Coord, ...]

_SEPARATORS = re.compile(r"[\s,/;|]+")


def snapshot_board(board: Sequence[Sequence[str]], grid_size: int = GRID_SIZE) -> tuple[str, ...]:
    """Validate a board and return a flat, row-major copy of its lowercase letters.

    Raises InvalidBoard for a wrong shape or any cell that is not exactly one
    ASCII letter. The returned tuple is independent of the caller's lists.
    """
    if isinstance(board, str) or not isinstance(board, Sequence):
        raise InvalidBoard(f"Board must be a {grid_size}x{grid_size} grid of letters")
    if len(board) != grid_size:
        raise InvalidBoard(f"Board must have {grid_size} rows, got {len(board)}")

    cells: list[str] = []
    for r, row in enumerate(board):
        if isinstance(row, str) or not isinstance(row, Sequence):
            raise InvalidBoard(f"Row {r} is not a sequence of cells")
        if len(row) != grid_size:
            raise InvalidBoard(f"Row {r} must have {grid_size} cells, got {len(row)}")
        for c, cell in enumerate(row):
            if not isinstance(cell, str) or len(cell) != 1 or cell.lower() not in LETTERS:
                raise InvalidBoard(f"Cell ({r},{c}) must be a single letter, got {cell!r}")
            cells.append(cell.lower())
    return tuple(cells)


def parse_board(text: str, grid_size: int = GRID_SIZE) -> list[list[str]]:
    """Parse a board written as 25 letters, either run together or separated
    by commas, slashes or whitespace ("catxx/sxxxx/..." or "c,a,t,...")."""
    stripped = text.strip()
    if _SEPARATORS.search(stripped):
        elements = [e for e in _SEPARATORS.split(stripped) if e]
        # rows written as runs of letters, e.g. "catxx sxxxx ..."
        if len(elements) == grid_size and all(len(e) == grid_size for e in elements):
            elements = [ch for e in elements for ch in e]
    else:
        elements = list(stripped)

    total = grid_size * grid_size
    if len(elements) != total:
        raise InvalidBoard(f"Expected {total} letters, got {len(elements)}")

    board = [elements[i * grid_size:(i + 1) * grid_size] for i in range(grid_size)]
    cells = snapshot_board(board, grid_size)
    return [list(cells[i * grid_size:(i + 1) * grid_size]) for i in range(grid_size)]


@lru_cache(maxsize=None)
def adjacency(grid_size: int = GRID_SIZE) -> tuple[tuple[int, ...], ...]:
    """King-move neighbor indices for every cell of a row-major grid."""
    neighbors = []
    for idx in range(grid_size * grid_size):
        r, c = divmod(idx, grid_size)
        adj = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = r + dr, c + dc
                if 0 <= nr < grid_size and 0 <= nc < grid_size:
                    adj.append(nr * grid_size + nc)
        neighbors.append(tuple(adj))
    return tuple(neighbors)


def is_adjacent(a: Coord, b: Coord) -> bool:
    return a != b and abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1


def format_board(board: Sequence[Sequence[str]]) -> str:
    size = len(board)
    line = "-" * (size * 4 + 1)
    rows = [line]
    for row in board:
        rows.append("|" + "|".join(f" {cell.upper()} " for cell in row) + "|")
    rows.append(line)
    return "\n".join(rows)
