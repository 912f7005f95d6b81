"""
Square-grid helpers shared by the rule sets.
Teaching notes:
- Cells are stored row-major: index = row * size + col.
- Winning lines (rows, columns, both diagonals) are precomputed per board size.
- Empty cells are listed column-first so transitions come out in tie-break order.
"""
from functools import lru_cache
import math
from typing import List, Sequence, Tuple

import numpy as np


def cell_index(col: int, row: int, size: int) -> int:
    return row * size + col


@lru_cache(maxsize=None)
def win_lines(size: int) -> Tuple[Tuple[int, ...], ...]:
    grid = np.arange(size * size).reshape(size, size)
    lines = [grid[r, :] for r in range(size)]
    lines += [grid[:, c] for c in range(size)]
    lines.append(np.diagonal(grid))
    lines.append(np.diagonal(np.fliplr(grid)))
    return tuple(tuple(int(i) for i in line) for line in lines)


def empty_cells(cells: Sequence[int], size: int) -> List[Tuple[int, int]]:
    """(col, row) pairs of empty cells, ascending by column then row."""
    return [
        (c, r)
        for c in range(size)
        for r in range(size)
        if cells[cell_index(c, r, size)] == 0
    ]


def place(cells: Sequence[int], col: int, row: int, size: int, value: int) -> Tuple[int, ...]:
    lst = list(cells)
    lst[cell_index(col, row, size)] = value
    return tuple(lst)


def board_size(n_cells: int) -> int:
    size = math.isqrt(n_cells)
    if size < 1 or size * size != n_cells:
        raise ValueError(f"Board must be square, got {n_cells} cells")
    return size


def serialize_board(cells: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in cells)


def deserialize_board(board_str: str, alphabet: str) -> List[int]:
    raw = board_str.strip()
    if not raw or any(c not in alphabet for c in raw):
        raise ValueError(f"Invalid board string {board_str!r}: digits must be in {alphabet}")
    return [int(c) for c in raw]


def render(cells: Sequence[int], size: int, symbols: str) -> str:
    rows = []
    for r in range(size):
        start = r * size
        rows.append(' '.join(symbols[v] for v in cells[start:start + size]))
    return '\n'.join(rows)
