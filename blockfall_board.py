"""Board helpers: create, collides, merge, line clearing, ghost"""
from typing import List

from blockfall_errors import InvalidDimension

Grid = List[List[int]]
Shape = List[List[int]]


def create(width: int, height: int) -> Grid:
    """Return ``height`` rows of ``width`` empty cells."""
    for name, v in (("width", width), ("height", height)):
        if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
            raise InvalidDimension(f"{name} must be a positive integer, got {v!r}")
    return [[0] * width for _ in range(height)]


def width_of(grid: Grid) -> int:
    return len(grid[0])


def collides(grid: Grid, shape: Shape, x: int, y: int) -> bool:
    """Return True if the shape at (x, y) leaves the grid or overlaps a block."""
    h, w = len(grid), len(grid[0])
    for sy, row in enumerate(shape):
        for sx, v in enumerate(row):
            if not v:
                continue
            gx, gy = x + sx, y + sy
            if gx < 0 or gx >= w or gy < 0 or gy >= h:
                return True
            if grid[gy][gx]:
                return True
    return False


def merge(grid: Grid, shape: Shape, x: int, y: int) -> None:
    """Write the shape's blocks into the grid (no collision check)."""
    for sy, row in enumerate(shape):
        for sx, v in enumerate(row):
            if v:
                grid[y + sy][x + sx] = v


def is_row_full(grid: Grid, y: int) -> bool:
    return all(grid[y])


def remove_row(grid: Grid, y: int) -> None:
    """Delete row y; everything above shifts down one and a blank row enters on top."""
    w = len(grid[y])
    del grid[y]
    grid.insert(0, [0] * w)


def full_rows(grid: Grid) -> List[int]:
    return [y for y in range(len(grid)) if is_row_full(grid, y)]


def clear_lines(grid: Grid) -> List[int]:
    """Remove every full row and return the removed indices (top to bottom)."""
    rows = full_rows(grid)
    if not rows:
        return rows
    w = len(grid[0])
    # Deleting the whole batch first keeps the collected indices valid.
    for y in reversed(rows):
        del grid[y]
    for _ in rows:
        grid.insert(0, [0] * w)
    return rows


def ghost_y(grid: Grid, shape: Shape, x: int, y: int) -> int:
    """Return the y position where the shape would land if hard-dropped."""
    while not collides(grid, shape, x, y + 1):
        y += 1
    return y


def format_grid(grid: Grid, piece=None) -> str:
    """Text rendering for logs: ``#`` locked, ``@`` active piece, ``.`` empty."""
    active = set()
    if piece is not None:
        for sy, row in enumerate(piece.shape):
            for sx, v in enumerate(row):
                if v:
                    active.add((piece.x + sx, piece.y + sy))
    lines = []
    for y, row in enumerate(grid):
        lines.append("".join(
            "@" if (x, y) in active else ("#" if v else ".")
            for x, v in enumerate(row)))
    return "\n".join(lines)
