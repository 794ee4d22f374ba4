"""Piece catalog, rotation and the horizontal kick search"""
from dataclasses import dataclass
from typing import Dict, Iterator

from blockfall_board import Grid, Shape, collides
from blockfall_errors import UnknownPieceKey

PIECE_KEYS = "OTSZLJI"

# Cell value of every block is the piece id (1-based position in PIECE_KEYS),
# so the grid keeps per-piece identity for the renderer.
_O, _T, _S, _Z, _L, _J, _I = range(1, 8)

SHAPES: Dict[str, Shape] = {
    "O": [[_O, _O],
          [_O, _O]],
    "T": [[0, _T, 0],
          [_T, _T, _T],
          [0, 0, 0]],
    "S": [[0, _S, _S],
          [_S, _S, 0],
          [0, 0, 0]],
    "Z": [[_Z, _Z, 0],
          [0, _Z, _Z],
          [0, 0, 0]],
    "L": [[0, 0, _L],
          [_L, _L, _L],
          [0, 0, 0]],
    "J": [[_J, 0, 0],
          [_J, _J, _J],
          [0, 0, 0]],
    "I": [[0, _I, 0, 0],
          [0, _I, 0, 0],
          [0, _I, 0, 0],
          [0, _I, 0, 0]],
}


def lookup(key: str) -> Shape:
    """Return a fresh copy of the base shape for ``key``."""
    try:
        shape = SHAPES[key]
    except (KeyError, TypeError):
        raise UnknownPieceKey(key) from None
    return [row[:] for row in shape]


def piece_id(key: str) -> int:
    if key not in SHAPES:
        raise UnknownPieceKey(key)
    return PIECE_KEYS.index(key) + 1


def rotate(mat: Shape) -> Shape:
    """Clockwise quarter turn; the input is left untouched."""
    return [list(row) for row in zip(*mat[::-1])]


def shape_width(mat: Shape) -> int:
    return len(mat[0]) if mat else 0


@dataclass
class ActivePiece:
    key: str
    shape: Shape
    x: int
    y: int
    rotation: int = 0  # quarter turns clockwise from spawn

    @staticmethod
    def spawn(key: str, grid_width: int) -> "ActivePiece":
        """Base shape at the top of the grid, horizontally centered."""
        shape = lookup(key)
        return ActivePiece(key, shape, (grid_width - shape_width(shape)) // 2, 0)


def kick_offsets(width: int) -> Iterator[int]:
    """Yield +1, -2, +3, -4, ... while the magnitude stays within ``width``."""
    offset = 1
    while abs(offset) <= width:
        yield offset
        offset = -(offset + (1 if offset > 0 else -1))


def attempt_rotate(grid: Grid, piece: ActivePiece) -> ActivePiece:
    """Rotate clockwise, kicking sideways if needed.

    Returns a new piece for an accepted rotation, or ``piece`` itself when
    every candidate placement collides.
    """
    rotated = rotate(piece.shape)
    turn = (piece.rotation + 1) % 4
    if not collides(grid, rotated, piece.x, piece.y):
        return ActivePiece(piece.key, rotated, piece.x, piece.y, turn)
    for offset in kick_offsets(shape_width(rotated)):
        if not collides(grid, rotated, piece.x + offset, piece.y):
            return ActivePiece(piece.key, rotated, piece.x + offset, piece.y, turn)
    return piece
