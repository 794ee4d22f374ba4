"""Active piece control: move, drop, rotate, lock and round advancement"""
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from blockfall_board import Grid, clear_lines, collides, format_grid, ghost_y, merge, width_of
from blockfall_piece import ActivePiece, attempt_rotate
from blockfall_scoring import HARD_DROP_PER_CELL, SOFT_DROP_PER_CELL, Lifecycle, SessionState

logger = logging.getLogger(__name__)

EVENTS = ("lock", "lines", "game_over")


class Phase(Enum):
    FALLING = "falling"
    GAME_OVER = "game_over"


class PieceController:
    """Owns the grid and the falling piece for one session.

    Every public method runs to completion without yielding. Rejected moves
    and rotations leave the piece untouched and report False.

    Hooks (``subscribe``):
      • ``lock(piece)``: the piece was merged into the grid
      • ``lines(rows, points)``: rows were cleared by the last lock
      • ``game_over(piece)``: the freshly spawned piece did not fit
    """

    def __init__(self, grid: Grid, randomizer, state: Optional[SessionState] = None):
        self.grid = grid
        self.rng = randomizer
        self.state = state if state is not None else SessionState()
        self.piece: Optional[ActivePiece] = None
        self.phase = Phase.FALLING
        self._listeners: Dict[str, List[Callable]] = {e: [] for e in EVENTS}

    def subscribe(self, event: str, callback: Callable) -> Callable:
        if event not in self._listeners:
            raise ValueError(f"unknown event {event!r}, expected one of {EVENTS}")
        self._listeners[event].append(callback)
        return callback

    def unsubscribe(self, event: str, callback: Callable) -> None:
        if callback in self._listeners.get(event, []):
            self._listeners[event].remove(callback)

    def _emit(self, event: str, *args) -> None:
        for cb in list(self._listeners[event]):
            cb(*args)

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def _active(self) -> bool:
        return self.piece is not None and not self.is_over

    # ---------- player commands ----------

    def move(self, direction: int) -> bool:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        if not self._active():
            return False
        p = self.piece
        if collides(self.grid, p.shape, p.x + direction, p.y):
            return False
        p.x += direction
        return True

    def drop(self) -> bool:
        """Move down one row, or lock the piece where it is.

        Returns True if the piece moved.
        """
        if not self._active():
            return False
        p = self.piece
        if not collides(self.grid, p.shape, p.x, p.y + 1):
            p.y += 1
            return True
        self._lock()
        return False

    def soft_drop(self) -> bool:
        moved = self.drop()
        if moved:
            self.state.record_drop(1, SOFT_DROP_PER_CELL)
        return moved

    def hard_drop(self) -> int:
        """Drop straight to the landing row and lock; return the rows fallen."""
        if not self._active():
            return 0
        p = self.piece
        landing = ghost_y(self.grid, p.shape, p.x, p.y)
        fallen = landing - p.y
        p.y = landing
        self.state.record_drop(fallen, HARD_DROP_PER_CELL)
        self._lock()
        return fallen

    def rotate(self) -> bool:
        if not self._active():
            return False
        rotated = attempt_rotate(self.grid, self.piece)
        if rotated is self.piece:
            return False
        self.piece = rotated
        return True

    # ---------- rounds ----------

    def spawn_next(self) -> bool:
        """Bring in the next piece; returns False (and ends the game) if it does not fit."""
        if self.is_over:
            return False
        candidate = self._spawn()
        if candidate is not None:
            self._emit("game_over", candidate)
            return False
        return True

    def _spawn(self) -> Optional[ActivePiece]:
        """Place the next piece; return it instead if it does not fit."""
        key = self.rng.next_piece()
        candidate = ActivePiece.spawn(key, width_of(self.grid))
        if collides(self.grid, candidate.shape, candidate.x, candidate.y):
            self.piece = None
            self.phase = Phase.GAME_OVER
            self.state.lifecycle = Lifecycle.GAME_OVER
            logger.info('game over: %s does not fit at (%d, %d), score %d, lines %d',
                        key, candidate.x, candidate.y, self.state.score, self.state.lines_cleared)
            return candidate
        self.piece = candidate
        self.phase = Phase.FALLING
        return None

    def _lock(self) -> None:
        """Merge, clear, score and spawn; hooks only see the finished round."""
        p = self.piece
        merge(self.grid, p.shape, p.x, p.y)
        logger.debug('lock %s at (%d, %d):\n%s', p.key, p.x, p.y, format_grid(self.grid))
        rows = clear_lines(self.grid)
        points = 0
        if rows:
            points = self.state.record_clear(len(rows))
            logger.debug('cleared rows %s for %d points', rows, points)
        rejected = self._spawn()

        self._emit("lock", p)
        if rows:
            self._emit("lines", rows, points)
        if rejected is not None:
            self._emit("game_over", rejected)
