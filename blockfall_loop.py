"""Game loop: tick sources, lifecycle and command dispatch"""
from __future__ import annotations

import copy
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional

import pygame

from blockfall_board import Grid, create, format_grid
from blockfall_config import SessionConfig
from blockfall_controller import PieceController
from blockfall_piece import ActivePiece
from blockfall_rng import UniformRandom
from blockfall_scoring import Lifecycle, SessionState

logger = logging.getLogger(__name__)

GRAVITY = "gravity"
COUNTER = "counter"


# -------------------------------------------------------------
# TICK SOURCES
# -------------------------------------------------------------

@dataclass
class _Timer:
    interval: int
    callback: Callable[[], None]
    due: int
    seq: int


class TickSource:
    """Named repeating timers driven by an explicit clock.

    ``advance(ms)`` fires every callback that falls due inside the window,
    one at a time in chronological order (ties in scheduling order). A timer
    cancelled by an earlier callback in the same window does not fire again.
    """

    def __init__(self):
        self.now = 0
        self._timers: Dict[str, _Timer] = {}
        self._seq = 0

    def schedule(self, name: str, interval_ms: int, callback: Callable[[], None]) -> None:
        if not isinstance(interval_ms, int) or interval_ms <= 0:
            raise ValueError(f"interval must be a positive integer, got {interval_ms!r}")
        self._seq += 1
        self._timers[name] = _Timer(interval_ms, callback, self.now + interval_ms, self._seq)

    def cancel(self, name: str) -> None:
        self._timers.pop(name, None)

    def is_scheduled(self, name: str) -> bool:
        return name in self._timers

    def interval(self, name: str) -> Optional[int]:
        t = self._timers.get(name)
        return t.interval if t else None

    def reset(self, name: str) -> None:
        """Restart the timer's phase: next firing is one full interval from now."""
        t = self._timers.get(name)
        if t:
            t.due = self.now + t.interval

    def set_interval(self, name: str, interval_ms: int) -> None:
        """Change the period from the next firing on; the pending firing keeps its time."""
        if not isinstance(interval_ms, int) or interval_ms <= 0:
            raise ValueError(f"interval must be a positive integer, got {interval_ms!r}")
        t = self._timers.get(name)
        if t:
            t.interval = interval_ms

    def advance(self, ms: int) -> int:
        """Move the clock forward ``ms`` milliseconds; return how many callbacks fired."""
        if ms < 0:
            raise ValueError("cannot advance by a negative amount")
        target = self.now + ms
        fired = 0
        while True:
            due = [t for t in self._timers.values() if t.due <= target]
            if not due:
                break
            t = min(due, key=lambda t: (t.due, t.seq))
            self.now = t.due
            t.due += t.interval
            t.callback()
            fired += 1
        self.now = target
        return fired


class ManualTickSource(TickSource):
    """Test-controlled clock: time only passes through ``advance``."""


class PygameTickSource(TickSource):
    """Real-time clock: each ``pump`` advances by the time measured with pygame."""

    def __init__(self, clock=None):
        super().__init__()
        self.clock = clock if clock is not None else pygame.time.Clock()

    def pump(self, fps: int = 60) -> int:
        dt = int(self.clock.tick(fps))
        self.advance(dt)
        return dt


# -------------------------------------------------------------
# GAME
# -------------------------------------------------------------

class Command(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE_CW = "rotate"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    START_GAME = "start"
    STOP_GAME = "stop"
    RESTART = "restart"


class Snapshot(NamedTuple):
    grid: Grid
    piece: Optional[ActivePiece]
    state: SessionState


class Game:
    """One player's session: grid, falling piece, score and the gravity clock.

    Ticks and commands are the only entry points; both run through
    ``_serialized`` so a command issued from inside a hook waits for the
    mutation in progress to finish.
    """

    def __init__(self, config: SessionConfig = None, randomizer=None,
                 tick_source: TickSource = None):
        self.config = config if config is not None else SessionConfig()
        self.randomizer = randomizer if randomizer is not None else UniformRandom(self.config.seed)
        self.ticks = tick_source if tick_source is not None else ManualTickSource()
        self._queue = deque()
        self._busy = False
        self._listeners: List[tuple] = []
        self._new_session()

    def _new_session(self) -> None:
        self.grid = create(self.config.width, self.config.height)
        self.state = SessionState(base_gravity_ms=self.config.gravity_interval_ms,
                                  player=self.config.player)
        self.controller = PieceController(self.grid, self.randomizer, self.state)
        self.controller.subscribe("game_over", self._on_game_over)
        self.controller.subscribe("lines", self._on_lines)
        for event, cb in self._listeners:
            self.controller.subscribe(event, cb)
        self.controller.spawn_next()

    def subscribe(self, event: str, callback: Callable) -> Callable:
        """Register a presentation hook; it survives ``restart``."""
        self.controller.subscribe(event, callback)
        self._listeners.append((event, callback))
        return callback

    @property
    def piece(self) -> Optional[ActivePiece]:
        return self.controller.piece

    @property
    def lifecycle(self) -> Lifecycle:
        return self.state.lifecycle

    @property
    def running(self) -> bool:
        return self.state.lifecycle is Lifecycle.RUNNING

    def _serialized(self, fn, *args):
        if self._busy:
            self._queue.append((fn, args))
            return None
        self._busy = True
        try:
            result = fn(*args)
            while self._queue:
                f, a = self._queue.popleft()
                f(*a)
        except BaseException:
            # Commands queued behind a failed mutation are dropped with it.
            self._queue.clear()
            raise
        finally:
            self._busy = False
        return result

    # ---------- lifecycle ----------

    def start(self) -> bool:
        return self._serialized(self._start)

    def _start(self) -> bool:
        if self.state.lifecycle is not Lifecycle.IDLE:
            return False
        self.state.lifecycle = Lifecycle.RUNNING
        self.ticks.schedule(GRAVITY, self.state.gravity_interval_ms, self.on_tick)
        self.ticks.schedule(COUNTER, self.config.tick_counter_interval_ms, self._count)
        logger.info('%s: started (gravity %d ms)', self.state.player, self.state.gravity_interval_ms)
        return True

    def stop(self) -> bool:
        return self._serialized(self._stop)

    def _stop(self) -> bool:
        if self.state.lifecycle is not Lifecycle.RUNNING:
            return False
        self._cancel_timers()
        self.state.lifecycle = Lifecycle.IDLE
        logger.info('%s: stopped', self.state.player)
        return True

    def restart(self) -> bool:
        return self._serialized(self._restart)

    def _restart(self) -> bool:
        self._cancel_timers()
        self._new_session()
        return self._start()

    def _cancel_timers(self) -> None:
        self.ticks.cancel(GRAVITY)
        self.ticks.cancel(COUNTER)

    def _on_game_over(self, piece) -> None:
        self._cancel_timers()
        logger.info('%s: game over\n%s', self.state.player, format_grid(self.grid))

    def _on_lines(self, rows, points) -> None:
        if self.ticks.interval(GRAVITY) not in (None, self.state.gravity_interval_ms):
            self.ticks.set_interval(GRAVITY, self.state.gravity_interval_ms)

    # ---------- ticks ----------

    def on_tick(self) -> None:
        self._serialized(self._gravity)

    def _gravity(self) -> None:
        if self.running:
            self.controller.drop()

    def _count(self) -> None:
        self._serialized(self._bump_counter)

    def _bump_counter(self) -> None:
        if self.running:
            self.state.elapsed_ticks += 1

    # ---------- commands ----------

    def dispatch(self, command: Command):
        return self._serialized(self._apply, command)

    def _apply(self, command: Command):
        if command is Command.START_GAME:
            return self._start()
        if command is Command.STOP_GAME:
            return self._stop()
        if command is Command.RESTART:
            return self._restart()
        if not self.running:
            return False
        if command is Command.MOVE_LEFT:
            return self.controller.move(-1)
        if command is Command.MOVE_RIGHT:
            return self.controller.move(1)
        if command is Command.ROTATE_CW:
            return self.controller.rotate()
        if command is Command.SOFT_DROP:
            moved = self.controller.soft_drop()
            self.ticks.reset(GRAVITY)
            return moved
        if command is Command.HARD_DROP:
            fallen = self.controller.hard_drop()
            self.ticks.reset(GRAVITY)
            return fallen
        raise ValueError(f"unknown command {command!r}")

    def move_left(self):
        return self.dispatch(Command.MOVE_LEFT)

    def move_right(self):
        return self.dispatch(Command.MOVE_RIGHT)

    def rotate(self):
        return self.dispatch(Command.ROTATE_CW)

    def soft_drop(self):
        return self.dispatch(Command.SOFT_DROP)

    def hard_drop(self):
        return self.dispatch(Command.HARD_DROP)

    # ---------- rendering ----------

    def snapshot(self) -> Snapshot:
        piece = self.controller.piece
        return Snapshot(
            grid=[row[:] for row in self.grid],
            piece=copy.deepcopy(piece) if piece is not None else None,
            state=self.state.copy(),
        )

    def __str__(self):
        return format_grid(self.grid, self.controller.piece)
