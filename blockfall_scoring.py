"""Session state, scoring and the gravity curve"""
import logging
from dataclasses import dataclass, replace
from enum import Enum

logger = logging.getLogger(__name__)

LINES_PER_LEVEL = 10
# Points per lock by rows cleared at once, multiplied by (level + 1).
SCORE_TABLE = {0: 0, 1: 100, 2: 300, 3: 500, 4: 800}
SOFT_DROP_PER_CELL = 1
HARD_DROP_PER_CELL = 2
MIN_GRAVITY_MS = 60
GRAVITY_STEP_MS = 60


class Lifecycle(Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


def gravity_interval_ms(base: int, level: int) -> int:
    """Milliseconds between gravity drops at ``level``."""
    return max(MIN_GRAVITY_MS, base - level * GRAVITY_STEP_MS)


def line_score(cleared: int, level: int = 0) -> int:
    if cleared < 0:
        raise ValueError("cleared must be non-negative")
    # A single lock spans at most four rows; anything beyond scores 400 per extra row.
    base = SCORE_TABLE.get(cleared, SCORE_TABLE[4] + (cleared - 4) * 400)
    return base * (level + 1)


@dataclass
class SessionState:
    base_gravity_ms: int = 1000
    player: str = "player1"
    score: int = 0
    lines_cleared: int = 0
    level: int = 0
    lifecycle: Lifecycle = Lifecycle.IDLE
    gravity_interval_ms: int = 0
    elapsed_ticks: int = 0

    def __post_init__(self):
        if not self.gravity_interval_ms:
            self.gravity_interval_ms = gravity_interval_ms(self.base_gravity_ms, self.level)

    def record_clear(self, cleared: int) -> int:
        """Account for one lock that removed ``cleared`` rows; return points awarded."""
        points = line_score(cleared, self.level)
        self.score += points
        self.lines_cleared += cleared
        if self.lines_cleared // LINES_PER_LEVEL > self.level:
            self.level = self.lines_cleared // LINES_PER_LEVEL
            self.gravity_interval_ms = gravity_interval_ms(self.base_gravity_ms, self.level)
            logger.info('level up: %d (gravity %d ms)', self.level, self.gravity_interval_ms)
        return points

    def record_drop(self, cells: int, per_cell: int) -> int:
        points = max(cells, 0) * per_cell
        self.score += points
        return points

    def copy(self) -> "SessionState":
        return replace(self)
