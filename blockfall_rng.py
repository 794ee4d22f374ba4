"""Piece randomizers: seedable uniform draw + scripted sequence"""
import random
from itertools import cycle
from typing import Iterable, Optional

from blockfall_piece import PIECE_KEYS


class UniformRandom:
    """Draws every key with equal probability from the seven-piece alphabet.

    The same seed always yields the same sequence, which is what tests and
    replays rely on. ``seed=None`` seeds from system entropy.
    """

    PIECES = PIECE_KEYS

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_piece(self) -> str:
        return self._rng.choice(self.PIECES)


class SequenceRandom:
    """Replays a fixed list of keys, looping when exhausted."""

    def __init__(self, keys: Iterable[str]):
        keys = list(keys)
        if not keys:
            raise ValueError("SequenceRandom needs at least one key")
        self._it = cycle(keys)

    def next_piece(self) -> str:
        return next(self._it)
