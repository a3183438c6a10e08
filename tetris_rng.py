"""Piece randomizer module"""
import random
from typing import Optional

from tetris_shapes import Shape, random_tetromino


class ShapeRandomizer:
    """Independent uniform draws; a seed makes the sequence reproducible."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_shape(self) -> Shape:
        return random_tetromino(self._rng)

    def reseed(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng.seed(seed)
