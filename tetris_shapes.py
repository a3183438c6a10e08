"""Shape catalog, rotation lookup and the falling piece"""
import random
from dataclasses import dataclass
from typing import Dict, List, Tuple

Bitmap = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class Shape:
    name: str
    color: Tuple[int, int, int]
    rotations: Tuple[Bitmap, Bitmap, Bitmap, Bitmap]

    @property
    def blocks(self) -> Bitmap:
        return self.rotations[0]


# Rotation i+1 is the clockwise quarter turn of rotation i.
SHAPES: Dict[str, Shape] = {
    "I": Shape("I", (0, 245, 255), (
        ((1, 1, 1, 1),),
        ((1,), (1,), (1,), (1,)),
        ((1, 1, 1, 1),),
        ((1,), (1,), (1,), (1,)),
    )),
    "O": Shape("O", (255, 237, 78), (
        ((1, 1), (1, 1)),
        ((1, 1), (1, 1)),
        ((1, 1), (1, 1)),
        ((1, 1), (1, 1)),
    )),
    "T": Shape("T", (173, 0, 255), (
        ((0, 1, 0), (1, 1, 1)),
        ((1, 0), (1, 1), (1, 0)),
        ((1, 1, 1), (0, 1, 0)),
        ((0, 1), (1, 1), (0, 1)),
    )),
    "S": Shape("S", (74, 222, 128), (
        ((0, 1, 1), (1, 1, 0)),
        ((1, 0), (1, 1), (0, 1)),
        ((0, 1, 1), (1, 1, 0)),
        ((1, 0), (1, 1), (0, 1)),
    )),
    "Z": Shape("Z", (239, 68, 68), (
        ((1, 1, 0), (0, 1, 1)),
        ((0, 1), (1, 1), (1, 0)),
        ((1, 1, 0), (0, 1, 1)),
        ((0, 1), (1, 1), (1, 0)),
    )),
    "J": Shape("J", (59, 130, 246), (
        ((1, 0, 0), (1, 1, 1)),
        ((1, 1), (1, 0), (1, 0)),
        ((1, 1, 1), (0, 0, 1)),
        ((0, 1), (0, 1), (1, 1)),
    )),
    "L": Shape("L", (249, 115, 22), (
        ((0, 0, 1), (1, 1, 1)),
        ((1, 0), (1, 0), (1, 1)),
        ((1, 1, 1), (1, 0, 0)),
        ((1, 1), (0, 1), (0, 1)),
    )),
}

SPAWN_Y = -1


def rotate_tetromino(shape: Shape, rotation: int) -> Bitmap:
    return shape.rotations[rotation % 4]


def random_tetromino(rng=random) -> Shape:
    """Uniform, independent draw over the seven shapes (no bag)."""
    return rng.choice(list(SHAPES.values()))


@dataclass(frozen=True)
class ActivePiece:
    shape: Shape
    x: int
    y: int
    rotation: int = 0

    @property
    def bitmap(self) -> Bitmap:
        return rotate_tetromino(self.shape, self.rotation)

    def cells(self) -> List[Tuple[int, int]]:
        return [(self.x + c, self.y + r)
                for r, row in enumerate(self.bitmap)
                for c, v in enumerate(row) if v]


def spawn_piece(shape: Shape, board_width: int) -> ActivePiece:
    """Centre the shape horizontally one row above the board."""
    w = len(shape.blocks[0])
    return ActivePiece(shape, (board_width - w) // 2, SPAWN_Y, 0)
