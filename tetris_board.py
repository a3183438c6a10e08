"""Board: occupancy grid, collide, place, sweep"""
from typing import List, Optional, Tuple

from tetris_config import CONFIG
from tetris_shapes import Shape, rotate_tetromino

Grid = List[List[int]]


class Board:
    def __init__(self, width: Optional[int] = None, height: Optional[int] = None):
        self._width = CONFIG["BOARD_WIDTH"] if width is None else width
        self._height = CONFIG["BOARD_HEIGHT"] if height is None else height
        self.grid: Grid = self._empty()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _empty(self) -> Grid:
        return [[0] * self._width for _ in range(self._height)]

    def reset(self):
        self.grid = self._empty()

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self.grid)

    def is_valid_position(self, shape: Shape, x: int, y: int, rotation: int) -> bool:
        """False if any set cell leaves the sides or floor, or overlaps a filled cell.

        Cells above the board (y < 0) only get the horizontal check, so pieces
        may spawn partially out of view.
        """
        for r, row in enumerate(rotate_tetromino(shape, rotation)):
            for c, v in enumerate(row):
                if not v:
                    continue
                bx, by = x + c, y + r
                if bx < 0 or bx >= self._width or by >= self._height:
                    return False
                if by >= 0 and self.grid[by][bx]:
                    return False
        return True

    def place_piece(self, shape: Shape, x: int, y: int, rotation: int):
        """Mark the piece's cells as filled; cells above the board are dropped."""
        for r, row in enumerate(rotate_tetromino(shape, rotation)):
            for c, v in enumerate(row):
                if v:
                    bx, by = x + c, y + r
                    if 0 <= by < self._height and 0 <= bx < self._width:
                        self.grid[by][bx] = 1

    def clear_lines(self) -> int:
        """Remove full rows bottom-up and return how many were cleared."""
        cleared = 0
        y = self._height - 1
        while y >= 0:
            if all(self.grid[y]):
                del self.grid[y]
                self.grid.insert(0, [0] * self._width)
                cleared += 1
            else:
                y -= 1
        return cleared

    def is_game_over(self) -> bool:
        return any(self.grid[0]) or any(self.grid[1])

    def drop_distance(self, shape: Shape, x: int, y: int, rotation: int) -> int:
        """Rows the piece can fall before its next step would be invalid."""
        d = 0
        while self.is_valid_position(shape, x, y + d + 1, rotation):
            d += 1
        return d
