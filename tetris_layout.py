# tetris_layout.py
from dataclasses import dataclass
from tetris_config import CONFIG


@dataclass
class Dims:
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int
    preview_cell: int


def compute_dims(cols: int = None, rows: int = None) -> Dims:
    cols = cols or CONFIG["BOARD_WIDTH"]
    rows = rows or CONFIG["BOARD_HEIGHT"]
    cell = int(CONFIG["CELL_SIZE"])
    margin = 16
    panel_w = 220

    board_w = cols * cell
    board_h = rows * cell

    return Dims(
        cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=margin + board_w + margin + panel_w + margin,
        total_h=margin + board_h + margin,
        board_x=margin, board_y=margin,
        panel_x=margin + board_w + margin, panel_y=margin,
        preview_cell=max(14, int(cell * 0.75)),
    )
