"""
Rendering helpers: draw GameState snapshots with pygame.

The renderer is a pure reader of snapshots. It keeps:
- pre-rendered cell Surfaces per shape colour (plus one for locked cells),
- a static background (grid + panel frame) built once per Dims,
- cached HUD text surfaces that re-render only when their values change.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from tetris_layout import Dims
from tetris_shapes import SHAPES, Shape
from tetris_state import GameState, EngineStatus, OverReason

BG = (26, 26, 46)
BOARD_BG = (22, 33, 62)
GRID = (42, 42, 62)
PANEL = (21, 25, 53)
PANEL_EDGE = (50, 60, 100)
TEXT = (200, 210, 240)
DIM_TEXT = (165, 175, 215)
LOCKED = (136, 146, 176)  # placed cells carry no piece identity

CONTROLS = [
    "←/→ Move", "↓ Soft drop", "↑ Rotate", "Space Hard drop",
    "C Hold", "P Pause", "M Mute", "Enter Start • Esc Stop",
]


@dataclass
class HudCache:
    values: Dict[str, object] = field(default_factory=dict)
    surfaces: Dict[str, pygame.Surface] = field(default_factory=dict)


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: Optional[pygame.font.Font] = None):
        self.dims = dims
        self.font = font
        self.big_font = big_font or font
        self.hud = HudCache()
        self._make_static()
        self._make_cells()
        self.controls = [font.render(t, True, DIM_TEXT) for t in CONTROLS]

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        pygame.draw.rect(self.bg, BOARD_BG, (d.board_x, d.board_y, d.board_w, d.board_h))
        cols, rows = d.board_w // d.cell, d.board_h // d.cell
        for x in range(cols + 1):
            X = d.board_x + x * d.cell
            pygame.draw.line(self.bg, GRID, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(rows + 1):
            Y = d.board_y + y * d.cell
            pygame.draw.line(self.bg, GRID, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, PANEL, panel_rect)
        pygame.draw.rect(self.bg, PANEL_EDGE, panel_rect, 1)
        for y in self.preview_slots().values():
            frame = pygame.Rect(d.panel_x + 6, y - 6, d.preview_cell * 4 + 12, d.preview_cell * 2 + 12)
            pygame.draw.rect(self.bg, (15, 18, 40), frame)
            pygame.draw.rect(self.bg, (55, 65, 110), frame, 1)

    def preview_slots(self) -> Dict[str, int]:
        d = self.dims
        return {"next": d.panel_y + 170, "hold": d.panel_y + 170 + d.preview_cell * 2 + 50}

    # ---------- Small cell sprites ----------
    def _make_cells(self):
        c = self.dims.cell
        self.cell_surf: Dict[str, pygame.Surface] = {}
        for name, shape in SHAPES.items():
            s = pygame.Surface((c - 2, c - 2))
            s.fill(shape.color)
            self.cell_surf[name] = s
        self.locked_surf = pygame.Surface((c - 2, c - 2))
        self.locked_surf.fill(LOCKED)

    def cell_pos(self, bx: int, by: int) -> Tuple[int, int]:
        d = self.dims
        return d.board_x + bx * d.cell + 1, d.board_y + by * d.cell + 1

    # ---------- Frame ----------
    def draw(self, screen: pygame.Surface, state: Optional[GameState], muted: bool = False):
        screen.blit(self.bg, (0, 0))
        if state is not None:
            self.draw_board(screen, state)
            self.draw_panel_hud(screen, state, muted)
        lines = banner_lines(state)
        if lines:
            self._banner(screen, lines[0], lines[1:])

    def draw_board(self, screen: pygame.Surface, state: GameState):
        for y, row in enumerate(state.board):
            for x, v in enumerate(row):
                if v:
                    screen.blit(self.locked_surf, self.cell_pos(x, y))
        piece = state.current_piece
        if piece is not None:
            surf = self.cell_surf[piece.shape.name]
            for x, y in piece.cells():
                if y >= 0:
                    screen.blit(surf, self.cell_pos(x, y))

    # ---------- HUD / Panel ----------
    def _text(self, key: str, value, fmt: str, color=TEXT) -> pygame.Surface:
        if self.hud.values.get(key) != value or key not in self.hud.surfaces:
            self.hud.values[key] = value
            self.hud.surfaces[key] = self.font.render(fmt.format(value), True, color)
        return self.hud.surfaces[key]

    def _preview(self, screen: pygame.Surface, shape: Optional[Shape], top: int, dimmed: bool = False):
        if shape is None:
            return
        d = self.dims
        pc = d.preview_cell
        blocks = shape.blocks
        offx = (4 - len(blocks[0])) * pc // 2
        offy = (2 - len(blocks)) * pc // 2
        color = tuple(v // 2 for v in shape.color) if dimmed else shape.color
        block = pygame.Surface((pc - 2, pc - 2))
        block.fill(color)
        for y, row in enumerate(blocks):
            for x, v in enumerate(row):
                if v:
                    screen.blit(block, (d.panel_x + 12 + offx + x * pc + 1, top + offy + y * pc + 1))

    def draw_panel_hud(self, screen: pygame.Surface, state: GameState, muted: bool = False):
        d = self.dims
        x = d.panel_x + 12
        screen.blit(self._text("title", "Tetris", "{}", (197, 202, 233)), (x, d.panel_y + 12))
        screen.blit(self._text("score", state.score, "Score: {}"), (x, d.panel_y + 44))
        screen.blit(self._text("level", state.level, "Level: {}"), (x, d.panel_y + 68))
        screen.blit(self._text("lines", state.lines, "Lines: {}"), (x, d.panel_y + 92))
        screen.blit(self._text("combo", state.combo, "Combo: {}"), (x, d.panel_y + 116))
        slots = self.preview_slots()
        screen.blit(self._text("next_label", "Next:", "{}"), (x, slots["next"] - 26))
        self._preview(screen, state.next_piece, slots["next"])
        screen.blit(self._text("hold_label", "Hold:", "{}"), (x, slots["hold"] - 26))
        self._preview(screen, state.hold_piece, slots["hold"], dimmed=not state.can_hold)
        if muted:
            screen.blit(self._text("muted", "MUTED", "{}", (255, 180, 180)), (x + 120, d.panel_y + 12))
        y = slots["hold"] + d.preview_cell * 2 + 30
        for surf in self.controls:
            screen.blit(surf, (x, y))
            y += 20

    def _banner(self, screen: pygame.Surface, text: str, details: List[str] = ()):
        d = self.dims
        cx = d.board_x + d.board_w // 2
        msg = self.big_font.render(text, True, (255, 220, 220))
        subs = [self.font.render(t, True, TEXT) for t in details]
        height = msg.get_height() + sum(s.get_height() + 6 for s in subs)
        top = d.board_y + (d.board_h - height) // 2
        shade = pygame.Surface((d.board_w, height + 24), pygame.SRCALPHA)
        shade.fill((10, 12, 30, 200))
        screen.blit(shade, (d.board_x, top - 12))
        screen.blit(msg, msg.get_rect(midtop=(cx, top)))
        y = top + msg.get_height() + 6
        for s in subs:
            screen.blit(s, s.get_rect(midtop=(cx, y)))
            y += s.get_height() + 6


def banner_lines(state: Optional[GameState]) -> List[str]:
    """Overlay text for the board: title first, then detail lines."""
    if state is None or state.status is EngineStatus.IDLE:
        return ["Press Enter to start"]
    if state.paused:
        return ["PAUSED  (P to resume)"]
    if state.game_over:
        title = "GAME OVER" if state.over_reason is not OverReason.STOPPED else "STOPPED"
        return [title, f"Final Score: {state.score}", f"Lines Cleared: {state.lines}",
                "Enter to restart"]
    return []
