import dataclasses

import pygame
import pytest

from tests.helpers import make_engine
from tetris_input import KEYMAP, command_for, dispatch
from tetris_layout import compute_dims
from tetris_render import LOCKED, RenderAssets, banner_lines
from tetris_shapes import SHAPES
from tetris_state import OverReason


class _CommandLog:
    def __init__(self):
        self.called = []

    def __getattr__(self, name):
        return lambda: self.called.append(name)


def test_keymap_targets_engine_commands():
    engine, _ = make_engine()
    for name in set(KEYMAP.values()):
        assert callable(getattr(engine, name))


def test_dispatch_invokes_bound_command():
    log = _CommandLog()
    assert dispatch(log, pygame.K_SPACE) == "hard_drop"
    assert dispatch(log, pygame.K_c) == "hold"
    assert dispatch(log, pygame.K_F12) is None
    assert log.called == ["hard_drop", "hold"]
    assert command_for(pygame.K_UP) == "rotate"


def test_keys_drive_a_real_engine():
    engine, states = make_engine(["O"])
    dispatch(engine, pygame.K_RETURN)
    dispatch(engine, pygame.K_LEFT)
    dispatch(engine, pygame.K_SPACE)
    assert states[-1].board[19][3] == 1
    dispatch(engine, pygame.K_p)
    assert states[-1].paused


@pytest.fixture
def assets():
    pygame.init()
    font = pygame.font.SysFont(None, 22)
    yield RenderAssets(compute_dims(10, 20), font)
    pygame.quit()


def test_dims_fit_board_and_panel():
    d = compute_dims(10, 20)
    assert d.board_w == 10 * d.cell and d.board_h == 20 * d.cell
    assert d.panel_x == d.board_x + d.board_w + d.margin
    assert d.total_w == d.panel_x + d.panel_w + d.margin


def test_draw_renders_locked_cells_and_active_piece(assets):
    engine, states = make_engine(["O", "T"])
    engine.start()
    engine.hard_drop()
    screen = pygame.Surface((assets.dims.total_w, assets.dims.total_h))
    assets.draw(screen, states[-1])

    lx, ly = assets.cell_pos(4, 19)
    assert tuple(screen.get_at((lx + 5, ly + 5)))[:3] == LOCKED

    piece = states[-1].current_piece
    px, py = next((x, y) for x, y in piece.cells() if y >= 0)
    sx, sy = assets.cell_pos(px, py)
    assert tuple(screen.get_at((sx + 5, sy + 5)))[:3] == SHAPES["T"].color


def test_draw_handles_every_status(assets):
    engine, states = make_engine(["I"])
    screen = pygame.Surface((assets.dims.total_w, assets.dims.total_h))
    assets.draw(screen, None)
    assets.draw(screen, engine.current_state())
    engine.start()
    engine.hold()
    engine.pause()
    assets.draw(screen, states[-1], muted=True)
    engine.stop()
    assets.draw(screen, states[-1])


def test_panel_hud_draws_in_place(assets):
    engine, states = make_engine(["T"])
    engine.start()
    screen = pygame.Surface((assets.dims.total_w, assets.dims.total_h))
    assert assets.draw_panel_hud(screen, states[-1]) is None


def test_game_over_banner_reports_final_score_and_lines():
    engine, states = make_engine(["O"])
    engine.start()
    engine.board.grid[19] = [1] * 4 + [0, 0] + [1] * 4
    engine.hard_drop()
    engine.stop()
    s = states[-1]
    lines = banner_lines(s)
    assert lines[0] == "STOPPED"
    assert f"Final Score: {s.score}" in lines
    assert "Lines Cleared: 1" in lines

    top_out = dataclasses.replace(s, over_reason=OverReason.TOP_OUT)
    assert banner_lines(top_out)[0] == "GAME OVER"


def test_banner_lines_per_status():
    engine, states = make_engine(["O"])
    assert banner_lines(None) == ["Press Enter to start"]
    assert banner_lines(engine.current_state()) == ["Press Enter to start"]
    engine.start()
    assert banner_lines(states[-1]) == []
    engine.pause()
    assert banner_lines(states[-1]) == ["PAUSED  (P to resume)"]
