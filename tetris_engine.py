"""
Game engine: the authoritative state machine.

Owns the board, the falling piece, next/hold shapes and the score counters.
Commands arrive from the input layer or the drop timer, are validated against
the board, and every observable change is published as a frozen GameState on
the engine's StateChannel.

States: IDLE -> RUNNING <-> PAUSED, RUNNING/PAUSED -> OVER. start() works from
any state. A game ends either by top-out (a lock leaves cells in the top two
rows) or by block-out (the next piece cannot spawn); the two are checked
separately and reported with different OverReasons.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from tetris_audio import SoundManager
from tetris_board import Board
from tetris_config import CONFIG
from tetris_rng import ShapeRandomizer
from tetris_shapes import ActivePiece, Shape, spawn_piece
from tetris_state import (EngineStatus, GameState, GameStats, OverReason,
                          StateCallback, StateChannel)
from tetris_timer import DropTimer, SteppedDropTimer

log = logging.getLogger(__name__)


def level_for_lines(lines: int) -> int:
    return lines // CONFIG["LINES_PER_LEVEL"] + 1


def drop_interval_ms(level: int) -> int:
    return max(CONFIG["MIN_DROP_MS"],
               CONFIG["BASE_DROP_MS"] - (level - 1) * CONFIG["DROP_STEP_MS"])


def line_clear_score(cleared: int, level: int, combo: int) -> int:
    """Tiered base x level, plus a bonus for every chained clear after the first."""
    table = CONFIG["LINE_SCORES"]
    base = table[cleared] if 0 <= cleared < len(table) else 0
    bonus = (combo - 1) * CONFIG["COMBO_BONUS"] if combo > 1 else 0
    return base * level + bonus


class GameEngine:
    def __init__(self, board: Optional[Board] = None, audio=None,
                 timer: Optional[DropTimer] = None,
                 randomizer: Optional[ShapeRandomizer] = None,
                 channel: Optional[StateChannel] = None):
        self.board = board or Board()
        self.audio = audio if audio is not None else SoundManager()
        self.timer = timer or SteppedDropTimer()
        self.randomizer = randomizer or ShapeRandomizer(CONFIG["SEED"])
        self.channel = channel or StateChannel()
        self.timer.bind(self.tick)

        self.status = EngineStatus.IDLE
        self.over_reason: Optional[OverReason] = None
        self.drop_interval = drop_interval_ms(1)
        self._reset_counters(None)

    def _reset_counters(self, next_shape: Optional[Shape]):
        self.current: Optional[ActivePiece] = None
        self.next_shape: Optional[Shape] = next_shape
        self.hold_shape: Optional[Shape] = None
        self.can_hold = True
        self.score = 0
        self.lines = 0
        self.level = 1
        self.combo = 0

    # ---------- observers ----------
    def subscribe(self, callback: StateCallback):
        self.channel.subscribe(callback)

    set_state_change_callback = subscribe

    def current_state(self) -> GameState:
        return GameState(
            board=self.board.snapshot(),
            current_piece=self.current,
            next_piece=self.next_shape,
            hold_piece=self.hold_shape,
            can_hold=self.can_hold,
            score=self.score,
            lines=self.lines,
            level=self.level,
            combo=self.combo,
            game_over=self.status is EngineStatus.OVER,
            paused=self.status is EngineStatus.PAUSED,
            status=self.status,
            over_reason=self.over_reason,
        )

    def stats(self) -> GameStats:
        return GameStats(self.score, self.lines, self.level, self.combo)

    def _notify(self):
        self.channel.publish(self, self.current_state())

    @property
    def _playable(self) -> bool:
        return self.status is EngineStatus.RUNNING and self.current is not None

    # ---------- lifecycle ----------
    def start(self):
        self.board.reset()
        self._reset_counters(self.randomizer.next_shape())
        self.status = EngineStatus.RUNNING
        self.over_reason = None
        self.drop_interval = drop_interval_ms(self.level)
        log.info("game started")
        self.timer.schedule(self.drop_interval)
        self.audio.play_background_loop()
        self._spawn(self._take_next())
        self._notify()

    def stop(self):
        if self.status not in (EngineStatus.RUNNING, EngineStatus.PAUSED):
            return
        self._finish(OverReason.STOPPED)
        self._notify()

    def pause(self):
        if self.status is EngineStatus.RUNNING:
            self.status = EngineStatus.PAUSED
            self.timer.cancel()
            self.audio.stop_background_loop()
            log.debug("paused")
        elif self.status is EngineStatus.PAUSED:
            self.status = EngineStatus.RUNNING
            self.timer.schedule(self.drop_interval)
            self.audio.play_background_loop()
            log.debug("resumed")
        else:
            return
        self._notify()

    def toggle_mute(self):
        self.audio.toggle_mute()

    def is_muted(self) -> bool:
        return self.audio.is_muted()

    def _finish(self, reason: OverReason):
        self.status = EngineStatus.OVER
        self.over_reason = reason
        self.timer.cancel()
        self.audio.stop_background_loop()
        log.info("game over (%s) score=%d lines=%d", reason.value, self.score, self.lines)

    # ---------- spawning ----------
    def _take_next(self) -> Shape:
        shape = self.next_shape
        self.next_shape = self.randomizer.next_shape()
        return shape

    def _spawn(self, shape: Shape) -> bool:
        """Place shape at the spawn point; a blocked spawn ends the game."""
        self.current = spawn_piece(shape, self.board.width)
        if not self._fits(self.current):
            self._finish(OverReason.BLOCK_OUT)
            return False
        return True

    def _fits(self, piece: ActivePiece) -> bool:
        return self.board.is_valid_position(piece.shape, piece.x, piece.y, piece.rotation)

    def _try(self, piece: ActivePiece) -> bool:
        if not self._fits(piece):
            return False
        self.current = piece
        self._notify()
        return True

    # ---------- commands ----------
    def move_left(self):
        if self._playable:
            self._try(replace(self.current, x=self.current.x - 1))

    def move_right(self):
        if self._playable:
            self._try(replace(self.current, x=self.current.x + 1))

    def move_down(self):
        if not self._playable:
            return
        if not self._try(replace(self.current, y=self.current.y + 1)):
            self._lock()
            self._notify()

    def tick(self):
        self.move_down()

    def hard_drop(self):
        if not self._playable:
            return
        p = self.current
        dist = self.board.drop_distance(p.shape, p.x, p.y, p.rotation)
        self.current = replace(p, y=p.y + dist)
        self.score += dist * CONFIG["HARD_DROP_PER_CELL"]
        self._lock()
        self._notify()

    def rotate(self):
        if self._playable:
            self._try(replace(self.current, rotation=(self.current.rotation + 1) % 4))

    def hold(self):
        if not self._playable or not self.can_hold:
            return
        active = self.current.shape
        if self.hold_shape is None:
            self.hold_shape = active
            self._spawn(self._take_next())
        else:
            swapped, self.hold_shape = self.hold_shape, active
            self._spawn(swapped)
        self.can_hold = False
        self._notify()

    # ---------- locking ----------
    def _lock(self):
        p = self.current
        self.board.place_piece(p.shape, p.x, p.y, p.rotation)
        self.current = None
        self.audio.play_placement_sound()

        cleared = self.board.clear_lines()
        if cleared:
            self.combo += 1
            self.lines += cleared
            self.score += line_clear_score(cleared, self.level, self.combo)
            self.level = level_for_lines(self.lines)
            interval = drop_interval_ms(self.level)
            if interval != self.drop_interval:
                self.drop_interval = interval
                self.timer.set_interval(interval)
            self.audio.play_line_clear_sound()
        else:
            self.combo = 0

        if self.board.is_game_over():
            self._finish(OverReason.TOP_OUT)
            return
        if self._spawn(self._take_next()):
            self.can_hold = True
