from __future__ import annotations

from typing import Iterable, List

from tetris_board import Board
from tetris_engine import GameEngine
from tetris_shapes import SHAPES, Shape
from tetris_state import GameState
from tetris_timer import SteppedDropTimer


class RecordingAudio:
    """Audio double that records every call the engine makes."""

    def __init__(self):
        self.calls: List[str] = []
        self.muted = False

    def play_placement_sound(self):
        self.calls.append("placement")

    def play_line_clear_sound(self):
        self.calls.append("line_clear")

    def play_background_loop(self):
        self.calls.append("background_on")

    def stop_background_loop(self):
        self.calls.append("background_off")

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        self.calls.append("mute")
        return self.muted

    def is_muted(self) -> bool:
        return self.muted


class ScriptedShapes:
    """Randomizer double yielding shapes by name, repeating the last one."""

    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        self.drawn = 0

    def next_shape(self) -> Shape:
        i = min(self.drawn, len(self.names) - 1)
        self.drawn += 1
        return SHAPES[self.names[i]]


def make_engine(names: Iterable[str] = ("O",)):
    """Engine wired to headless collaborators; returns (engine, published states)."""
    states: List[GameState] = []
    engine = GameEngine(board=Board(10, 20), audio=RecordingAudio(),
                        timer=SteppedDropTimer(), randomizer=ScriptedShapes(names))
    engine.subscribe(states.append)
    return engine, states
