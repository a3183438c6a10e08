"""Published game state and the channel it is published on"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, NamedTuple, Optional, Tuple

from blinker import Signal

from tetris_shapes import ActivePiece, Shape


class EngineStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class OverReason(Enum):
    TOP_OUT = "top_out"      # top two rows occupied after a lock
    BLOCK_OUT = "block_out"  # new piece could not spawn
    STOPPED = "stopped"


@dataclass(frozen=True)
class GameState:
    board: Tuple[Tuple[int, ...], ...]
    current_piece: Optional[ActivePiece]
    next_piece: Optional[Shape]
    hold_piece: Optional[Shape]
    can_hold: bool
    score: int
    lines: int
    level: int
    combo: int
    game_over: bool
    paused: bool
    status: EngineStatus = EngineStatus.IDLE
    over_reason: Optional[OverReason] = None


class GameStats(NamedTuple):
    score: int
    lines: int
    level: int
    combo: int


StateCallback = Callable[[GameState], None]


class StateChannel:
    """Single-subscriber channel for state snapshots, built on a blinker Signal.

    Subscribing replaces the previous consumer. Delivery is synchronous, in
    publish order.
    """

    def __init__(self):
        self._signal = Signal("state-changed")
        self._receiver = None

    @property
    def has_subscriber(self) -> bool:
        return self._receiver is not None

    def subscribe(self, callback: StateCallback):
        self.unsubscribe()

        def _deliver(sender, state):
            callback(state)

        self._receiver = _deliver
        self._signal.connect(_deliver, weak=False)

    def unsubscribe(self):
        if self._receiver is not None:
            self._signal.disconnect(self._receiver)
            self._receiver = None

    def publish(self, sender, state: GameState):
        self._signal.send(sender, state=state)
