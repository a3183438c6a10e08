"""Drop timers: a cancellable repeating tick, decoupled from frame rate"""
from typing import Callable, Optional

import pygame

DROP_EVENT = pygame.USEREVENT + 1


class DropTimer:
    """Base timer. schedule() starts fresh, set_interval() keeps the phase."""

    def __init__(self, callback: Optional[Callable[[], None]] = None):
        self._callback = callback
        self._interval_ms: Optional[int] = None

    def bind(self, callback: Callable[[], None]):
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._interval_ms is not None

    @property
    def interval_ms(self) -> Optional[int]:
        return self._interval_ms

    def schedule(self, interval_ms: int):
        self._interval_ms = _check_interval(interval_ms)

    def set_interval(self, interval_ms: int):
        self._interval_ms = _check_interval(interval_ms)

    def cancel(self):
        self._interval_ms = None

    def fire(self):
        if self.active and self._callback is not None:
            self._callback()


def _check_interval(interval_ms) -> int:
    interval_ms = int(interval_ms)
    if interval_ms <= 0:
        raise ValueError(f"drop interval must be positive, got {interval_ms}")
    return interval_ms


class PygameDropTimer(DropTimer):
    """Posts DROP_EVENT through pygame.time.set_timer; the main loop hands
    events back through handle()."""

    def schedule(self, interval_ms: int):
        super().schedule(interval_ms)
        pygame.event.clear(DROP_EVENT)
        pygame.time.set_timer(DROP_EVENT, self._interval_ms)

    def set_interval(self, interval_ms: int):
        # set_timer restarts the period; good enough between drops
        super().set_interval(interval_ms)
        pygame.time.set_timer(DROP_EVENT, self._interval_ms)

    def cancel(self):
        super().cancel()
        pygame.time.set_timer(DROP_EVENT, 0)
        pygame.event.clear(DROP_EVENT)

    def handle(self, event: pygame.event.Event) -> bool:
        if event.type != DROP_EVENT:
            return False
        self.fire()
        return True


class SteppedDropTimer(DropTimer):
    """Headless timer driven by explicit elapsed-time steps.

    Once the accumulated time reaches the interval the callback fires and the
    accumulator restarts from zero.
    """

    def __init__(self, callback: Optional[Callable[[], None]] = None):
        super().__init__(callback)
        self.elapsed_ms = 0.0

    def schedule(self, interval_ms: int):
        super().schedule(interval_ms)
        self.elapsed_ms = 0.0

    def cancel(self):
        super().cancel()
        self.elapsed_ms = 0.0

    def advance(self, dt_ms: float) -> bool:
        if not self.active:
            return False
        self.elapsed_ms += dt_ms
        if self.elapsed_ms >= self._interval_ms:
            self.elapsed_ms = 0.0
            self.fire()
            return True
        return False
