"""Key bindings: pygame key codes -> engine commands"""
from typing import Dict, Optional
import pygame

KEYMAP: Dict[int, str] = {
    pygame.K_LEFT: "move_left",
    pygame.K_RIGHT: "move_right",
    pygame.K_DOWN: "move_down",
    pygame.K_UP: "rotate",
    pygame.K_SPACE: "hard_drop",
    pygame.K_c: "hold",
    pygame.K_p: "pause",
    pygame.K_m: "toggle_mute",
    pygame.K_RETURN: "start",
    pygame.K_KP_ENTER: "start",
    pygame.K_r: "start",
    pygame.K_ESCAPE: "stop",
}


def command_for(key: int) -> Optional[str]:
    return KEYMAP.get(key)


def dispatch(engine, key: int) -> Optional[str]:
    """Invoke the bound command on the engine; returns its name, or None if unbound."""
    name = command_for(key)
    if name is not None:
        getattr(engine, name)()
    return name
