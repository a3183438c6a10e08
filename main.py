import logging
import sys

import pygame

from tetris_audio import SoundManager
from tetris_config import CONFIG
from tetris_engine import GameEngine
from tetris_input import dispatch
from tetris_layout import compute_dims
from tetris_render import RenderAssets
from tetris_rng import ShapeRandomizer
from tetris_timer import DROP_EVENT, PygameDropTimer


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"],
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, DROP_EVENT])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 34)
    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()

    timer = PygameDropTimer()
    engine = GameEngine(audio=SoundManager(), timer=timer,
                        randomizer=ShapeRandomizer(CONFIG["SEED"]))

    # The renderer only ever sees the latest published snapshot
    latest = {"state": engine.current_state()}
    engine.subscribe(lambda state: latest.update(state=state))

    while True:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                engine.stop()
                pygame.quit(); sys.exit()
            if e.type == DROP_EVENT:
                timer.handle(e)
            elif e.type == pygame.KEYDOWN:
                dispatch(engine, e.key)

        render.draw(screen, latest["state"], engine.is_muted())
        pygame.display.flip()
        clock.tick(CONFIG["FPS"])


if __name__ == '__main__':
    main()
