
import argparse
import logging
import sys

import pygame
from fallblock_config import CONFIG
from fallblock_input import EVENT_KEYS, button_at
from fallblock_render import BoardRenderer
from fallblock_session import GameSession

logger = logging.getLogger("fallblock")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                        datefmt="%H:%M:%S")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Falling-block puzzle game")
    p.add_argument("--seed", type=int, default=CONFIG["SEED"], help="piece randomizer seed")
    p.add_argument("--width", type=int, default=CONFIG["FIELD_WIDTH"], help="field width in cells")
    p.add_argument("--height", type=int, default=CONFIG["FIELD_HEIGHT"], help="field height in cells")
    p.add_argument("--fps", type=int, default=CONFIG["FRAME_RATE"], help="frames per second")
    p.add_argument("--bgm", default=CONFIG["BGM_PATH"], help="background music file, looped")
    p.add_argument("--debug", action="store_true", help="show grid lines and piece coordinates")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p.parse_args(argv)


def apply_args(args):
    CONFIG["SEED"] = args.seed
    CONFIG["FIELD_WIDTH"] = args.width
    CONFIG["FIELD_HEIGHT"] = args.height
    CONFIG["FRAME_RATE"] = args.fps
    CONFIG["BGM_PATH"] = args.bgm
    if args.debug:
        CONFIG["SHOW_GRID"] = CONFIG["SHOW_DEBUG"] = True


def recreate_window(size, flags=pygame.RESIZABLE):
    try:
        return pygame.display.set_mode(size, flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode(size, flags)


def start_bgm(path):
    if not path:
        return False
    try:
        pygame.mixer.init()
        pygame.mixer.music.load(path)
        pygame.mixer.music.set_volume(CONFIG["BGM_VOLUME"])
        pygame.mixer.music.play(-1)
    except (pygame.error, OSError) as e:
        logger.warning("background music disabled (%s): %s", path, e)
        return False
    logger.info("playing %s", path)
    return True


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)
    apply_args(args)

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN, pygame.VIDEORESIZE])
    screen = recreate_window(CONFIG["WINDOW_SIZE"])
    pygame.display.set_caption("fallblock")

    try:
        session = GameSession(CONFIG["FIELD_WIDTH"], CONFIG["FIELD_HEIGHT"])
    except ValueError as e:
        logger.error("%s", e)
        pygame.quit()
        return 2
    logger.info("seed %d", session.rng.seed)
    renderer = BoardRenderer(screen)
    clock = pygame.time.Clock()
    start_bgm(CONFIG["BGM_PATH"])

    while True:
        clock.tick(CONFIG["FRAME_RATE"])

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit()
                return 0
            if e.type == pygame.VIDEORESIZE:
                renderer.screen = pygame.display.get_surface()
            if e.type == pygame.KEYDOWN and e.key in EVENT_KEYS:
                session.press(EVENT_KEYS[e.key])
            if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1 and renderer.layout:
                cmd = button_at(renderer.layout.buttons, e.pos)
                if cmd:
                    session.press(cmd)

        session.step(pygame.key.get_pressed(), renderer)
        if session.game_over:
            renderer.draw_game_over()
        pygame.display.flip()


if __name__ == '__main__':
    sys.exit(main())
