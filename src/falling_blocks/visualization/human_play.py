from __future__ import annotations

import argparse
from pathlib import Path

import pygame

from falling_blocks.game import FallingBlockGame, GameConfig, Sound
from falling_blocks.utils.logging import setup_logger
from .audio import PygameAudio
from .keyboard import PygameKeyboard
from .renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--cell-size", type=int, default=16)
    p.add_argument("--assets", type=Path, default=Path("assets"))
    p.add_argument("--music-volume", type=float, default=0.0)
    p.add_argument("--log-level", type=str, default="info")
    return p


def run(args: argparse.Namespace) -> None:
    logger = setup_logger(name="falling_blocks", level=args.log_level)
    pygame.init()
    try:
        clock = pygame.time.Clock()
        audio = PygameAudio(args.assets, music_volume=args.music_volume)
        if pygame.mixer.get_init():
            audio.load()
        else:
            logger.warning("audio device unavailable, running without sound")
        game = FallingBlockGame(GameConfig(random_seed=args.seed), audio=audio)
        renderer = Renderer(game.grid.width, game.grid.height, cell_size=args.cell_size)
        keyboard = PygameKeyboard()

        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Falling Blocks")
        audio.play(Sound.MUSIC)

        elapsed = 0.0
        running = True
        while running:
            dt = clock.tick(args.fps) / 1000.0
            elapsed += dt

            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
            keyboard.begin_frame(events)

            game.update(dt, keyboard)

            renderer.set_background_time(elapsed / 10.0)
            renderer.draw(screen, game)
            pygame.display.flip()
        logger.info("session ended: %d pieces, %d lines", game.pieces_placed, game.lines_cleared_total)
    finally:
        pygame.quit()


def main() -> None:
    run(build_parser().parse_args())


if __name__ == "__main__":  # pragma: no cover
    main()
