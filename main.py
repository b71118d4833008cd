import logging
import sys
import time

import pygame
import yappi

from core import config
from scene.scene import BYTES_PER_PIXEL, Scene, SceneConfig
from utils.rendering import draw_band_grid, draw_performance_stats, present_frame
from utils.setup_logging import setup_logging

logger = logging.getLogger(__name__)

VARIANT_KEYS = {
    pygame.K_1: "horizon",
    pygame.K_2: "static",
    pygame.K_3: "plasma",
}


def create_scene(variant):
    scene = Scene(SceneConfig(variant=variant))
    width, height = scene.size
    buffer = bytearray(width * height * BYTES_PER_PIXEL)
    return scene, buffer


def main():
    setup_logging()
    pygame.init()

    screen = pygame.display.set_mode((config.WIDTH, config.HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(config.WINDOW_TITLE)
    clock = pygame.time.Clock()
    fps_font = pygame.font.SysFont("Consolas", 18)

    scene, buffer = create_scene(config.VARIANT)
    show_bands = False

    if config.DEBUG_MODE:
        yappi.set_clock_type("cpu")
        yappi.start()

    running = True
    frame_ms = 0.0
    last_time = time.time()
    while running:
        now = time.time()
        dt = now - last_time
        last_time = now

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                # Only the presentation is stretched, the canvas keeps its size.
                screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in VARIANT_KEYS:
                    scene, buffer = create_scene(VARIANT_KEYS[event.key])
                elif event.key == pygame.K_b:
                    show_bands = not show_bands

        render_start = time.perf_counter()
        scene.update()
        scene.draw(buffer)
        frame_ms = (time.perf_counter() - render_start) * 1000

        try:
            present_frame(screen, buffer, scene.size)
        except pygame.error as e:
            logger.error(f"Presenting the frame failed: {e}")
            running = False
            continue

        if show_bands:
            draw_band_grid(screen, scene.bands, scene.size[1])
        if config.PERFORMANCE_MONITOR:
            draw_performance_stats(screen, dt, frame_ms, scene.variant.name, len(scene.bands), fps_font)

        pygame.display.flip()
        clock.tick(config.FPS_CAP)

    if config.DEBUG_MODE:
        yappi.stop()
        yappi.get_func_stats().print_all()
    pygame.quit()


if __name__ == '__main__':
    main()
    sys.exit()
