import pygame
from core import config


def frame_surface(buffer, size):
    """Wrap an RGBA8 frame buffer in a pygame surface without copying."""
    return pygame.image.frombuffer(buffer, size, "RGBA")


def present_frame(screen, buffer, size):
    """Stretch the canvas over the whole window."""
    surface = frame_surface(buffer, size)
    if surface.get_size() != screen.get_size():
        surface = pygame.transform.scale(surface, screen.get_size())
    screen.blit(surface, (0, 0))


def draw_band_grid(screen, bands, canvas_height):
    """Draw a line at every band boundary for debugging."""
    scale_y = screen.get_height() / canvas_height
    for start, _ in bands[1:]:
        screen_y = int(start * scale_y)
        pygame.draw.line(screen, config.COLOR_BAND_GRID, (0, screen_y), (screen.get_width(), screen_y))


def draw_performance_stats(screen, dt, frame_ms, variant_name, band_count, fps_font):
    """Draw performance statistics on screen."""
    fps = int(1.0 / dt) if dt > 0 else 0

    lines = [
        f"FPS: {fps}",
        f"Frame: {frame_ms:.1f} ms",
        f"Variant: {variant_name}",
        f"Bands: {band_count}",
    ]
    for i, text in enumerate(lines):
        text_surface = fps_font.render(text, True, config.COLOR_FPS)
        screen.blit(text_surface, (10, 10 + i * 20))
