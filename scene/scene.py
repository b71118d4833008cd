"""Animated noise scene: clock, per-band sampling and frame buffer output."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from core import config
from core.perlin import field_for
from scene.bands import render_bands, split_rows
from scene.lattice import lattice_for_canvas
from scene.variants import get_variant
from utils.palette import POLICIES

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = 4


def now() -> int:
    """Monotonic clock in milliseconds."""
    return int(time.monotonic() * 1000)


@dataclass
class SceneConfig:
    width: int = config.WIDTH
    height: int = config.HEIGHT
    variant: str = config.VARIANT
    policy: Optional[str] = None  # None uses the variant's default policy
    band_count: int = config.BAND_COUNT
    workers: int = config.WORKER_COUNT
    parallel: bool = config.PARALLEL_RENDER
    time_divisor: float = config.TIME_DIVISOR
    scroll_divisor: float = config.SCROLL_DIVISOR
    reuse_x_fade: bool = False


class Scene:
    def __init__(self, scene_config: SceneConfig | None = None, signs=None,
                 clock_source: Callable[[], int] = now) -> None:
        self.config = scene_config or SceneConfig()
        c = self.config
        if c.width <= 0 or c.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {c.width}x{c.height}")

        self.size: Tuple[int, int] = (c.width, c.height)
        self.variant = get_variant(c.variant)
        policy_name = c.policy or self.variant.policy
        if policy_name not in POLICIES:
            raise ValueError(f"Unknown color policy '{policy_name}', expected one of {sorted(POLICIES)}")
        self.policy = POLICIES[policy_name]
        self.bands = split_rows(c.height, c.band_count)

        self.lattice = lattice_for_canvas(self.variant.dimensions, c.width, c.height, signs)
        extra = {"reuse_x_fade": c.reuse_x_fade} if self.variant.dimensions == 3 else {}
        self.field = field_for(self.lattice, **extra)

        self.clock_source = clock_source
        self.start = clock_source()
        self.clock = 0
        logger.info(f"Scene {c.width}x{c.height} variant={self.variant.name} policy={policy_name} "
                    f"bands={len(self.bands)}")

    def update(self) -> None:
        self.clock = max(self.clock, self.clock_source() - self.start)

    def frame_view(self, buffer) -> np.ndarray:
        """Writable (height, width, 4) uint8 view over the caller's buffer."""
        width, height = self.size
        needed = width * height * BYTES_PER_PIXEL
        if isinstance(buffer, np.ndarray):
            if buffer.dtype != np.uint8 or not buffer.flags.c_contiguous:
                raise ValueError(f"Frame buffer must be a contiguous uint8 array, got {buffer.dtype}")
            flat = buffer.reshape(-1)
        else:
            flat = np.frombuffer(buffer, dtype=np.uint8)
        if flat.size < needed:
            raise ValueError(f"Frame buffer holds {flat.size} bytes, {width}x{height} RGBA needs {needed}")
        if not flat.flags.writeable:
            raise ValueError("Frame buffer is read-only")
        return flat[:needed].reshape(height, width, BYTES_PER_PIXEL)

    def sample(self, start: int, stop: int) -> Tuple[np.ndarray, np.ndarray]:
        """Fractal noise for rows [start, stop) and their normalised y in [-1, 1)."""
        width, height = self.size
        v = self.variant
        clock = self.clock if v.animated else 0
        ys, xs = np.mgrid[start:stop, 0:width].astype(np.float64)

        if v.dimensions == 1:
            scroll = xs[:1] + clock / self.config.scroll_divisor
            row = self.field.fractal(scroll / v.divisor, octaves=v.octaves)
            n = np.broadcast_to(row, xs.shape)
        elif v.dimensions == 2:
            n = self.field.fractal(xs / v.divisor, ys / v.divisor, octaves=v.octaves)
        else:
            zs = np.full_like(xs, clock / self.config.time_divisor)
            n = self.field.fractal(xs / v.divisor, ys / v.divisor, zs, octaves=v.octaves)

        ny = 2.0 * (ys / height) - 1.0
        return n, ny

    def render_band(self, frame: np.ndarray, start: int, stop: int) -> None:
        n, ny = self.sample(start, stop)
        frame[start:stop] = self.policy(n, ny)

    def draw(self, buffer) -> None:
        frame = self.frame_view(buffer)
        render_bands(lambda start, stop: self.render_band(frame, start, stop), self.bands,
                     workers=self.config.workers, parallel=self.config.parallel)
