"""Color policies mapping noise values to RGBA8 pixels."""
import numpy as np

COLOR_RED = (255, 0, 0, 255)
COLOR_BLACK = (0, 0, 0, 255)

BAND_WIDTH = 64  # Byte range covered by each color ramp


def to_byte(n):
    """Map a noise value from [-1, 1] to [0, 255], truncating and saturating."""
    return np.clip((np.asarray(n) * 0.5 + 0.5) * 255.0, 0.0, 255.0).astype(np.uint8)


def threshold_colors(n, ny):
    """Red where the noise lies below the normalised vertical coordinate, black elsewhere."""
    below = np.asarray(n) < np.asarray(ny)
    return np.where(below[..., np.newaxis], np.array(COLOR_RED, dtype=np.uint8),
                    np.array(COLOR_BLACK, dtype=np.uint8))


def ramp_colors(c):
    """Four linear ramps over the byte value c.

    With k = (c mod 64) * 4:
      [0, 64)    blue ramp        (0, 0, k)
      [64, 128)  green to red     (k, 252 - k, 0)
      [128, 192) red to green     (252 - k, k, 0)
      [192, 256) fading red       (252 - k, 0, 0)
    """
    c = np.asarray(c, dtype=np.int32)
    band = c // BAND_WIDTH
    k = (c % BAND_WIDTH) * 4
    rk = 252 - k
    zero = np.zeros_like(k)

    r = np.choose(band, [zero, k, rk, rk])
    g = np.choose(band, [zero, rk, k, zero])
    b = np.choose(band, [k, zero, zero, zero])
    a = np.full_like(k, 255)
    return np.stack([r, g, b, a], axis=-1).astype(np.uint8)


def intensity_colors(n, ny=None):
    """Red channel proportional to the noise value."""
    r = to_byte(n)
    rgba = np.zeros(r.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = r
    rgba[..., 3] = 255
    return rgba


def band_colors(n, ny=None):
    return ramp_colors(to_byte(n))


POLICIES = {
    "threshold": threshold_colors,
    "bands": band_colors,
    "intensity": intensity_colors,
}
