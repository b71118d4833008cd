import numpy as np


def fade(t):
    """Fade function as defined by Ken Perlin"""
    return t * t * t * (t * (t * 6 - 15) + 10)


def blend(a, b, t):
    """Weighted blend (1 - t) * a + t * b"""
    return (1.0 - t) * a + t * b


class NoiseField:
    """Perlin noise evaluated against a fixed gradient lattice.

    Every method accepts floats or numpy arrays of matching shape.
    """

    def __init__(self, lattice):
        self.lattice = lattice

    def corners(self, *cell):
        """Gradients at the cell corners obtained by adding each offset in OFFSETS."""
        return [self.lattice.lookup(*self.lattice.wrap(*(c + o for c, o in zip(cell, offset))))
                for offset in self.OFFSETS]

    def noise(self, *p):
        raise NotImplementedError

    def fractal(self, *p, octaves=4):
        """Sum of octaves at frequency 2^n and amplitude 0.5^n"""
        total = 0.0
        frequency = 1.0
        amplitude = 1.0
        for _ in range(octaves):
            total = total + self.noise(*(c * frequency for c in p)) * amplitude
            amplitude *= 0.5
            frequency *= 2.0
        return total


class Noise1D(NoiseField):
    OFFSETS = ((0,), (1,))

    def noise(self, x):
        x = np.asarray(x, dtype=np.float64)
        x0 = np.floor(x)
        x1 = x0 + 1.0
        g0, g1 = (g[..., 0] for g in self.corners(x0))

        fade_t = fade(x - x0)
        # Asymmetric blend: each gradient is scaled by its own distance.
        return (1.0 - fade_t) * g0 * (x - x0) + fade_t * g1 * (x - x1)


class Noise2D(NoiseField):
    OFFSETS = ((0, 0), (1, 0), (0, 1), (1, 1))

    def noise(self, x, y):
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        x0 = np.floor(x)
        y0 = np.floor(y)
        g0, g1, g2, g3 = self.corners(x0, y0)

        tx = x - x0
        ty = y - y0
        fade_tx = fade(tx)
        fade_ty = fade(ty)

        # Dot products of each corner gradient with the corner-to-point offset
        d0 = g0[..., 0] * tx + g0[..., 1] * ty
        d1 = g1[..., 0] * (tx - 1) + g1[..., 1] * ty
        d2 = g2[..., 0] * tx + g2[..., 1] * (ty - 1)
        d3 = g3[..., 0] * (tx - 1) + g3[..., 1] * (ty - 1)

        p0p1 = blend(d0, d1, fade_tx)
        p2p3 = blend(d2, d3, fade_tx)
        return blend(p0p1, p2p3, fade_ty)


class Noise3D(NoiseField):
    OFFSETS = ((0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0),
               (0, 0, 1), (1, 0, 1), (0, 1, 1), (1, 1, 1))

    def __init__(self, lattice, reuse_x_fade=False):
        super().__init__(lattice)
        self.reuse_x_fade = reuse_x_fade

    def noise(self, x, y, z):
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)
        x0 = np.floor(x)
        y0 = np.floor(y)
        z0 = np.floor(z)
        gradients = self.corners(x0, y0, z0)

        tx = x - x0
        ty = y - y0
        tz = z - z0
        fade_tx = fade(tx)
        fade_ty = fade(ty)
        fade_tz = fade(tz)

        dots = [g[..., 0] * (tx - ox) + g[..., 1] * (ty - oy) + g[..., 2] * (tz - oz)
                for g, (ox, oy, oz) in zip(gradients, self.OFFSETS)]

        # x: 4 pairs -> 2 per z slice
        x00 = blend(dots[0], dots[1], fade_tx)
        x10 = blend(dots[2], dots[3], fade_tx)
        x01 = blend(dots[4], dots[5], fade_tx)
        x11 = blend(dots[6], dots[7], fade_tx)

        # FIXME: the stylised look blends y with the x fade. Kept behind a flag
        # until it is settled whether that output is intended.
        y_weight = fade_tx if self.reuse_x_fade else fade_ty
        y0_slice = blend(x00, x10, y_weight)
        y1_slice = blend(x01, x11, y_weight)

        return blend(y0_slice, y1_slice, fade_tz)


FIELDS = {1: Noise1D, 2: Noise2D, 3: Noise3D}


def field_for(lattice, **kwargs):
    """Noise field matching the lattice dimensionality."""
    field_cls = FIELDS[lattice.dimensions]
    return field_cls(lattice, **kwargs)
