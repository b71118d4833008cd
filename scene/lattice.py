"""Gradient lattices for 1D, 2D and 3D Perlin noise.

A lattice is a flat array of gradient vectors whose components are each -1 or
+1, addressed by integer lattice coordinates through a per-variant index
formula. Lattices are built once and never mutated, so any number of render
threads may read them at the same time.
"""
import logging

import numpy as np

from core import config

logger = logging.getLogger(__name__)


class RandomSigns:
    """Chooses gradient components uniformly from {-1, +1}."""

    CHOICES = np.array([-1.0, 1.0])

    def __init__(self, seed=None):
        # seed=None pulls fresh entropy from the OS
        self.random_gen = np.random.RandomState(seed)

    def choose(self, shape):
        return self.random_gen.choice(self.CHOICES, size=shape)


class FixedSigns:
    """Deterministic sign source returning the same sign for every component."""

    def __init__(self, value=1.0):
        if value not in (-1.0, 1.0):
            raise ValueError(f"Sign must be -1 or +1, got {value}")
        self.value = float(value)

    def choose(self, shape):
        return np.full(shape, self.value)


class GradientLattice:
    dimensions = 0

    def __init__(self, extents, signs=None):
        extents = tuple(int(e) for e in extents)
        if len(extents) != self.dimensions:
            raise ValueError(f"{self.dimensions}D lattice needs {self.dimensions} extents, got {extents}")
        if any(e <= 0 for e in extents):
            raise ValueError(f"Lattice extents must be positive, got {extents}")
        self.extents = extents
        signs = signs or RandomSigns()
        self.gradients = signs.choose((self.size, self.dimensions))

    @property
    def size(self):
        """Number of gradient vectors stored."""
        raise NotImplementedError

    def index(self, *coords):
        raise NotImplementedError

    def wrap(self, *coords):
        """Map integer lattice coordinates into [0, extent) on every axis."""
        return tuple(np.mod(c, e).astype(np.intp) for c, e in zip(coords, self.extents))

    def lookup(self, *coords):
        """Gradient vectors at already-wrapped integer coordinates, shape (..., D)."""
        return self.gradients[self.index(*coords)]


class Lattice1D(GradientLattice):
    dimensions = 1

    @property
    def size(self):
        return self.extents[0]

    def index(self, x):
        return np.asarray(x, dtype=np.intp)


class Lattice2D(GradientLattice):
    dimensions = 2

    @property
    def size(self):
        width, height = self.extents
        return width * height + 1

    def index(self, x, y):
        width = self.extents[0]
        return np.asarray(y, dtype=np.intp) * width + np.asarray(x, dtype=np.intp)


class Lattice3D(GradientLattice):
    """Row stride is the canvas width; each x cell holds `depth` consecutive z slots."""

    dimensions = 3

    def __init__(self, extents, signs=None, row_stride=None):
        cells_x, _, depth = (int(e) for e in extents)
        self.row_stride = row_stride or cells_x * depth
        if self.row_stride < cells_x * depth:
            raise ValueError(f"Row stride {self.row_stride} too small for {cells_x} cells of depth {depth}")
        super().__init__(extents, signs)

    @property
    def size(self):
        _, height, _ = self.extents
        return self.row_stride * height

    def index(self, x, y, z):
        depth = self.extents[2]
        return (np.asarray(y, dtype=np.intp) * self.row_stride
                + np.asarray(x, dtype=np.intp) * depth
                + np.mod(np.asarray(z, dtype=np.intp), depth))


LATTICES = {1: Lattice1D, 2: Lattice2D, 3: Lattice3D}


def build(dimensions, extents, signs=None, **kwargs):
    """Build a lattice of the given dimensionality with random ±1 gradients."""
    try:
        lattice_cls = LATTICES[dimensions]
    except KeyError:
        raise ValueError(f"Lattice dimensionality must be 1, 2 or 3, got {dimensions}") from None
    lattice = lattice_cls(extents, signs, **kwargs)
    logger.info(f"Built {dimensions}D gradient lattice {lattice.extents} with {lattice.size} gradients")
    return lattice


def lattice_for_canvas(dimensions, width, height, signs=None):
    """Build the lattice a canvas of the given size needs for each variant."""
    if dimensions == 1:
        return build(1, (width + 1,), signs)
    if dimensions == 2:
        return build(2, (width, height), signs)
    depth = config.TIME_MODULUS
    return build(3, (max(1, width // depth), height, depth), signs, row_stride=max(width, depth))
