from dataclasses import dataclass


@dataclass(frozen=True)
class Variant:
    name: str
    dimensions: int
    divisor: float  # Base octave divisor in pixels per lattice cell
    octaves: int
    policy: str
    animated: bool = True


VARIANTS = {
    # 1D horizon line scrolling horizontally
    "horizon": Variant("horizon", dimensions=1, divisor=300.0, octaves=4, policy="threshold"),
    # 2D field thresholded against the vertical coordinate
    "static": Variant("static", dimensions=2, divisor=64.0, octaves=4, policy="threshold", animated=False),
    # 3D field animated along the time axis
    "plasma": Variant("plasma", dimensions=3, divisor=256.0, octaves=3, policy="bands"),
}


def get_variant(name):
    try:
        return VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown variant '{name}', expected one of {sorted(VARIANTS)}") from None
