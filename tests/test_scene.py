import itertools

import numpy as np
import pytest

from core.perlin import fade
from scene.lattice import RandomSigns
from scene.scene import Scene, SceneConfig


def render(scene):
    width, height = scene.size
    buffer = bytearray(width * height * 4)
    scene.draw(buffer)
    return bytes(buffer)


def ramp(t):
    return t - fade(t)


@pytest.mark.parametrize("variant", ["horizon", "static", "plasma"])
@pytest.mark.parametrize("band_count", [7, 16, 40])
def test_parallel_matches_sequential(variant, band_count, frozen_clock):
    def make(parallel, bands):
        scene_config = SceneConfig(width=64, height=48, variant=variant, band_count=bands,
                                   workers=8, parallel=parallel)
        scene = Scene(scene_config, signs=RandomSigns(seed=99), clock_source=frozen_clock)
        scene.clock = 12345
        return scene

    assert render(make(True, band_count)) == render(make(False, 1))


@pytest.mark.parametrize("variant", ["horizon", "static", "plasma"])
def test_frozen_clock_gives_identical_frames(variant, frozen_clock):
    scene = Scene(SceneConfig(width=32, height=24, variant=variant), signs=RandomSigns(seed=4),
                  clock_source=frozen_clock)
    scene.update()
    first = render(scene)
    scene.update()
    assert render(scene) == first


def test_update_tracks_elapsed_time():
    ticks = iter([5000, 5250, 5600])
    scene = Scene(SceneConfig(width=8, height=8), clock_source=lambda: next(ticks))
    assert scene.clock == 0
    scene.update()
    assert scene.clock == 250
    scene.update()
    assert scene.clock == 600


def test_update_never_goes_backwards():
    ticks = iter([0, 500, 400])
    scene = Scene(SceneConfig(width=8, height=8), clock_source=lambda: next(ticks))
    scene.update()
    scene.update()
    assert scene.clock == 500


@pytest.mark.parametrize("variant", ["horizon", "plasma"])
def test_animated_variants_change_with_clock(variant):
    scene = Scene(SceneConfig(width=64, height=32, variant=variant), signs=RandomSigns(seed=8))
    scene.clock = 0
    first = render(scene)
    scene.clock = 4321
    assert render(scene) != first


def test_static_variant_ignores_clock():
    scene = Scene(SceneConfig(width=32, height=32, variant="static"), signs=RandomSigns(seed=8))
    scene.clock = 0
    first = render(scene)
    scene.clock = 99999
    assert render(scene) == first


def test_draw_overwrites_every_pixel():
    scene = Scene(SceneConfig(width=16, height=12), signs=RandomSigns(seed=1))
    buffer = bytearray(b"\x07" * (16 * 12 * 4))
    scene.draw(buffer)
    pixels = np.frombuffer(buffer, dtype=np.uint8).reshape(-1, 4)
    assert np.all(pixels[:, 3] == 255)


def test_draw_into_numpy_array():
    scene = Scene(SceneConfig(width=16, height=12), signs=RandomSigns(seed=1))
    frame = np.zeros((12, 16, 4), dtype=np.uint8)
    scene.draw(frame)
    assert bytes(frame) == render(scene)


def test_short_buffer_is_rejected():
    scene = Scene(SceneConfig(width=8, height=8))
    with pytest.raises(ValueError):
        scene.draw(bytearray(8 * 8 * 4 - 1))


def test_read_only_buffer_is_rejected():
    scene = Scene(SceneConfig(width=8, height=8))
    with pytest.raises(ValueError):
        scene.draw(bytes(8 * 8 * 4))


def test_unknown_variant_and_policy_are_rejected():
    with pytest.raises(ValueError):
        Scene(SceneConfig(width=8, height=8, variant="marble"))
    with pytest.raises(ValueError):
        Scene(SceneConfig(width=8, height=8, policy="sepia"))


def test_policy_override(ones):
    scene = Scene(SceneConfig(width=8, height=8, variant="static", policy="intensity"), signs=ones)
    pixels = np.frombuffer(render(scene), dtype=np.uint8).reshape(8, 8, 4)
    # n = 0 at the origin maps to half intensity
    assert tuple(pixels[0, 0]) == (127, 0, 0, 255)
    assert np.all(pixels[..., 1:3] == 0)


def test_plasma_end_to_end_on_constant_lattice(ones):
    scene = Scene(SceneConfig(width=8, height=8, variant="plasma", band_count=3), signs=ones,
                  clock_source=lambda: 0)
    scene.update()
    pixels = np.frombuffer(render(scene), dtype=np.uint8).reshape(8, 8, 4)

    # noise = sum over axes of t - fade(t); the time axis contributes 0 at clock 0
    assert tuple(pixels[0, 0]) == (252, 0, 0, 255)
    for y, x in itertools.product(range(8), range(8)):
        n = sum(0.5 ** k * (ramp(x * 2 ** k / 256) + ramp(y * 2 ** k / 256)) for k in range(3))
        c = int((n * 0.5 + 0.5) * 255)
        k = (c % 64) * 4
        expected = [(0, 0, k), (k, 252 - k, 0), (252 - k, k, 0), (252 - k, 0, 0)][c // 64]
        assert tuple(pixels[y, x]) == expected + (255,), (x, y)


def test_horizon_end_to_end_on_constant_lattice(ones):
    scene = Scene(SceneConfig(width=8, height=8, variant="horizon"), signs=ones, clock_source=lambda: 0)
    pixels = np.frombuffer(render(scene), dtype=np.uint8).reshape(8, 8, 4)

    for y, x in itertools.product(range(8), range(8)):
        n = sum(0.5 ** k * ramp(x * 2 ** k / 300) for k in range(4))
        ny = 2.0 * y / 8 - 1.0
        expected = (255, 0, 0, 255) if n < ny else (0, 0, 0, 255)
        assert tuple(pixels[y, x]) == expected, (x, y)

    # The noise stays close to zero, so only the lower half is red.
    assert np.all(pixels[5:, :, 0] == 255)
    assert np.all(pixels[:5, :, 0] == 0)


def test_static_end_to_end_on_constant_lattice(ones):
    scene = Scene(SceneConfig(width=8, height=8, variant="static"), signs=ones, clock_source=lambda: 0)
    pixels = np.frombuffer(render(scene), dtype=np.uint8).reshape(8, 8, 4)

    for y, x in itertools.product(range(8), range(8)):
        n = sum(0.5 ** k * (ramp(x * 2 ** k / 64) + ramp(y * 2 ** k / 64)) for k in range(4))
        ny = 2.0 * y / 8 - 1.0
        expected = (255, 0, 0, 255) if n < ny else (0, 0, 0, 255)
        assert tuple(pixels[y, x]) == expected, (x, y)
