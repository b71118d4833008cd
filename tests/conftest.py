import pytest

from scene.lattice import FixedSigns


@pytest.fixture
def ones():
    return FixedSigns(1.0)


@pytest.fixture
def frozen_clock():
    return lambda: 1000
