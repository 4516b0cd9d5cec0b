import random

import pytest

from nbody.data_models import Body


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_body():
    counter = iter(range(1, 10_000))

    def _make(position=(0.0, 0.0), velocity=(0.0, 0.0), mass=10.0, radius=1.0, trace=None):
        return Body(id=next(counter), mass=mass, radius=radius,
                    position=position, velocity=velocity, trace=trace)

    return _make
