# tests/conftest.py
import numpy as np
import pytest

SIZE = 48


@pytest.fixture
def rng():
    return np.random.default_rng(20240917)


@pytest.fixture
def random_image(rng):
    return rng.integers(0, 256, size=SIZE * SIZE, dtype=np.uint8)


@pytest.fixture
def gradient_pair():
    n = SIZE * SIZE
    a = np.floor(np.arange(n) / n * 255).astype(np.uint8)
    return a, (255 - a).astype(np.uint8)


@pytest.fixture
def noisy_pair(rng):
    a = rng.integers(0, 256, size=SIZE * SIZE)
    noise = rng.integers(-5, 6, size=a.size)
    b = np.clip(a + noise, 0, 255)
    return a.astype(np.uint8), b.astype(np.uint8)


@pytest.fixture
def reference():
    import _reference

    return _reference
