import numpy as np
import pytest
from PIL import Image

from pixhash import DifferenceHash, HashConfig, InvalidConfigurationError


def _grey(rows):
    return Image.fromarray(np.ascontiguousarray(rows, dtype=np.uint8))


def test_single_row_scenario():
    hasher = DifferenceHash(hash_size=(2, 1))
    assert hasher.image_size == (3, 1)
    h = hasher.hash(_grey([[10, 50, 30]]))
    assert h.bits == (True, False)
    assert h.to_hex() == "80"


def test_default_sizes():
    hasher = DifferenceHash()
    assert hasher.hash_size == (8, 8)
    assert hasher.image_size == (9, 8)


def test_gradients():
    ramp = np.tile(np.arange(9, dtype=np.uint8) * 20, (8, 1))
    hasher = DifferenceHash(resample="nearest")
    assert hasher.hash_hex(_grey(ramp)) == "ff" * 8
    assert hasher.hash_hex(_grey(ramp[:, ::-1])) == "00" * 8


def test_flat_image_is_all_zero():
    h = DifferenceHash().hash(Image.new("L", (33, 17), 90))
    assert len(h) == 64
    assert not any(h)


def test_larger_image_size_uses_top_left():
    arr = np.zeros((9, 10), dtype=np.uint8)
    arr[:8, :9] = np.tile(np.arange(9, dtype=np.uint8) * 20, (8, 1))
    arr[:, 9] = 0  # a drop in the unused last column
    hasher = DifferenceHash(HashConfig(image_size=(10, 9), resample="nearest"))
    assert hasher.hash_hex(_grey(arr)) == "ff" * 8


def test_image_too_narrow():
    with pytest.raises(InvalidConfigurationError):
        DifferenceHash(HashConfig(hash_size=(8, 8), image_size=(8, 8)))
    with pytest.raises(InvalidConfigurationError):
        DifferenceHash(HashConfig(hash_size=(8, 8), image_size=(9, 7)))


def test_deterministic_and_fixed_length():
    rng = np.random.default_rng(5)
    img = Image.fromarray(rng.integers(0, 256, size=(300, 200, 3), dtype=np.uint8))
    hasher = DifferenceHash(hash_size=(16, 4))
    a, b = hasher.hash(img), hasher.hash(img)
    assert a == b
    assert len(a) == 64
