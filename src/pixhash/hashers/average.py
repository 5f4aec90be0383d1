from __future__ import annotations

import math

import numpy as np

from ..config import Size
from ..errors import InvalidConfigurationError
from .base import ImageHasher


class AverageHash(ImageHasher):
    """Average hash (aHash).

    Steps:
      1) Resize to hash_size, convert to luminance
      2) Mean luminance over the grid
      3) Bit = cell is strictly brighter than the mean

    A flat image hashes to all zeros.
    """

    name = "ahash"

    def default_image_size(self, hash_size: Size) -> Size:
        return hash_size

    def check_sizes(self, hash_size: Size, image_size: Size) -> None:
        # one bit per resized cell
        if image_size != hash_size:
            raise InvalidConfigurationError(
                f"ahash needs image_size == hash_size, got image_size={image_size} hash_size={hash_size}"
            )

    def compute_bits(self, grid: np.ndarray) -> np.ndarray:
        mean = math.fsum(grid.ravel().tolist()) / grid.size
        # the true mean lies in [min, max]; clamping keeps a flat grid exactly at its value
        mean = min(max(mean, float(grid.min())), float(grid.max()))
        return grid > mean
