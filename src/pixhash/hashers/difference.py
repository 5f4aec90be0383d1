from __future__ import annotations

import numpy as np

from ..config import Size
from ..errors import InvalidConfigurationError
from .base import ImageHasher


class DifferenceHash(ImageHasher):
    """Difference hash (dHash): sign of the horizontal luminance gradient.

    Bit (x, y) is set when L[y, x + 1] > L[y, x].
    """

    name = "dhash"

    def default_image_size(self, hash_size: Size) -> Size:
        return (hash_size[0] + 1, hash_size[1])

    def check_sizes(self, hash_size: Size, image_size: Size) -> None:
        hw, hh = hash_size
        iw, ih = image_size
        if iw < hw + 1 or ih < hh:
            raise InvalidConfigurationError(
                f"dhash needs image_size >= ({hw + 1}, {hh}) for hash_size={hash_size}, got {image_size}"
            )

    def compute_bits(self, grid: np.ndarray) -> np.ndarray:
        hw, hh = self.hash_size
        block = grid[:hh, : hw + 1]
        return block[:, 1:] > block[:, :-1]
