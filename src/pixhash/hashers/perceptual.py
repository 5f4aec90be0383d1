from __future__ import annotations

import numpy as np
from scipy.fft import dct

from ..config import Size
from ..errors import InvalidConfigurationError
from .base import ImageHasher

# image_size per axis relative to hash_size (32x32 for an 8x8 hash)
HIGHFREQ_FACTOR = 4


def dct2(matrix: np.ndarray) -> np.ndarray:
    """Orthonormal 2D DCT-II: 1D DCT-II over rows, then over columns."""
    m = np.asarray(matrix, dtype=np.float64)
    rows = dct(m, type=2, norm="ortho", axis=1)
    return dct(rows, type=2, norm="ortho", axis=0)


class PerceptualHash(ImageHasher):
    """Perceptual hash (pHash).

    Steps:
      1) Resize to image_size, convert to luminance
      2) 2D DCT-II
      3) Keep the top-left hash_size block (lowest frequencies)
      4) Median of the block without the DC term
      5) Bit = coefficient > median, DC included

    DC only tracks overall brightness, so it is left out of the median.
    Ties give 0.
    """

    name = "phash"

    def default_image_size(self, hash_size: Size) -> Size:
        return (hash_size[0] * HIGHFREQ_FACTOR, hash_size[1] * HIGHFREQ_FACTOR)

    def check_sizes(self, hash_size: Size, image_size: Size) -> None:
        hw, hh = hash_size
        iw, ih = image_size
        if hw * hh < 2:
            raise InvalidConfigurationError("phash needs at least 2 hash bits (DC is excluded from the median)")
        if iw < hw or ih < hh:
            raise InvalidConfigurationError(
                f"phash needs image_size >= hash_size, got image_size={image_size} hash_size={hash_size}"
            )

    def compute_bits(self, grid: np.ndarray) -> np.ndarray:
        hw, hh = self.hash_size
        low = dct2(grid)[:hh, :hw]
        med = np.median(low.ravel()[1:])
        return low > med
