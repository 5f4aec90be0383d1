from __future__ import annotations

from typing import Any, Sequence, Union

import numpy as np
from PIL import Image

# ITU-R BT.601 luma, same weights Pillow uses for convert("L").
# Changing these changes every hash ever produced.
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

_GREY_MODES = {"1", "L", "I", "F", "I;16", "I;16L", "I;16B"}

Pixel = Union[int, float, Sequence[float]]


def luminance(pixel: Pixel) -> float:
    """Map one pixel to a grey scalar.

    Scalars are already grey. Tuples of one or two values (grey, grey+alpha)
    use the first value. Three or more channels use the weighted sum of the
    first three; alpha and any extra channels are ignored.
    """
    if isinstance(pixel, (int, float, np.number)):
        return float(pixel)
    values = tuple(pixel)
    if not values:
        raise ValueError("empty pixel")
    if len(values) < 3:
        return float(values[0])
    r, g, b = (float(v) for v in values[:3])
    wr, wg, wb = LUMA_WEIGHTS
    return wr * r + wg * g + wb * b


def array_luminance(arr: np.ndarray) -> np.ndarray:
    arr = np.asarray(arr, dtype=np.float64)
    if arr.ndim == 2:
        return arr
    if arr.ndim != 3:
        raise ValueError(f"expected a 2D or 3D array, got shape {arr.shape}")
    if arr.shape[2] < 3:
        return arr[:, :, 0]
    return arr[:, :, :3] @ np.asarray(LUMA_WEIGHTS, dtype=np.float64)


def luminance_grid(source: Any) -> np.ndarray:
    """Convert a pixel grid to a float64 array of shape (height, width)."""
    if isinstance(source, Image.Image):
        if source.mode in _GREY_MODES:
            return np.asarray(source, dtype=np.float64)
        if source.mode not in ("LA", "RGB", "RGBA", "RGBX"):
            source = source.convert("RGB")
        return array_luminance(np.asarray(source))

    if isinstance(source, np.ndarray):
        return array_luminance(source)

    width, height = int(source.width), int(source.height)
    out = np.empty((height, width), dtype=np.float64)
    for y in range(height):
        for x in range(width):
            out[y, x] = luminance(source.getpixel((x, y)))
    return out
