from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Protocol, Tuple

import numpy as np
from PIL import Image

from .errors import InvalidConfigurationError, PixhashError, ResizeError
from .luminance import array_luminance


logger = logging.getLogger(__name__)


class PixelSource(Protocol):
    """Read-only grid of pixels. PIL.Image.Image satisfies this as-is."""

    width: int
    height: int

    def getpixel(self, xy: Tuple[int, int]) -> Any:
        ...


Resizer = Callable[[Any, int, int], Any]

RESAMPLE_FILTERS: Dict[str, int] = {
    "nearest": Image.Resampling.NEAREST,
    "box": Image.Resampling.BOX,
    "bilinear": Image.Resampling.BILINEAR,
    "hamming": Image.Resampling.HAMMING,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

# Modes Pillow filters directly; anything else (P, CMYK, YCbCr, ...) goes through RGB.
_RESAMPLE_MODES = {"L", "LA", "I", "F", "RGB", "RGBA"}


def _array_to_pil(arr: np.ndarray) -> Image.Image:
    if arr.ndim not in (2, 3):
        raise ValueError(f"expected a 2D or 3D array, got shape {arr.shape}")
    if arr.ndim == 3 and arr.shape[2] == 1:
        arr = arr[:, :, 0]
    # 8-bit integer data hashes the same as the equivalent Pillow image
    if np.issubdtype(arr.dtype, np.integer) and arr.size and arr.min() >= 0 and arr.max() <= 255:
        arr = arr.astype(np.uint8)
    if arr.dtype == np.uint8:
        # 2D -> L, 2 -> LA, 3 -> RGB, 4 -> RGBA
        return Image.fromarray(np.ascontiguousarray(arr if arr.ndim == 2 else arr[:, :, :4]))
    # any other range (normalised floats, 16-bit, ...) is reduced to luma and filtered as "F"
    return Image.fromarray(array_luminance(arr).astype(np.float32))


def to_pil_image(image: Any) -> Image.Image:
    """Normalise a Pillow image, numpy array or generic PixelSource to Pillow."""
    if isinstance(image, Image.Image):
        pil = image
    elif isinstance(image, np.ndarray):
        pil = _array_to_pil(image)
    else:
        width, height = int(image.width), int(image.height)
        rows = [[image.getpixel((x, y)) for x in range(width)] for y in range(height)]
        pil = _array_to_pil(np.asarray(rows))

    if pil.mode not in _RESAMPLE_MODES:
        pil = pil.convert("RGB")
    return pil


def pillow_resizer(resample: str = "lanczos") -> Resizer:
    """Build a resizer on top of PIL.Image.resize with the named filter."""
    key = str(resample).lower().strip()
    if key not in RESAMPLE_FILTERS:
        raise InvalidConfigurationError(
            f"Unknown resample filter: {resample!r} (expected one of {sorted(RESAMPLE_FILTERS)})"
        )
    filt = RESAMPLE_FILTERS[key]

    def resize(image: Any, width: int, height: int) -> Image.Image:
        return to_pil_image(image).resize((int(width), int(height)), resample=filt)

    resize.__name__ = f"pillow_{key}"
    return resize


default_resizer = pillow_resizer("lanczos")


def grid_size(source: Any) -> Tuple[int, int]:
    """Return (width, height) of a Pillow image, numpy array or PixelSource."""
    if isinstance(source, np.ndarray):
        if source.ndim not in (2, 3):
            raise ValueError(f"expected a 2D or 3D array, got shape {source.shape}")
        return int(source.shape[1]), int(source.shape[0])
    return int(source.width), int(source.height)


def resize_image(resizer: Resizer, image: Any, width: int, height: int) -> Any:
    """Call `resizer` and check that it produced exactly width x height."""
    if width < 1 or height < 1:
        raise InvalidConfigurationError(f"resize target must be at least 1x1, got {width}x{height}")
    try:
        out = resizer(image, width, height)
        got = grid_size(out)
    except PixhashError:
        raise
    except Exception as e:
        logger.debug("resizer %r failed for %dx%d", resizer, width, height, exc_info=True)
        raise ResizeError(f"resizer failed to produce {width}x{height}: {e}") from e

    if got != (width, height):
        raise ResizeError(f"resizer returned {got[0]}x{got[1]}, expected {width}x{height}")
    return out
