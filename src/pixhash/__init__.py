"""pixhash: perceptual image hashes (aHash, dHash, pHash) with hex codec and Hamming distance."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .bits import ImageHash, hamming_distance
from .config import HashConfig
from .core import (
    HASHERS,
    average_hash,
    difference_hash,
    get_hasher,
    hash_file,
    open_image,
    perceptual_hash,
)
from .errors import (
    ConfigError,
    HexDecodeError,
    InvalidConfigurationError,
    LengthMismatchError,
    PixhashError,
    ResizeError,
)
from .hashers.average import AverageHash
from .hashers.difference import DifferenceHash
from .hashers.perceptual import PerceptualHash
from .luminance import LUMA_WEIGHTS, luminance
from .resize import default_resizer, pillow_resizer

try:
    __version__ = version("pixhash")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AverageHash",
    "ConfigError",
    "DifferenceHash",
    "HASHERS",
    "HashConfig",
    "HexDecodeError",
    "ImageHash",
    "InvalidConfigurationError",
    "LUMA_WEIGHTS",
    "LengthMismatchError",
    "PerceptualHash",
    "PixhashError",
    "ResizeError",
    "__version__",
    "average_hash",
    "default_resizer",
    "difference_hash",
    "get_hasher",
    "hamming_distance",
    "hash_file",
    "luminance",
    "open_image",
    "perceptual_hash",
    "pillow_resizer",
]
