from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Type, Union

from PIL import Image, ImageOps

from .bits import ImageHash
from .config import HashConfig
from .errors import InvalidConfigurationError
from .hashers.average import AverageHash
from .hashers.base import ImageHasher
from .hashers.difference import DifferenceHash
from .hashers.perceptual import PerceptualHash

HASHERS: Dict[str, Type[ImageHasher]] = {
    AverageHash.name: AverageHash,
    DifferenceHash.name: DifferenceHash,
    PerceptualHash.name: PerceptualHash,
}


def get_hasher(name: str, config: Optional[HashConfig] = None, **overrides: Any) -> ImageHasher:
    key = name.lower().strip()
    if key not in HASHERS:
        raise InvalidConfigurationError(f"Unknown algorithm: {name!r} (expected one of {sorted(HASHERS)})")
    return HASHERS[key](config, **overrides)


def average_hash(image: Any, config: Optional[HashConfig] = None, **overrides: Any) -> ImageHash:
    return AverageHash(config, **overrides).hash(image)


def difference_hash(image: Any, config: Optional[HashConfig] = None, **overrides: Any) -> ImageHash:
    return DifferenceHash(config, **overrides).hash(image)


def perceptual_hash(image: Any, config: Optional[HashConfig] = None, **overrides: Any) -> ImageHash:
    return PerceptualHash(config, **overrides).hash(image)


def open_image(path: Union[str, Path]) -> Image.Image:
    """Decode an image file with Pillow, applying EXIF orientation."""
    with Image.open(Path(path)) as im:
        im = ImageOps.exif_transpose(im)
        im.load()
    return im


def hash_file(
    path: Union[str, Path],
    algorithm: str = "phash",
    config: Optional[HashConfig] = None,
    **overrides: Any,
) -> ImageHash:
    hasher = get_hasher(algorithm, config, **overrides)
    return hasher.hash(open_image(path))
