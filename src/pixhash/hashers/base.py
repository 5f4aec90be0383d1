from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import numpy as np

from ..bits import ImageHash
from ..config import HashConfig, Size
from ..errors import InvalidConfigurationError
from ..luminance import LUMA_WEIGHTS, luminance_grid
from ..resize import resize_image

logger = logging.getLogger(__name__)


class ImageHasher(ABC):
    """Resize -> luminance -> bits.

    Subclasses pick the default resize target, check that the configuration
    fits their sampling rule, and turn the luminance grid into a bit grid of
    shape (hash_h, hash_w). Hashers hold only an immutable config and can be
    shared between threads.
    """

    name: str = ""

    def __init__(self, config: Optional[HashConfig] = None, **overrides: Any) -> None:
        cfg = config or HashConfig()
        if overrides:
            try:
                cfg = dataclasses.replace(cfg, **overrides)
            except TypeError as e:
                raise InvalidConfigurationError(f"Unknown config override(s): {sorted(overrides)}") from e
        self.config = cfg
        self.image_size: Size = cfg.image_size or self.default_image_size(cfg.hash_size)
        self.check_sizes(cfg.hash_size, self.image_size)
        self._resizer = cfg.resolve_resizer()

    @property
    def hash_size(self) -> Size:
        return self.config.hash_size

    @abstractmethod
    def default_image_size(self, hash_size: Size) -> Size:
        raise NotImplementedError

    @abstractmethod
    def check_sizes(self, hash_size: Size, image_size: Size) -> None:
        """Raise InvalidConfigurationError if the sizes don't fit the algorithm."""
        raise NotImplementedError

    @abstractmethod
    def compute_bits(self, grid: np.ndarray) -> np.ndarray:
        """Map a (image_h, image_w) luminance grid to a (hash_h, hash_w) bool grid."""
        raise NotImplementedError

    def luminance(self, image: Any) -> np.ndarray:
        w, h = self.image_size
        resized = resize_image(self._resizer, image, w, h)
        return luminance_grid(resized)

    def hash(self, image: Any) -> ImageHash:
        bits = self.compute_bits(self.luminance(image))
        out = ImageHash(bits)
        logger.debug(
            "%s %dx%d -> %dx%d: %s",
            self.name,
            self.image_size[0],
            self.image_size[1],
            self.hash_size[0],
            self.hash_size[1],
            out,
        )
        return out

    def hash_hex(self, image: Any) -> str:
        return self.hash(image).to_hex()

    def metadata(self) -> Dict[str, object]:
        """Settings that make two hashes comparable; store them next to hashes."""
        resizer = self.config.resizer
        return {
            "type": self.name,
            "hash_size": list(self.hash_size),
            "image_size": list(self.image_size),
            "resample": self.config.resample if resizer is None else getattr(resizer, "__name__", repr(resizer)),
            "luma_weights": list(LUMA_WEIGHTS),
            "hash_format": "hex",
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(hash_size={self.hash_size}, image_size={self.image_size})"
