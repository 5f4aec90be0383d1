from __future__ import annotations

import dataclasses
import json
import logging
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .errors import ConfigError, InvalidConfigurationError
from .resize import RESAMPLE_FILTERS, Resizer, pillow_resizer

logger = logging.getLogger(__name__)

Size = Tuple[int, int]
SizeLike = Union[int, Tuple[int, int], list]  # YAML gives lists


def as_size(value: SizeLike, name: str = "size") -> Size:
    """Normalise an int (square) or a (width, height) pair."""
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"{name} must be an int or (width, height), got {value!r}")
    if isinstance(value, numbers.Integral):
        value = (value, value)
    try:
        w, h = value
    except (TypeError, ValueError):
        raise InvalidConfigurationError(
            f"{name} must be an int or (width, height), got {value!r}"
        ) from None
    if any(isinstance(v, bool) or not isinstance(v, numbers.Integral) for v in (w, h)):
        raise InvalidConfigurationError(f"{name} dimensions must be ints, got {value!r}")
    w, h = int(w), int(h)
    if w < 1 or h < 1:
        raise InvalidConfigurationError(f"{name} dimensions must be >= 1, got {w}x{h}")
    return (w, h)


@dataclass(frozen=True)
class HashConfig:
    # Output grid, flattened row-major into the hash
    hash_size: Size = (8, 8)

    # Resize target; None -> per-algorithm default
    image_size: Optional[Size] = None

    # Pillow filter for the default resizer; ignored when `resizer` is set
    resample: str = "lanczos"  # "nearest" | "box" | "bilinear" | "hamming" | "bicubic" | "lanczos"
    resizer: Optional[Resizer] = dataclasses.field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash_size", as_size(self.hash_size, "hash_size"))
        if self.image_size is not None:
            object.__setattr__(self, "image_size", as_size(self.image_size, "image_size"))
        key = str(self.resample).lower().strip()
        if key not in RESAMPLE_FILTERS:
            raise InvalidConfigurationError(
                f"Unknown resample filter: {self.resample!r} (expected one of {sorted(RESAMPLE_FILTERS)})"
            )
        object.__setattr__(self, "resample", key)
        if self.resizer is not None and not callable(self.resizer):
            raise InvalidConfigurationError("resizer must be callable(image, width, height)")

    # fluent setters
    def with_hash_size(self, width: int, height: Optional[int] = None) -> "HashConfig":
        return dataclasses.replace(self, hash_size=(width, width if height is None else height))

    def with_image_size(self, width: int, height: Optional[int] = None) -> "HashConfig":
        return dataclasses.replace(self, image_size=(width, width if height is None else height))

    def with_resample(self, resample: str) -> "HashConfig":
        return dataclasses.replace(self, resample=resample)

    def with_resizer(self, resizer: Optional[Resizer]) -> "HashConfig":
        return dataclasses.replace(self, resizer=resizer)

    def resolve_resizer(self) -> Resizer:
        if self.resizer is not None:
            return self.resizer
        return pillow_resizer(self.resample)

    @staticmethod
    def presets_dir() -> Path:
        return Path(__file__).parent / "presets"

    @classmethod
    def load_preset(cls, name: str) -> "HashConfig":
        p = cls.presets_dir() / f"{name}.yaml"
        if not p.exists():
            raise ConfigError(f"Preset not found: {name} ({p})")
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ConfigError("Preset YAML must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HashConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(k for k in d if k not in known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        base = {k: v for k, v in d.items() if k in known}
        return cls(**base)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash_size": list(self.hash_size),
            "image_size": list(self.image_size) if self.image_size is not None else None,
            "resample": self.resample,
        }

    def save_json(self, path: Path) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
