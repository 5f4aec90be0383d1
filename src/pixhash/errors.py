from __future__ import annotations


class PixhashError(RuntimeError):
    """Base error for pixhash."""


class ConfigError(PixhashError):
    """Raised when a preset cannot be found or parsed."""


class InvalidConfigurationError(ConfigError, ValueError):
    """Raised for zero or inconsistent hash_size / image_size parameters."""


class ResizeError(PixhashError):
    """Raised when the resizer fails or returns a grid of the wrong size."""


class HexDecodeError(PixhashError, ValueError):
    """Raised for malformed or wrong-length hex input."""


class LengthMismatchError(PixhashError, ValueError):
    """Raised when comparing hashes of different lengths."""
