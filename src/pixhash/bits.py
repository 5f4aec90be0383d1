from __future__ import annotations

import re
from typing import Any, Iterable, Iterator, Optional, Tuple

import numpy as np

from .errors import HexDecodeError, LengthMismatchError

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


class ImageHash:
    """Immutable fixed-length bit vector produced by the hashers.

    Bits are kept in row-major order of the hash grid. The hex form packs them
    MSB-first into bytes, zero-padding the low bits of the last byte.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: Iterable[Any]) -> None:
        if isinstance(bits, np.ndarray):
            bits = bits.ravel().tolist()
        self._bits: Tuple[bool, ...] = tuple(bool(b) for b in bits)

    @classmethod
    def from_hex(cls, text: str, length: Optional[int] = None) -> "ImageHash":
        """Decode a hex string into a hash of `length` bits.

        `length` defaults to every bit the string carries. The byte count must
        be exactly ceil(length / 8) and the padding bits must be zero.
        """
        if not isinstance(text, str):
            raise HexDecodeError(f"expected str, got {type(text).__name__}")
        if len(text) % 2:
            raise HexDecodeError(f"odd-length hex string ({len(text)} digits)")
        if not _HEX_RE.fullmatch(text):
            raise HexDecodeError(f"non-hex characters in {text!r}")

        raw = bytes.fromhex(text)
        if length is None:
            length = len(raw) * 8
        if length < 0:
            raise HexDecodeError(f"negative length: {length}")

        need = (length + 7) // 8
        if len(raw) != need:
            raise HexDecodeError(
                f"{len(raw)} bytes cannot hold a {length}-bit hash (expected {need} bytes)"
            )

        unpacked = np.unpackbits(np.frombuffer(raw, dtype=np.uint8))
        if unpacked[length:].any():
            raise HexDecodeError(f"non-zero padding bits in {text!r}")
        return cls(unpacked[:length])

    @property
    def bits(self) -> Tuple[bool, ...]:
        return self._bits

    def to_array(self) -> np.ndarray:
        return np.array(self._bits, dtype=bool)

    def to_bytes(self) -> bytes:
        return np.packbits(self.to_array()).tobytes()

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def distance(self, other: "ImageHash") -> int:
        """Hamming distance; both hashes must have the same length."""
        if len(self) != len(other):
            raise LengthMismatchError(
                f"cannot compare hashes of length {len(self)} and {len(other)}"
            )
        return sum(a != b for a, b in zip(self._bits, other._bits))

    def __sub__(self, other: "ImageHash") -> int:
        if not isinstance(other, ImageHash):
            return NotImplemented
        return self.distance(other)

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[bool]:
        return iter(self._bits)

    def __getitem__(self, idx):
        return self._bits[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageHash):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"ImageHash({self.to_hex()!r}, length={len(self)})"


def hamming_distance(a: ImageHash, b: ImageHash) -> int:
    return a.distance(b)
