import numpy as np
import pytest

from pixhash import HexDecodeError, ImageHash, LengthMismatchError, hamming_distance


def test_hex_is_msb_first_with_zero_padding():
    assert ImageHash([0, 1, 0, 1]).to_hex() == "50"
    assert ImageHash([1, 0]).to_hex() == "80"
    assert ImageHash([1] * 9).to_hex() == "ff80"
    assert ImageHash([1, 0, 0, 0, 0, 0, 0, 1]).to_hex() == "81"
    assert str(ImageHash([1] * 16)) == "ffff"


def test_hex_round_trip():
    rng = np.random.default_rng(0)
    for n in (1, 7, 8, 9, 64, 100):
        h = ImageHash(rng.random(n) > 0.5)
        assert ImageHash.from_hex(h.to_hex(), len(h)) == h


def test_from_hex_accepts_uppercase():
    h = ImageHash.from_hex("FF80", 9)
    assert h == ImageHash([1] * 9)
    assert h.to_hex() == "ff80"


def test_from_hex_default_length_uses_all_bits():
    h = ImageHash.from_hex("0f")
    assert len(h) == 8
    assert h.bits == (False,) * 4 + (True,) * 4


@pytest.mark.parametrize(
    "text,length",
    [
        ("5", None),  # odd length
        ("zz", 8),  # not hex
        ("5 ", 4),
        ("0x50", 8),
        ("50", 9),  # too short
        ("5000", 4),  # too long
        ("5f", 4),  # padding bits set
        ("abc\n", None),  # trailing newline
        ("a\n", 4),
    ],
)
def test_from_hex_rejects(text, length):
    with pytest.raises(HexDecodeError):
        ImageHash.from_hex(text, length)


def test_empty_hash():
    h = ImageHash([])
    assert len(h) == 0
    assert h.to_hex() == ""
    assert ImageHash.from_hex("", 0) == h


def test_hamming_distance():
    a = ImageHash([0, 1, 1, 0, 1])
    b = ImageHash([1, 1, 0, 0, 1])
    assert a.distance(a) == 0
    assert a.distance(b) == 2
    assert b.distance(a) == 2
    assert a - b == 2
    assert hamming_distance(a, b) == 2
    assert isinstance(a.distance(b), int)


def test_distance_length_mismatch():
    with pytest.raises(LengthMismatchError):
        ImageHash([0, 1]).distance(ImageHash([0, 1, 0]))
    with pytest.raises(ValueError):
        hamming_distance(ImageHash([1] * 8), ImageHash([1] * 9))


def test_hash_is_immutable_value():
    a = ImageHash(np.array([[True, False], [False, True]]))
    b = ImageHash([1, 0, 0, 1])
    assert a == b
    assert len({a, b}) == 1
    assert a[0] is True
    assert list(a) == [True, False, False, True]
    assert a.to_array().dtype == bool
    assert a.to_bytes() == b"\x90"
    assert "90" in repr(a)
