import random

import pytest

from gribpack.bits import (
    MAX_FIELD_BITS,
    extract_field,
    extract_fields,
    insert_field,
    insert_fields,
    packed_size,
)
from gribpack.exceptions import BitStreamError


def test_extract_msb_first():
    assert extract_field(b'\xb0', 0, 3) == 0b101
    assert extract_field(b'\xb0', 3, 1) == 1
    assert extract_field(b'\xb0', 4, 4) == 0


def test_extract_across_bytes():
    assert extract_field(b'\x0f\xf0', 4, 8) == 0xff
    assert extract_field(b'\x12\x34\x56\x78\x9a', 4, 32) == 0x23456789


def test_extract_with_stride():
    assert extract_fields(b'\xaa', 0, 1, 1, 4) == [1, 1, 1, 1]
    assert extract_fields(b'\xaa', 1, 1, 1, 4) == [0, 0, 0, 0]
    assert extract_fields(b'\x1b', 0, 2, 0, 4) == [0, 1, 2, 3]


def test_extract_64_bits():
    data = b'\xff' * 9

    assert extract_field(data, 3, MAX_FIELD_BITS) == (1 << 64) - 1


def test_insert_preserves_surrounding_bits():
    buffer = bytearray(b'\xff\xff')
    insert_field(buffer, 0, 4, 8)

    assert buffer == b'\xf0\x0f'


def test_insert_takes_low_order_bits():
    buffer = bytearray(1)
    insert_field(buffer, 0x1ff, 0, 4)

    assert buffer == b'\xf0'


def test_insert_with_stride():
    buffer = bytearray(1)
    insert_fields(buffer, [1, 1, 1, 1], 1, 1, 1)

    assert buffer == b'\x55'


def test_insert_then_extract():
    rng = random.Random(0xcafe)

    for _ in range(200):
        nbits = rng.randint(1, MAX_FIELD_BITS)
        offset = rng.randint(0, 31)
        value = rng.getrandbits(nbits)

        buffer = bytearray(rng.getrandbits(8) for _ in range(16))
        original = bytes(buffer)

        insert_field(buffer, value, offset, nbits)

        assert extract_field(buffer, offset, nbits) == value
        # nothing outside the field changed
        if offset:
            assert extract_field(buffer, 0, offset) == extract_field(original, 0, offset)
        end = offset + nbits
        tail = min(128 - end, MAX_FIELD_BITS)
        assert extract_field(buffer, end, tail) == extract_field(original, end, tail)


def test_zero_count():
    buffer = bytearray(b'\xaa')

    assert extract_fields(b'', 0, 8, 0, 0) == []
    insert_fields(buffer, [], 0, 8, 0)
    assert buffer == b'\xaa'


@pytest.mark.parametrize('nbits', [0, -1, MAX_FIELD_BITS + 1])
def test_invalid_width(nbits):
    with pytest.raises(BitStreamError):
        extract_field(b'\x00' * 16, 0, nbits)

    with pytest.raises(BitStreamError):
        insert_field(bytearray(16), 0, 0, nbits)


def test_out_of_bounds():
    with pytest.raises(BitStreamError):
        extract_field(b'\x00', 1, 8)

    with pytest.raises(BitStreamError):
        extract_fields(b'\x00\x00', 0, 4, 4, 3)

    # it's still a ValueError for who doesn't care
    with pytest.raises(ValueError):
        insert_field(bytearray(1), 0, 4, 5)


def test_insert_needs_bytearray():
    with pytest.raises(TypeError):
        insert_field(b'\x00', 1, 0, 1)


def test_packed_size():
    assert packed_size(2, 4) == 1
    assert packed_size(3, 5) == 2
    assert packed_size(12, 0) == 0


class RecordingBuffer(bytearray):
    '''Keeps the slices taken from it'''

    def __init__(self, size):
        super().__init__(size)
        self.slices = []

    def __getitem__(self, key):
        self.slices.append(key)
        return super().__getitem__(key)


def test_access_copies_only_the_covering_bytes():
    buffer = RecordingBuffer(1024 * 1024)

    insert_fields(buffer, [0x1ff, 0x155], 8 * 1000 + 4, 9, 3)

    assert buffer.slices == [slice(1000, 1004)]
    assert extract_fields(buffer, 8 * 1000 + 4, 9, 3, 2) == [0x1ff, 0x155]
    assert buffer.slices[1] == slice(1000, 1004)
    assert bytes(buffer[999:1005]) == b'\x00\x0f\xf8\xaa\x80\x00'
