import pytest

from gribpack.exceptions import BitStreamError
from gribpack.streams import BitStream


def test_read_advances_cursor():
    stream = BitStream(b'\x00\x00\x00\x0b\x07\xff')

    assert stream.read(32) == 11
    assert stream.tell() == 32
    assert stream.read(8) == 7
    assert stream.read(4) == 0xf
    assert stream.bits_remaining() == 4


def test_write_then_getvalue():
    stream = BitStream(2)

    stream.write(0b101, 3)
    stream.write_many([1, 0, 1], 1)
    stream.write(0xff, 8)

    assert stream.tell() == 14
    assert stream.getvalue() == b'\xb7\xfc'


def test_bytes_are_copied_bytearray_shared():
    data = bytearray(1)
    BitStream(data).write(0xff, 8)

    assert data == b'\xff'

    raw = b'\x00'
    stream = BitStream(raw)
    stream.write(0xff, 8)

    assert raw == b'\x00'
    assert stream.getvalue() == b'\xff'


def test_wrong_kind_of_object():
    with pytest.raises(ValueError):
        BitStream('kebab')

    with pytest.raises(ValueError):
        BitStream(-1)


def test_seek():
    stream = BitStream(b'\x0f', offset=4)

    assert stream.read(4) == 0xf

    with pytest.raises(ValueError):
        stream.seek(9)

    stream.seek(8)
    with pytest.raises(BitStreamError):
        stream.read(1)


def test_save_restore():
    stream = BitStream(b'\x01\x02\x03')

    stream.save()
    stream.read(16)
    stream.restore()

    assert stream.tell() == 0

    stream.save()
    stream.read(8)
    stream.discard()

    assert stream.tell() == 8
    assert stream.history == []


def test_read_bytes():
    stream = BitStream(b'\x01\x02\x03')

    assert stream.read_bytes(2) == b'\x01\x02'

    stream.skip(1)
    with pytest.raises(ValueError):
        stream.read_bytes(1)

    stream.seek(16)
    with pytest.raises(BitStreamError):
        stream.read_bytes(2)


def test_read_many_with_stride():
    stream = BitStream(b'\xaa')

    assert stream.read_many(1, 4, stride=1) == [1, 1, 1, 1]
    assert stream.tell() == 8
