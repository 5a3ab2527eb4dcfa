"""
Arbitrary width bit fields over a byte buffer.

The buffer is seen as a continuous stream of bits, the first bit being the
most significant bit of the first byte. A field of ``nbits`` bits starting at
``offset`` is read right-justified into an unsigned integer and written back
taking the low order ``nbits`` bits of the value: everything outside the
field (also in the partially occupied boundary bytes) is left untouched.

Values are always unsigned here, the sign is a matter of the caller (see
:mod:`gribpack.fields` for the sign-magnitude convention of the templates).
"""
from typing import Iterable, List, Tuple

from bitstring import BitArray, Bits

from .exceptions import BitStreamError


MAX_FIELD_BITS = 64


def _check_width(nbits: int) -> None:
    if not 1 <= nbits <= MAX_FIELD_BITS:
        raise BitStreamError(f'a field must be between 1 and {MAX_FIELD_BITS} bits wide, not {nbits}')


def _check_bounds(buffer, offset: int, nbits: int, stride: int, count: int) -> int:
    '''Return the bit following the last one accessed'''
    if offset < 0 or stride < 0 or count < 0:
        raise BitStreamError(f'negative offset/stride/count ({offset}, {stride}, {count})')

    if count == 0:
        return offset

    end = offset + (count - 1) * (nbits + stride) + nbits
    if end > len(buffer) * 8:
        raise BitStreamError(f'access to bits [{offset}:{end}] goes past the end of a buffer of {len(buffer)} bytes')

    return end


def _span(offset: int, end: int) -> Tuple[int, int]:
    '''The bytes of the buffer containing the bits [offset:end]'''
    return offset // 8, (end + 7) // 8


def _value_bits(value: int, nbits: int) -> Bits:
    size = (nbits + 7) // 8

    return Bits(value.to_bytes(size, 'big'))[size * 8 - nbits:]


def extract_field(buffer, offset: int, nbits: int) -> int:
    """Get the unsigned value of ``nbits`` bits starting at bit ``offset``."""
    return extract_fields(buffer, offset, nbits, 0, 1)[0]


def extract_fields(buffer, offset: int, nbits: int, stride: int, count: int) -> List[int]:
    """Get ``count`` values of ``nbits`` bits each, skipping ``stride`` bits
    after each one of them."""
    _check_width(nbits)
    end = _check_bounds(buffer, offset, nbits, stride, count)

    if count == 0:
        return []

    start, stop = _span(offset, end)
    bits = Bits(bytes(buffer[start:stop]))
    first = offset - start * 8
    step = nbits + stride

    return [bits[pos:pos + nbits].uint for pos in range(first, first + step * count, step)]


def insert_field(buffer: bytearray, value: int, offset: int, nbits: int) -> None:
    """Store the low order ``nbits`` bits of ``value`` at bit ``offset``."""
    insert_fields(buffer, [value], offset, nbits, 0)


def insert_fields(buffer: bytearray, values: Iterable[int], offset: int, nbits: int, stride: int) -> None:
    """Store each of the values in ``nbits`` bits, skipping ``stride`` bits after
    each one of them. The buffer is modified in place, only the bytes
    touched by the fields are rewritten."""
    if not isinstance(buffer, bytearray):
        raise TypeError(f'the buffer must be a bytearray, not {buffer.__class__.__name__}')

    values = list(values)

    _check_width(nbits)
    end = _check_bounds(buffer, offset, nbits, stride, len(values))

    if not values:
        return

    mask = (1 << nbits) - 1
    step = nbits + stride

    start, stop = _span(offset, end)
    bits = BitArray(bytes(buffer[start:stop]))
    first = offset - start * 8

    for idx, value in enumerate(values):
        pos = first + idx * step
        bits[pos:pos + nbits] = _value_bits(int(value) & mask, nbits)

    buffer[start:stop] = bits.tobytes()


def packed_size(nbits: int, count: int) -> int:
    """Number of bytes needed to hold ``count`` contiguous fields of ``nbits`` bits."""
    return (nbits * count + 7) // 8
