"""
Scaling shared by the grid point packing algorithms.

A value Y of the field is represented by an integer X such that

    Y * 10^D = R + X * 2^E

where R is the reference value (the minimum, stored as IEEE single
precision), E the binary scale factor and D the decimal scale factor. The
number of bits of X is the smallest able to hold the difference between the
maximum and the minimum.

When all the values round to the same integer the field is constant: no bit
is stored and the reference value is the value of each point.
"""
import logging
import math
import struct
from contextlib import contextmanager
from typing import NamedTuple, Optional, Sequence

import numpy as np

from ..enum import OriginalFieldType
from ..exceptions import AllocationFailure


logger = logging.getLogger(__name__)

REFERENCE_VALUE = 0
BINARY_SCALE = 1
DECIMAL_SCALE = 2
NUMBER_OF_BITS = 3
ORIGINAL_TYPE = 4

FLOAT32_MAX = float(np.finfo(np.float32).max)


class Quantization(NamedTuple):
    values: Optional[np.ndarray]  # None for a constant field
    reference: float
    nbits: int

    @property
    def is_constant(self) -> bool:
        return self.values is None


def to_ieee(value: float) -> int:
    '''Return the bit pattern of value as IEEE 754 single precision, values
    too large for it become infinities'''
    if abs(value) > FLOAT32_MAX:
        value = math.copysign(math.inf, value)

    return struct.unpack('>I', struct.pack('>f', value))[0]


def from_ieee(pattern: int) -> float:
    return struct.unpack('>f', struct.pack('>I', int(pattern) & 0xffffffff))[0]


def ieee_to_float(patterns) -> np.ndarray:
    '''Array version of from_ieee()'''
    patterns = np.asarray(patterns, dtype=np.int64) & 0xffffffff

    return patterns.astype(np.uint32).view(np.float32)


def check_parameters(params: Sequence[int], length: int, name: str) -> None:
    if len(params) < length:
        raise ValueError(f'{name} needs {length} template values, {len(params)} given')


@contextmanager
def allocation_guard(what: str):
    '''Report the lack of memory for the intermediate buffers as AllocationFailure'''
    try:
        yield
    except MemoryError as e:
        logger.error('could not allocate space for %s', what)
        raise AllocationFailure(f'could not allocate space for {what}') from e


def as_field(field) -> np.ndarray:
    field = np.asarray(field, dtype=np.float64).ravel()

    if field.size == 0:
        raise ValueError('the field to pack is empty')

    if not np.all(np.isfinite(field)):
        raise ValueError('the field to pack contains NaN or infinite values')

    if np.any(np.abs(field) > FLOAT32_MAX):
        raise ValueError('the field to pack contains values out of the single precision range')

    return field


def quantize(field, binary_scale: int, decimal_scale: int, unscaled_constant_test: bool = False) -> Quantization:
    '''Scale the field and compute the minimum number of bits for its values.

    The constant field test uses the difference computed in the same way as the
    packing (that depends on the binary scale factor) unless
    ``unscaled_constant_test`` is set: in that case the difference is always
    ``rint((max - min) * dscale * bscale)``, as the PNG packing does.'''
    field = as_field(field)

    bscale = 2.0 ** -binary_scale
    dscale = 10.0 ** decimal_scale

    rmin = float(field.min())
    rmax = float(field.max())

    if binary_scale == 0:
        maxdiff = int(np.rint(rmax * dscale) - np.rint(rmin * dscale))
    else:
        maxdiff = int(np.rint((rmax - rmin) * dscale * bscale))

    if unscaled_constant_test:
        constant_diff = int(np.rint((rmax - rmin) * dscale * bscale))
    else:
        constant_diff = maxdiff

    if rmin == rmax or constant_diff == 0:
        logger.debug('constant field with value %g', rmin)
        return Quantization(None, rmin, 0)

    if binary_scale == 0:
        imin = np.rint(rmin * dscale)
        values = np.rint(field * dscale) - imin
        maxdiff = int(np.rint(rmax * dscale) - imin)
        reference = float(imin)
    else:
        rmin = rmin * dscale
        rmax = rmax * dscale
        maxdiff = int(np.rint((rmax - rmin) * bscale))
        values = np.rint(((field * dscale) - rmin) * bscale)
        reference = rmin

    # ceil(log2(maxdiff + 1)) without floating point rounding
    nbits = maxdiff.bit_length()

    logger.debug('quantized %d values: reference=%g nbits=%d', field.size, reference, nbits)

    return Quantization(values.astype(np.int64), reference, nbits)


def dequantize(values, reference: float, binary_scale: int, decimal_scale: int) -> np.ndarray:
    bscale = 2.0 ** binary_scale
    dscale = 10.0 ** -decimal_scale

    values = np.asarray(values, dtype=np.float64)

    return (((values * bscale) + reference) * dscale).astype(np.float32)


def constant_field(reference: float, ndpts: int) -> np.ndarray:
    return np.full(ndpts, reference, dtype=np.float32)


def store_results(params, quantization: Quantization) -> None:
    '''Fill in reference value, number of bits and type of original values'''
    params[REFERENCE_VALUE] = to_ieee(quantization.reference)
    params[NUMBER_OF_BITS] = quantization.nbits
    params[ORIGINAL_TYPE] = OriginalFieldType.FLOATING_POINT.value
