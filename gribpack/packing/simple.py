"""
Simple packing (Data Representation Template 5.0) and the simple packing of
spherical harmonics coefficients (Template 5.50).

The template values used are

    0. reference value (IEEE 32-bit pattern)
    1. binary scale factor
    2. decimal scale factor
    3. number of bits for each packed value
    4. type of original field values

``pack`` fills in the entries 0, 3 and 4 of the list it is given.
"""
import logging

import numpy as np

from ..bits import extract_fields, insert_fields, packed_size
from .scaling import (
    allocation_guard,
    check_parameters,
    constant_field,
    dequantize,
    from_ieee,
    quantize,
    store_results,
)


logger = logging.getLogger(__name__)


def pack(field, params) -> bytes:
    check_parameters(params, 5, 'simple packing')

    with allocation_guard('simple packing'):
        quantization = quantize(field, params[1], params[2])

        if quantization.nbits:
            buffer = bytearray(packed_size(quantization.nbits, quantization.values.size))
            insert_fields(buffer, quantization.values.tolist(), 0, quantization.nbits, 0)
        else:
            buffer = bytearray()

    store_results(params, quantization)

    logger.debug('packed %d values in %d bytes', np.size(field), len(buffer))

    return bytes(buffer)


def unpack(data: bytes, params, ndpts: int) -> np.ndarray:
    check_parameters(params, 4, 'simple unpacking')

    reference = from_ieee(params[0])
    nbits = params[3]

    with allocation_guard('simple unpacking'):
        if nbits == 0:
            return constant_field(reference, ndpts)

        values = extract_fields(data, 0, nbits, 0, ndpts)

        return dequantize(values, reference, params[1], params[2])


def unpack_spectral(data: bytes, params, ndpts: int) -> np.ndarray:
    '''The real part of the (0,0) coefficient is stored as it is in the template,
    the remaining ones are simple packed'''
    check_parameters(params, 5, 'spectral simple unpacking')

    if ndpts < 1:
        raise ValueError('a spectral field has at least one coefficient')

    with allocation_guard('spectral simple unpacking'):
        field = np.empty(ndpts, dtype=np.float32)
        field[1:] = unpack(data, params, ndpts - 1)
        field[0] = from_ieee(params[4])

    return field
