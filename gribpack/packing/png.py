"""
PNG packing (Data Representation Template 5.41, and its local NCEP number
40010).

Same template values of the simple packing; the number of bits is rounded up
to a depth that the image can hold (8 and 16 bits grayscale, 24 bits RGB, 32
bits RGBA) and it's the rounded value that is stored.
"""
import logging

import numpy as np

from ..bits import extract_fields
from ..exceptions import DecodeFailure, EncodeFailure
from ..images import GrayscaleRaster, PngCodec
from .scaling import (
    allocation_guard,
    as_field,
    check_parameters,
    constant_field,
    dequantize,
    from_ieee,
    quantize,
    store_results,
)


logger = logging.getLogger(__name__)

PNG_DEPTHS = (8, 16, 24, 32)


def snap_depth(nbits: int) -> int:
    '''Return the smallest depth available to hold nbits'''
    for depth in PNG_DEPTHS:
        if nbits <= depth:
            return depth

    raise EncodeFailure(f'{nbits} bits don\'t fit in a PNG image', number=nbits)


def pack(field, width: int, height: int, params, codec=None) -> bytes:
    check_parameters(params, 5, 'PNG packing')

    field = as_field(field)

    if field.size != width * height:
        raise ValueError(f'a {width}x{height} grid has {width * height} points, the field {field.size}')

    codec = codec or PngCodec()

    with allocation_guard('PNG packing'):
        quantization = quantize(field, params[1], params[2], unscaled_constant_test=True)

        if quantization.is_constant:
            data = b''
        else:
            quantization = quantization._replace(nbits=snap_depth(quantization.nbits))
            raster = GrayscaleRaster.from_values(quantization.values, width, height, quantization.nbits)
            data = codec.encode(raster)

    store_results(params, quantization)

    logger.debug('packed %dx%d field in %d bytes of PNG (depth %d)', width, height, len(data), quantization.nbits)

    return data


def unpack(data: bytes, params, ndpts: int, codec=None) -> np.ndarray:
    check_parameters(params, 4, 'PNG unpacking')

    reference = from_ieee(params[0])
    nbits = params[3]

    if nbits == 0:
        return constant_field(reference, ndpts)

    codec = codec or PngCodec()

    with allocation_guard('PNG unpacking'):
        raster = codec.decode(data)

        if len(raster.data) * 8 < nbits * ndpts:
            raise DecodeFailure(f'the PNG image holds {len(raster.data)} bytes, {ndpts} values of {nbits} bits expected')

        values = extract_fields(raster.data, 0, nbits, 0, ndpts)

        return dequantize(values, reference, params[1], params[2])
