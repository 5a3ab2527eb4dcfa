"""
JPEG 2000 code stream packing (Data Representation Template 5.40, and its
local NCEP number 40000).

The template values are the ones of the simple packing followed by

    5. type of compression (Code Table 5.40, 0 lossless, 1 lossy)
    6. target compression ratio M:1 (255 when lossless)

The integers obtained by the scaling are encoded as a grayscale image as deep
as the number of bits needed.
"""
import logging

import numpy as np

from ..enum import CompressionType
from ..exceptions import DecodeFailure, EncodeFailure
from ..images import GrayscaleRaster, Jpeg2000Codec
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

GUARD_BITS_RETRY = 4
LOSSLESS_RATIO = 255


def build_options(compression_type: int, ratio: int, retry: bool = False) -> str:
    options = []

    if compression_type == CompressionType.LOSSY:
        options.append('mode=real')
        options.append('rate=%f' % (1.0 / ratio))

    if retry:
        options.append('numgbits=%d' % GUARD_BITS_RETRY)

    return '\n'.join(options)


def encode(codec, raster: GrayscaleRaster, compression_type: int, ratio: int) -> bytes:
    '''Encode the raster, if the encoder fails it's tried a second (and last)
    time with more guard bits.'''
    try:
        return codec.encode(raster, build_options(compression_type, ratio))
    except EncodeFailure as e:
        logger.warning('JPEG 2000 encoding of %s raster failed (%s), retrying with %d guard bits', raster, e, GUARD_BITS_RETRY)

    try:
        data = codec.encode(raster, build_options(compression_type, ratio, retry=True))
    except EncodeFailure as e:
        logger.error('JPEG 2000 encoding failed also with %d guard bits: %s', GUARD_BITS_RETRY, e)
        raise

    logger.info('JPEG 2000 encoding with %d guard bits successful', GUARD_BITS_RETRY)

    return data


def pack(field, width: int, height: int, params, codec=None) -> bytes:
    check_parameters(params, 7, 'JPEG 2000 packing')

    field = as_field(field)

    if field.size != width * height:
        raise ValueError(f'a {width}x{height} grid has {width * height} points, the field {field.size}')

    compression_type = params[5]
    if compression_type == CompressionType.LOSSY and params[6] <= 0:
        raise ValueError(f'invalid compression ratio {params[6]}')

    codec = codec or Jpeg2000Codec()

    with allocation_guard('JPEG 2000 packing'):
        quantization = quantize(field, params[1], params[2])

        if quantization.nbits:
            raster = GrayscaleRaster.from_values(quantization.values, width, height, quantization.nbits)
            data = encode(codec, raster, compression_type, params[6])
        else:
            data = b''

    store_results(params, quantization)

    if compression_type == CompressionType.LOSSLESS:
        params[6] = LOSSLESS_RATIO

    logger.debug('packed %dx%d field in %d bytes of JPEG 2000', width, height, len(data))

    return data


def unpack(data: bytes, params, ndpts: int, codec=None) -> np.ndarray:
    check_parameters(params, 4, 'JPEG 2000 unpacking')

    reference = from_ieee(params[0])

    if params[3] == 0:
        return constant_field(reference, ndpts)

    codec = codec or Jpeg2000Codec()

    with allocation_guard('JPEG 2000 unpacking'):
        raster = codec.decode(data)
        values = raster.values()

        if len(values) < ndpts:
            raise DecodeFailure(f'the JPEG 2000 image has {len(values)} samples, {ndpts} expected')

        return dequantize(values[:ndpts], reference, params[1], params[2])
