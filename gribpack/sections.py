'''
# Data Representation (Section 5) and Data (Section 7) sections

Each section starts with the same header

| octets | content                          |
|--------|----------------------------------|
| 1-4    | length of the section in octets  |
| 5      | number of the section            |

Section 5 continues with the number of data points (4 octets), the number of
the Data Representation Template (2 octets) and the values of the template;
Section 7 contains only the packed data, in the format described by the
template of the preceding Section 5.

Unpacking a section leaves the stream at the end of the section as declared
by its length, whatever the algorithm actually consumed; when unpacking fails
the stream is left where the section starts.
'''
import logging
import struct
from typing import List, NamedTuple, Sequence

import numpy as np

from .core import TemplateInstance
from .enum import DataRepresentation, TemplateCategory
from .exceptions import (
    BitStreamError,
    CorruptSection,
    GribPackException,
    IncompatibleGridTemplate,
    UnsupportedTemplate,
    WrongSectionNumber,
)
from .fields import pack_template_values, unpack_template
from .packing import jpeg2000, png, simple
from .streams import BitStream
from . import templates


logger = logging.getLogger(__name__)

SECTION_HEADER_SIZE = 5
SECTION5_HEADER_SIZE = SECTION_HEADER_SIZE + 6
# grid definition templates of the spherical harmonic coefficients
SPECTRAL_GRIDS = range(50, 54)


class DataRepresentationSection(NamedTuple):
    ndpts: int
    number: int
    values: List[int]
    instance: TemplateInstance


class UnpackRequest(NamedTuple):
    '''What the unpacking of the data needs to know besides the payload'''
    gdt_number: int
    gdt_values: Sequence[int]
    drt_number: int
    drt_values: Sequence[int]
    ndpts: int
    complex_unpacker: object = None
    spectral_unpacker: object = None
    codec: object = None


def read_section_header(stream: BitStream, expected: int) -> int:
    '''Read the header, check the section number and return the length'''
    length = stream.read(32)
    number = stream.read(8)

    if number != expected:
        logger.error('expected section %d, found %d', expected, number)
        raise WrongSectionNumber(f'expected section {expected}, found {number}', number=number)

    if length < SECTION_HEADER_SIZE or length * 8 > stream.bits_remaining() + SECTION_HEADER_SIZE * 8:
        raise CorruptSection(f'section {expected} declares an invalid length of {length} octets', number=number)

    return length


def as_result(field, ndpts: int) -> np.ndarray:
    field = np.asarray(field, dtype=np.float32)

    if field.size != ndpts:
        raise CorruptSection(f'{field.size} values unpacked, {ndpts} expected', number=7)

    return field


def _unpack_simple(payload: bytes, request: UnpackRequest) -> np.ndarray:
    return simple.unpack(payload, request.drt_values, request.ndpts)


def _unpack_complex(payload: bytes, request: UnpackRequest) -> np.ndarray:
    if request.complex_unpacker is None:
        raise UnsupportedTemplate(f'no unpacker available for the complex packing {request.drt_number}', number=request.drt_number)

    try:
        field = request.complex_unpacker(payload, len(payload), request.drt_number, request.drt_values, request.ndpts)
    except GribPackException:
        raise
    except (ValueError, IndexError) as e:
        raise CorruptSection(f'complex unpacking failed: {e}', number=7) from e

    return as_result(field, request.ndpts)


def _unpack_spectral_simple(payload: bytes, request: UnpackRequest) -> np.ndarray:
    return simple.unpack_spectral(payload, request.drt_values, request.ndpts)


def _unpack_spectral_complex(payload: bytes, request: UnpackRequest) -> np.ndarray:
    if request.gdt_number not in SPECTRAL_GRIDS:
        raise IncompatibleGridTemplate(
            f'Data Representation Template 5.51 can\'t be used with Grid Definition Template 3.{request.gdt_number}',
            number=request.gdt_number,
        )

    if request.spectral_unpacker is None:
        raise UnsupportedTemplate('no unpacker available for the spectral complex packing', number=request.drt_number)

    # pentagonal resolution parameters J, K and M
    gdt_values = request.gdt_values
    field = request.spectral_unpacker(payload, request.drt_values, request.ndpts, gdt_values[0], gdt_values[2], gdt_values[2])

    return as_result(field, request.ndpts)


def _unpack_jpeg2000(payload: bytes, request: UnpackRequest) -> np.ndarray:
    return jpeg2000.unpack(payload, request.drt_values, request.ndpts, codec=request.codec)


def _unpack_png(payload: bytes, request: UnpackRequest) -> np.ndarray:
    return png.unpack(payload, request.drt_values, request.ndpts, codec=request.codec)


UNPACKERS = {
    DataRepresentation.SIMPLE: _unpack_simple,
    DataRepresentation.COMPLEX: _unpack_complex,
    DataRepresentation.COMPLEX_SPATIAL_DIFF: _unpack_complex,
    DataRepresentation.SPECTRAL_SIMPLE: _unpack_spectral_simple,
    DataRepresentation.SPECTRAL_COMPLEX: _unpack_spectral_complex,
    DataRepresentation.JPEG2000: _unpack_jpeg2000,
    DataRepresentation.JPEG2000_LOCAL: _unpack_jpeg2000,
    DataRepresentation.PNG: _unpack_png,
    DataRepresentation.PNG_LOCAL: _unpack_png,
}


def unpack_section7(stream: BitStream, gdt_number: int, gdt_values: Sequence[int], drt_number: int, drt_values: Sequence[int], ndpts: int,
                    complex_unpacker=None, spectral_unpacker=None, codec=None) -> np.ndarray:
    '''Unpack the data points of the Data Section starting at the position of the stream.

    The complex packing algorithms (templates 5.2, 5.3 and 5.51) are not part
    of this package: they can be provided as callables, respectively

        complex_unpacker(payload, length, drt_number, drt_values, ndpts)
        spectral_unpacker(payload, drt_values, ndpts, J, K, M)

    returning the ``ndpts`` values.'''
    start = stream.tell()
    stream.save()

    try:
        length = read_section_header(stream, 7)
        payload = stream.read_bytes(length - SECTION_HEADER_SIZE)

        unpacker = UNPACKERS.get(drt_number)
        if unpacker is None:
            raise UnsupportedTemplate(f'Data Representation Template 5.{drt_number} not supported', number=drt_number)

        logger.debug('unpacking %d points with template 5.%d from %d octets', ndpts, drt_number, len(payload))

        request = UnpackRequest(gdt_number, gdt_values, drt_number, drt_values, ndpts, complex_unpacker, spectral_unpacker, codec)
        try:
            field = unpacker(payload, request)
        except BitStreamError as e:
            logger.error('the data section is shorter than template 5.%d needs: %s', drt_number, e)
            raise CorruptSection(f'data section too short for {ndpts} points: {e}', number=7) from e
    except Exception:
        stream.restore()
        raise

    stream.discard()
    stream.seek(start + length * 8)

    return field


def pack_section7(payload: bytes) -> bytes:
    return struct.pack('>IB', len(payload) + SECTION_HEADER_SIZE, 7) + bytes(payload)


def unpack_section5(stream: BitStream) -> DataRepresentationSection:
    start = stream.tell()
    stream.save()

    try:
        length = read_section_header(stream, 5)
        ndpts = stream.read(32)
        number = stream.read(16)

        instance, values = unpack_template(stream, TemplateCategory.DRS, number)

        if stream.tell() - start > length * 8:
            raise CorruptSection(f'template 5.{number} doesn\'t fit in a section of {length} octets', number=5)
    except Exception:
        stream.restore()
        raise

    stream.discard()
    stream.seek(start + length * 8)

    logger.debug('section 5: %d points, template 5.%d %r', ndpts, number, values)

    return DataRepresentationSection(ndpts, number, values, instance)


def pack_section5(ndpts: int, drt_number: int, values: Sequence[int]) -> bytes:
    instance = templates.extend_drs_template(drt_number, values)
    length = SECTION5_HEADER_SIZE + instance.size

    stream = BitStream(length)
    stream.write(length, 32)
    stream.write(5, 8)
    stream.write(ndpts, 32)
    stream.write(drt_number, 16)
    pack_template_values(stream, instance, values)

    return stream.getvalue()


def pack_field(field, drt_number: int, params: Sequence[int], width: int = None, height: int = None, codec=None):
    '''Pack the field with the algorithm of the template, returning the payload
    of the Data Section and the template values updated by the packing.

    The image based algorithms need the dimensions of the grid: when they are
    not given the field is considered a single row.'''
    params = list(params)
    size = np.size(field)

    if width is None or height is None:
        width, height = size, 1

    logger.debug('packing %d points with template 5.%d', size, drt_number)

    if drt_number == DataRepresentation.SIMPLE:
        payload = simple.pack(field, params)
    elif drt_number in (DataRepresentation.JPEG2000, DataRepresentation.JPEG2000_LOCAL):
        payload = jpeg2000.pack(field, width, height, params, codec=codec)
    elif drt_number in (DataRepresentation.PNG, DataRepresentation.PNG_LOCAL):
        payload = png.pack(field, width, height, params, codec=codec)
    else:
        raise UnsupportedTemplate(f'packing with Data Representation Template 5.{drt_number} not supported', number=drt_number)

    return payload, params
