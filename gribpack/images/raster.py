import logging
from abc import ABC, abstractmethod

from ..bits import extract_fields, insert_fields


class GrayscaleRaster(object):
    '''Single component image: each sample is a big-endian unsigned integer
    right-justified in the smallest number of whole bytes holding ``depth``
    bits, rows one after the other with no padding.'''

    def __init__(self, data: bytes, width: int, height: int, depth: int):
        if width <= 0 or height <= 0:
            raise ValueError(f'invalid raster dimensions {width}x{height}')

        if not 1 <= depth <= 32:
            raise ValueError(f'invalid raster depth {depth}')

        self.width = width
        self.height = height
        self.depth = depth

        expected = width * height * self.sample_size
        if len(data) < expected:
            raise ValueError(f'a {self} raster needs {expected} bytes, {len(data)} given')

        self.data = bytes(data[:expected])

    def __str__(self):
        return '%dx%dx%d' % (self.width, self.height, self.depth)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self)

    @property
    def sample_size(self) -> int:
        '''Number of bytes of each sample'''
        return (self.depth + 7) // 8

    @property
    def container_bits(self) -> int:
        return self.sample_size * 8

    @classmethod
    def from_values(cls, values, width: int, height: int, depth: int) -> 'GrayscaleRaster':
        values = [int(_) for _ in values]
        container = ((depth + 7) // 8) * 8

        buffer = bytearray(width * height * container // 8)
        insert_fields(buffer, values, 0, container, 0)

        return cls(buffer, width, height, depth)

    def values(self):
        return extract_fields(self.data, 0, self.container_bits, 0, self.width * self.height)


class RasterCodec(ABC):
    '''Interface of the external image codecs.

    The options are a newline separated list of 'key=value' entries.'''

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @abstractmethod
    def encode(self, raster: GrayscaleRaster, options: str = '') -> bytes:
        pass

    @abstractmethod
    def decode(self, data: bytes) -> GrayscaleRaster:
        pass


def parse_options(options: str) -> dict:
    '''Return the options as a dictionary, the values are left as strings.'''
    result = {}

    for line in options.splitlines():
        line = line.strip()

        if not line:
            continue

        key, sep, value = line.partition('=')

        if not sep:
            raise ValueError(f'malformed codec option \'{line}\'')

        result[key.strip()] = value.strip()

    return result
