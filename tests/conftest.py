import pytest

from gribpack.exceptions import EncodeFailure
from gribpack.images import RasterCodec


class MemoryCodec(RasterCodec):
    '''Keeps the rasters instead of compressing them; the first ``failures``
    encodings fail.'''

    def __init__(self, failures=0):
        super().__init__()
        self.failures = failures
        self.options = []
        self.rasters = {}

    def encode(self, raster, options=''):
        self.options.append(options)

        if self.failures:
            self.failures -= 1
            raise EncodeFailure('simulated failure')

        key = b'raster%d' % len(self.rasters)
        self.rasters[key] = raster

        return key

    def decode(self, data):
        return self.rasters[data]


@pytest.fixture
def memory_codec():
    return MemoryCodec()


@pytest.fixture
def codec_factory():
    return MemoryCodec
