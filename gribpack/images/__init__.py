'''
Adapters to the external image codecs used by the JPEG 2000 and PNG packing
of grid point data: the packed integers travel to and from the codec as a
single component raster.
'''
from .raster import GrayscaleRaster, RasterCodec, parse_options
from .jpeg2000 import Jpeg2000Codec
from .png import PngCodec


__all__ = [
    'GrayscaleRaster',
    'RasterCodec',
    'parse_options',
    'Jpeg2000Codec',
    'PngCodec',
]
