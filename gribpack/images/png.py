'''
# Portable Network Graphics

The raster samples are stored into the image as they are: 8 and 16 bits deep
rasters become grayscale images, while 24 and 32 bits deep ones become RGB
and RGBA images whose channels are the bytes of each (big-endian) sample.
'''
import io

import numpy as np
from PIL import Image

from ..exceptions import DecodeFailure, EncodeFailure
from .raster import GrayscaleRaster, RasterCodec


# depth of the raster -> channels of the image
DEPTH_CHANNELS = {
    8: 1,
    24: 3,
    32: 4,
}

MODE_DEPTHS = {
    'L': 8,
    'I;16': 16,
    'I;16B': 16,
    'I;16L': 16,
    'I': 16,
    'RGB': 24,
    'RGBA': 32,
}


class PngCodec(RasterCodec):
    '''Pillow backed PNG codec, the options are ignored'''

    def image_from_raster(self, raster: GrayscaleRaster) -> Image.Image:
        if raster.depth == 16:
            pixels = np.frombuffer(raster.data, dtype='>u2').astype(np.uint16)
            return Image.fromarray(pixels.reshape(raster.height, raster.width))

        channels = DEPTH_CHANNELS.get(raster.depth)

        if channels is None:
            raise EncodeFailure(f'PNG rasters must be 8, 16, 24 or 32 bits deep, not {raster.depth}', number=raster.depth)

        pixels = np.frombuffer(raster.data, dtype=np.uint8)

        if channels == 1:
            return Image.fromarray(pixels.reshape(raster.height, raster.width))

        return Image.fromarray(pixels.reshape(raster.height, raster.width, channels))

    def encode(self, raster: GrayscaleRaster, options: str = '') -> bytes:
        image = self.image_from_raster(raster)

        self.logger.debug('encoding %s raster as %s', raster, image.mode)

        output = io.BytesIO()
        try:
            image.save(output, format='PNG')
        except (OSError, ValueError) as e:
            raise EncodeFailure(f'PNG encoding failed: {e}') from e

        return output.getvalue()

    def decode(self, data: bytes) -> GrayscaleRaster:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (OSError, ValueError, SyntaxError) as e:
            raise DecodeFailure(f'PNG decoding failed: {e}') from e

        depth = MODE_DEPTHS.get(image.mode)

        if depth is None:
            raise DecodeFailure(f'PNG image with unsupported mode {image.mode}')

        width, height = image.size

        if depth == 16:
            samples = np.asarray(image).astype('>u2').tobytes()
        else:
            samples = image.tobytes()

        self.logger.debug('decoded %dx%d image in mode %s', width, height, image.mode)

        return GrayscaleRaster(samples, width, height, depth)
