'''
# JPEG 2000

The raster is encoded as a raw codestream (no JP2 container) through Pillow,
that uses OpenJPEG. A codestream starts with the SOC marker immediately
followed by the SIZ marker segment, whose fixed part is

| offset | size | field                                 |
|--------|------|---------------------------------------|
| 0      | 2    | SOC (0xff4f)                          |
| 2      | 2    | SIZ (0xff51)                          |
| 4      | 2    | Lsiz                                  |
| 6      | 2    | Rsiz                                  |
| 8      | 32   | image and tile sizes/offsets          |
| 40     | 2    | Csiz (number of components)           |
| 42     | 1    | Ssiz of the first component           |

the low 7 bits of Ssiz being the precision minus one.

The options understood are the ones of the JasPer encoder:

 - ``mode=real`` selects the irreversible (lossy) wavelet transform
 - ``rate=R`` is the fraction of the uncompressed size to produce
 - ``numgbits=N`` is the number of guard bits; OpenJPEG through Pillow
   doesn't allow to set them, so the encoder falls back to the reversible
   transform that never overflows
'''
import io

import numpy as np
from PIL import Image

from ..exceptions import DecodeFailure, EncodeFailure
from .raster import GrayscaleRaster, RasterCodec, parse_options


CODESTREAM_MAGIC = b'\xff\x4f\xff\x51'
SSIZ_OFFSET = 42
MAX_RESOLUTIONS = 6


def codestream_precision(data: bytes) -> int:
    '''Return the precision of the first component of the codestream'''
    start = data.find(CODESTREAM_MAGIC)

    if start < 0 or len(data) <= start + SSIZ_OFFSET:
        raise DecodeFailure('no JPEG 2000 codestream found')

    return (data[start + SSIZ_OFFSET] & 0x7f) + 1


def number_of_resolutions(width: int, height: int) -> int:
    '''The smallest side must survive all the decomposition levels'''
    return max(1, min(MAX_RESOLUTIONS, min(width, height).bit_length()))


class Jpeg2000Codec(RasterCodec):
    '''Pillow backed JPEG 2000 codec, rasters up to 16 bits deep.

    The guard bits can't be set, so asking for them on a lossless encoding
    produces exactly the same settings of the first attempt.'''

    def settings(self, options: str) -> dict:
        settings = {
            'irreversible': False,
        }

        for key, value in parse_options(options).items():
            if key == 'mode':
                if value not in ('int', 'real'):
                    raise ValueError(f'unknown JPEG 2000 mode \'{value}\'')
                settings['irreversible'] = value == 'real'
            elif key == 'rate':
                rate = float(value)
                if rate <= 0:
                    raise ValueError(f'invalid JPEG 2000 rate {value}')
                settings['quality_mode'] = 'rates'
                settings['quality_layers'] = [1.0 / rate]
            elif key == 'numgbits':
                if settings['irreversible']:
                    self.logger.debug('guard bits requested (%s), using the reversible transform', value)
                else:
                    self.logger.warning('guard bits requested (%s) but the transform is already reversible: nothing changes', value)
                settings['irreversible'] = False
            else:
                raise ValueError(f'unknown JPEG 2000 option \'{key}\'')

        return settings

    def encode(self, raster: GrayscaleRaster, options: str = '') -> bytes:
        if raster.depth > 16:
            raise EncodeFailure(f'JPEG 2000 rasters can be at most 16 bits deep, not {raster.depth}', number=raster.depth)

        settings = self.settings(options)
        settings['num_resolutions'] = number_of_resolutions(raster.width, raster.height)

        if raster.sample_size == 1:
            pixels = np.frombuffer(raster.data, dtype=np.uint8)
        else:
            pixels = np.frombuffer(raster.data, dtype='>u2').astype(np.uint16)

        image = Image.fromarray(pixels.reshape(raster.height, raster.width))

        self.logger.debug('encoding %s raster as %s with %s', raster, image.mode, settings)

        output = io.BytesIO()
        try:
            image.save(output, format='JPEG2000', no_jp2=True, **settings)
        except (OSError, ValueError) as e:
            raise EncodeFailure(f'JPEG 2000 encoding failed: {e}') from e

        return output.getvalue()

    def decode(self, data: bytes) -> GrayscaleRaster:
        precision = codestream_precision(data)

        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (OSError, ValueError, SyntaxError) as e:
            raise DecodeFailure(f'JPEG 2000 decoding failed: {e}') from e

        if image.mode == 'L':
            container = 8
        elif image.mode in ('I;16', 'I;16B', 'I;16L', 'I'):
            container = 16
        else:
            raise DecodeFailure(f'JPEG 2000 image with unsupported mode {image.mode}')

        pixels = np.asarray(image).astype(np.uint32)

        # the decoder scales the samples to the precision of the image mode
        if container > precision:
            pixels = pixels >> (container - precision)

        width, height = image.size
        self.logger.debug('decoded %dx%d image with precision %d', width, height, precision)

        if precision <= 8:
            samples = pixels.astype(np.uint8).tobytes()
        else:
            samples = pixels.astype('>u2').tobytes()

        return GrayscaleRaster(samples, width, height, precision)
