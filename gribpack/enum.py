from enum import Enum, IntEnum


class TemplateCategory(Enum):
    '''The value is the number of the section the templates live in.'''
    PDS = 4
    DRS = 5


class DataRepresentation(IntEnum):
    '''Data Representation Template numbers (Code Table 5.0) known to the dispatcher.'''
    SIMPLE                  = 0
    COMPLEX                 = 2
    COMPLEX_SPATIAL_DIFF    = 3
    JPEG2000                = 40
    PNG                     = 41
    SPECTRAL_SIMPLE         = 50
    SPECTRAL_COMPLEX        = 51
    JPEG2000_LOCAL          = 40000  # NCEP local number, from before WMO adopted 5.40
    PNG_LOCAL               = 40010  # NCEP local number, from before WMO adopted 5.41


class OriginalFieldType(IntEnum):
    '''Code Table 5.1'''
    FLOATING_POINT = 0
    INTEGER        = 1


class CompressionType(IntEnum):
    '''Code Table 5.40'''
    LOSSLESS = 0
    LOSSY    = 1
