'''
Packing of the grid point values into the Data Section (Section 7).

Every algorithm works on the same first five values of the Data
Representation Template (reference value, binary and decimal scale factors,
number of bits, type of original values) and unpacks to a ``numpy.float32``
array.
'''
from . import jpeg2000, png, simple
from .scaling import from_ieee, ieee_to_float, to_ieee


__all__ = [
    'jpeg2000',
    'png',
    'simple',
    'from_ieee',
    'ieee_to_float',
    'to_ieee',
]
