'''
# Data Representation Templates (Section 5)

Each template is the map of the octets in which to pack each of its values,
a negative width meaning that the value can be negative.

The documentation of each template is at
<https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_temp5-N.shtml>.

Template 5.1 (matrix values at gridpoint, simple packing) is not registered:
the WMO specification still carries it with a disclaimer since it has never
been validated, so its definition could change.
'''
from ..core import TemplateDescriptor
from ..enum import TemplateCategory


def _drs(number, widths, rule=None):
    return TemplateDescriptor(TemplateCategory.DRS, number, tuple(widths), rule)


TEMPLATES = (
    # 5.0: Grid point data - Simple Packing
    _drs(0, (4, -2, -2, 1, 1)),
    # 5.2: Grid point data - Complex Packing
    _drs(2, (4, -2, -2, 1, 1, 1, 1, 4, 4, 4, 1, 1, 4, 1, 4, 1)),
    # 5.3: Grid point data - Complex Packing and spatial differencing
    _drs(3, (4, -2, -2, 1, 1, 1, 1, 4, 4, 4, 1, 1, 4, 1, 4, 1, 1, 1)),
    # 5.50: Spectral Data - Simple Packing
    _drs(50, (4, -2, -2, 1, 4)),
    # 5.51: Spherical Harmonics data - Complex packing
    _drs(51, (4, -2, -2, 1, -4, 2, 2, 2, 4, 1)),
    # 5.40: Grid point data - JPEG2000 encoding
    _drs(40, (4, -2, -2, 1, 1, 1, 1)),
    # 5.41: Grid point data - PNG encoding
    _drs(41, (4, -2, -2, 1, 1)),
    # 5.40000: local number used before WMO standardized 5.40, use that instead
    _drs(40000, (4, -2, -2, 1, 1, 1, 1)),
    # 5.40010: local number used before WMO standardized 5.41, use that instead
    _drs(40010, (4, -2, -2, 1, 1)),
)
