'''
# Product Definition Templates (Section 4)

The maps are built from the blocks that the WMO templates share: most of
them start with the entries of template 4.0 and the statistically processed
ones end with the same time range block, whose last six entries are repeated
once per time range.

The documentation of each template is at
<https://www.nco.ncep.noaa.gov/pmb/docs/grib2/grib2_doc/grib2_temp4-N.shtml>.
'''
from ..core import ExtensionRule, TemplateDescriptor
from ..enum import TemplateCategory


# 4.0: parameter, generating process, forecast time (it can be negative) and
# the two fixed surfaces
ANALYSIS = (1, 1, 1, 1, 1, 2, 1, 1, -4, 1, -1, -4, 1, -1, -4)
ENSEMBLE = (1, 1, 1)
DERIVED = (1, 1)
PROBABILITY = (1, 1, 1, -1, -4, -1, -4)
PERCENTILE = (1,)
CLUSTER_RECTANGULAR = (1, 1, 1, 1, 1, 1, 1, -4, -4, 4, 4, 1, -1, 4, -1, 4)
CLUSTER_CIRCULAR = (1, 1, 1, 1, 1, 1, 1, -4, 4, 4, 1, -1, 4, -1, 4)
SATELLITE = (1, 1, 1, 1, 1, 2, 1, 1, -4, 1)
SATELLITE_BAND = (2, 2, 2, -1, -4)
CHEMICAL = (1, 1, 2, 1, 1, 1, 2, 1, 1, -4, 1, -1, -4, 1, -1, -4)
AEROSOL = (1, 1, 2, 1, -1, -4, -1, -4, 1, 1, 1, 2, 1, 1, -2, 1, -1, -4, 1, -1, -4)
CATEGORY = (1, 1, -1, -4, -1, -4)
PARTITIONED = (1, 1, 1, 1, 4, 2, 1, 1, 1, 2, 1, 1, -4, 1, -1, -4, 1, -1, -4)
MODEL_VERSION = (2, 1, 1, 1, 1, 1)
# end of the overall time interval, number of time ranges, missing values
# and one record (6 entries) for the first time range
TIME_RANGE = (2, 1, 1, 1, 1, 1, 1, 4) + (1, 1, 1, 4, 1, 4)


def _time_range_rule(prefix, trailing_index=None):
    '''Rule of the templates ending with TIME_RANGE after ``prefix``'''
    return ExtensionRule(
        count_index=len(prefix) + 6,
        map_offset=len(prefix) + 8,
        trailing_index=trailing_index,
    )


def _pds(number, widths, rule=None):
    return TemplateDescriptor(TemplateCategory.PDS, number, tuple(widths), rule)


def _pds_time_range(number, prefix, trailing_index=None):
    return _pds(number, prefix + TIME_RANGE, _time_range_rule(prefix, trailing_index))


TEMPLATES = (
    _pds(0, ANALYSIS),
    _pds(1, ANALYSIS + ENSEMBLE),
    _pds(2, ANALYSIS + DERIVED),
    # ensemble members of the cluster are listed at the end
    _pds(3, ANALYSIS + CLUSTER_RECTANGULAR, ExtensionRule(trailing_index=26)),
    _pds(4, ANALYSIS + CLUSTER_CIRCULAR, ExtensionRule(trailing_index=25)),
    _pds(5, ANALYSIS + PROBABILITY),
    _pds(6, ANALYSIS + PERCENTILE),
    _pds(7, ANALYSIS),
    _pds_time_range(8, ANALYSIS),
    _pds_time_range(9, ANALYSIS + PROBABILITY),
    _pds_time_range(10, ANALYSIS + PERCENTILE),
    _pds_time_range(11, ANALYSIS + ENSEMBLE),
    _pds_time_range(12, ANALYSIS + DERIVED),
    _pds_time_range(13, ANALYSIS + CLUSTER_RECTANGULAR, trailing_index=26),
    _pds_time_range(14, ANALYSIS + CLUSTER_CIRCULAR, trailing_index=25),
    _pds(15, ANALYSIS + (1, 1, 1)),
    _pds(20, (1, 1, 1, 1, 1, -4, 4, 2, 4, 2, 1, 1, 1, 1, 1, 2, 1, 3, 2)),
    # satellite products: one record per contributing spectral band
    _pds(30, (1, 1, 1, 1, 1), ExtensionRule(count_index=4, record=(2, 2, 1, 1, 4))),
    _pds(31, (1, 1, 1, 1, 1), ExtensionRule(count_index=4, record=(2, 2, 2, 1, 4))),
    _pds(32, SATELLITE, ExtensionRule(count_index=9, record=SATELLITE_BAND)),
    _pds(33, SATELLITE + SATELLITE_BAND + ENSEMBLE, ExtensionRule(trailing_index=9)),
    _pds_time_range(34, SATELLITE + SATELLITE_BAND + ENSEMBLE, trailing_index=9),
    _pds(40, CHEMICAL),
    _pds(41, CHEMICAL + ENSEMBLE),
    _pds_time_range(42, CHEMICAL),
    _pds_time_range(43, CHEMICAL + ENSEMBLE),
    _pds(44, AEROSOL),
    _pds(45, AEROSOL + ENSEMBLE),
    _pds_time_range(46, AEROSOL),
    _pds_time_range(47, AEROSOL + ENSEMBLE),
    _pds(48, (1, 1, 2, 1, -1, -4, -1, -4, 1, -1, -4, -1, -4, 1, 1, 1, 2, 1, 1, -4, 1, -1, -4, 1, -1, -4)),
    _pds(50, ANALYSIS + (1, 1, 4, 4, 4, 4)),
    _pds(51, ANALYSIS + (1,), ExtensionRule(count_index=15, record=CATEGORY)),
    _pds(53, PARTITIONED, ExtensionRule(trailing_index=3)),
    _pds(54, PARTITIONED + ENSEMBLE, ExtensionRule(trailing_index=3)),
    # atmospheric chemical constituents based on a distribution function
    _pds(57, (1, 1, 2, 2, 2, 2, 1), ExtensionRule(
        count_index=6,
        record=(1, -4, 1, 1, 1, 2, 1, 1, -4, 1, -1, -4, 1, -1, -4),
    )),
    _pds(60, ANALYSIS + ENSEMBLE + MODEL_VERSION),
    _pds_time_range(61, ANALYSIS + ENSEMBLE + MODEL_VERSION),
    _pds_time_range(91, ANALYSIS + (1,) + CATEGORY, trailing_index=15),
    # CCITT IA5 character string
    _pds(254, (1, 1, 4)),
    # cross-section of analysis and forecast
    _pds(1000, (1, 1, 1, 1, 1, 2, 1, 1, -4)),
    _pds(1001, (1, 1, 1, 1, 1, 2, 1, 1, -4, 4, 1, 1, 1, 4, 1, 4)),
    _pds(1002, (1, 1, 1, 1, 1, 2, 1, 1, -4, 1, 1, -4, 4, 1, -4)),
    # Hovmoller-type grid
    _pds(1100, (1, 1, 1, 1, 1, 2, 1, 1, -4, 1, -1, -4, 1, -1, -4)),
    _pds(1101, (1, 1, 1, 1, 1, 2, 1, 1, -4, 1, -1, -4, 1, -1, -4, 4, 1, 1, 1, 4, 1, 4)),
)
