"""
# GRIB2 codec core.

A GRIB2 message is a sequence of numbered sections; the description of a
field is split between the templates of the Product Definition Section
(Section 4) and of the Data Representation Section (Section 5), and the
packed values of the field live in the Data Section (Section 7).

Three layers are defined here:

 1. bits and streams: reading and writing unsigned integers of any width
    at any bit offset of a byte buffer (``gribpack.bits``, ``gribpack.streams``)

 2. templates: the octet maps of the templates, with the rules to extend
    the ones whose length depends on their own content
    (``gribpack.templates``, ``gribpack.fields``)

 3. packing: the conversion between the floating point values of the field
    and the data section, with the simple, JPEG 2000 and PNG algorithms
    (``gribpack.packing``, ``gribpack.sections``)

Everything is synchronous and nothing is cached or shared between calls
except the template tables, that are read-only.
"""
