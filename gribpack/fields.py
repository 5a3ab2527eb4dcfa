"""
A TemplateField is the "fundamental" datatype of a template: an integer stored
big-endian in a fixed number of octets.

When the width in the octet map is negative the value can be negative and it
is stored in sign-magnitude: the leftmost bit is the sign, the remaining bits
the absolute value. This is how GRIB2 represents negative numbers in every
section but the data one.
"""
import logging
from typing import List, Sequence, Tuple, Union

from .core import TemplateInstance
from .enum import TemplateCategory
from .streams import BitStream
from . import templates


logger = logging.getLogger(__name__)


class TemplateField(object):
    """One entry of a template."""

    def __init__(self, width: int, name=None):
        if width == 0:
            raise ValueError('a template entry can\'t be zero octets wide')

        self.width = width
        self.name = name

    def __repr__(self):
        return '<%s(%d%s)>' % (self.__class__.__name__, self.size, ', signed' if self.signed else '')

    @property
    def size(self) -> int:
        '''Number of octets'''
        return abs(self.width)

    @property
    def signed(self) -> bool:
        return self.width < 0

    @property
    def nbits(self) -> int:
        return self.size * 8

    def encode(self, value: int) -> int:
        '''Return the bit pattern representing value'''
        value = int(value)
        limit = 1 << (self.nbits - 1 if self.signed else self.nbits)

        if value < 0 and not self.signed:
            raise ValueError(f'{value} can\'t be stored in the unsigned entry {self.name} of {self.size} octets')

        if abs(value) >= limit:
            raise ValueError(f'{value} doesn\'t fit in the entry {self.name} of {self.size} octets')

        if value < 0:
            return (1 << (self.nbits - 1)) | -value

        return value

    def decode(self, pattern: int) -> int:
        if self.signed and pattern >> (self.nbits - 1):
            return -(pattern & ((1 << (self.nbits - 1)) - 1))

        return pattern

    def raw(self, value: int) -> bytes:
        return self.encode(value).to_bytes(self.size, 'big')

    def unpack(self, stream: BitStream) -> int:
        return self.decode(stream.read(self.nbits))

    def pack(self, stream: BitStream, value: int) -> None:
        stream.write(self.encode(value), self.nbits)


def fields_from_widths(widths: Sequence[int]) -> List[TemplateField]:
    return [TemplateField(width, name=idx) for idx, width in enumerate(widths)]


def unpack_template_values(stream: BitStream, instance: TemplateInstance) -> List[int]:
    return [field.unpack(stream) for field in fields_from_widths(instance.widths)]


def pack_template_values(stream: BitStream, instance: TemplateInstance, values: Sequence[int]) -> None:
    if len(values) != len(instance):
        raise ValueError(f'template {instance.descriptor.name} has {len(instance)} entries, {len(values)} values given')

    for field, value in zip(fields_from_widths(instance.widths), values):
        field.pack(stream, value)


def unpack_template(stream: BitStream, category: Union[TemplateCategory, int], number: int) -> Tuple[TemplateInstance, List[int]]:
    '''Read the values of a template from the stream.

    The static part is read first since, for the templates that need to be
    extended, it's what tells how many entries follow.'''
    descriptor = templates.lookup(category, number)

    values = [field.unpack(stream) for field in fields_from_widths(descriptor.static_widths)]

    instance = templates.extend(category, number, values)
    for field in fields_from_widths(instance.extension):
        values.append(field.unpack(stream))

    logger.debug('unpacked %d values for template %s', len(values), descriptor.name)

    return instance, values
