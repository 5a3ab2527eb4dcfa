"""
Types describing the layout of a GRIB2 template.

A template is a sequence of entries and each entry is stored in a number of
octets: the map of these numbers is known statically for each template, but
some templates have a variable part whose length depends on values given in
an earlier part of the same template (like the number of time ranges in
Product Definition Template 4.8). The variable part is described by an
ExtensionRule, that is data and not code, so that every template carries
its own rule and the registry never needs to special-case a number.

Negative widths indicate that the entry can contain negative values (stored
in sign-magnitude with the leftmost bit set), the octets occupied are always
the absolute value.
"""
from typing import NamedTuple, Optional, Sequence, Tuple

from .enum import TemplateCategory


class ExtensionRule(NamedTuple):
    '''How the octet map of a template grows from its runtime values.

    There are three kinds of blocks, appended in this order:

     1. with ``map_offset`` the ``record_size`` widths of the static map starting
        at that offset are replicated ``values[count_index] - 1`` times (the
        first record is already part of the static map);
     2. with ``record`` the given widths are replicated ``values[count_index]``
        times;
     3. with ``trailing_index`` a block of ``values[trailing_index]`` one
        octet entries follows.
    '''
    count_index: Optional[int] = None
    map_offset: Optional[int] = None
    record: Tuple[int, ...] = ()
    trailing_index: Optional[int] = None
    record_size: int = 6

    def _value_at(self, values: Sequence[int], index: int) -> int:
        try:
            count = int(values[index])
        except IndexError:
            raise ValueError(f'the template values have {len(values)} entries, the count is at index {index}')

        return max(count, 0)

    def extension(self, static_widths: Sequence[int], values: Sequence[int]) -> Tuple[int, ...]:
        widths = []

        if self.count_index is not None:
            count = self._value_at(values, self.count_index)
            if self.map_offset is not None:
                block = tuple(static_widths[self.map_offset:self.map_offset + self.record_size])
                widths.extend(block * max(count - 1, 0))
            else:
                widths.extend(self.record * count)

        if self.trailing_index is not None:
            widths.extend((1,) * self._value_at(values, self.trailing_index))

        return tuple(widths)


class TemplateDescriptor(NamedTuple):
    '''The static description of a template: one for each registered number.'''
    category: TemplateCategory
    number: int
    static_widths: Tuple[int, ...]
    rule: Optional[ExtensionRule] = None

    @property
    def needs_extension(self) -> bool:
        return self.rule is not None

    @property
    def name(self) -> str:
        return '%d.%d' % (self.category.value, self.number)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name}, {len(self.static_widths)} entries)>'


class TemplateInstance(object):
    '''The resolved map of a template, built for a single request.'''

    def __init__(self, descriptor: TemplateDescriptor, extension: Tuple[int, ...] = ()):
        self.descriptor = descriptor
        self.extension = tuple(extension)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.descriptor.name}, widths={self.widths!r})>'

    def __len__(self):
        return len(self.descriptor.static_widths) + len(self.extension)

    def __eq__(self, other):
        if not isinstance(other, TemplateInstance):
            return NotImplemented
        return self.descriptor == other.descriptor and self.extension == other.extension

    @property
    def number(self) -> int:
        return self.descriptor.number

    @property
    def category(self) -> TemplateCategory:
        return self.descriptor.category

    @property
    def widths(self) -> Tuple[int, ...]:
        return self.descriptor.static_widths + self.extension

    @property
    def size(self) -> int:
        '''Number of octets occupied by all the entries'''
        return sum(abs(_) for _ in self.widths)
