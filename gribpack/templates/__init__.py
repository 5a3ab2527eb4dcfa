'''
# Template registry

The tables of the Product Definition Templates (Section 4) and of the Data
Representation Templates (Section 5) are built once, at import time, and are
never modified after that: every request builds its own TemplateInstance,
nothing is cached.

    >>> instance = extend(TemplateCategory.PDS, 30, [0, 0, 0, 0, 3])
    >>> instance.extension[:5]
    (2, 2, 1, 1, 4)

Unknown numbers raise TemplateNotFound, that the caller can treat as a
recoverable condition for the single field.
'''
import logging
from types import MappingProxyType
from typing import Dict, Sequence, Union

from ..core import TemplateDescriptor, TemplateInstance
from ..enum import TemplateCategory
from ..exceptions import TemplateNotFound
from . import drs, pds


logger = logging.getLogger(__name__)


def _build_table(templates) -> Dict[int, TemplateDescriptor]:
    return MappingProxyType({_.number: _ for _ in templates})


REGISTRY = MappingProxyType({
    TemplateCategory.PDS: _build_table(pds.TEMPLATES),
    TemplateCategory.DRS: _build_table(drs.TEMPLATES),
})


def lookup(category: Union[TemplateCategory, int], number: int) -> TemplateDescriptor:
    '''Return the static description of the template 'category.number'.'''
    category = TemplateCategory(category)

    try:
        return REGISTRY[category][number]
    except KeyError:
        logger.warning('%s Template %d.%d not defined', category.name, category.value, number)
        raise TemplateNotFound(f'{category.name} Template {category.value}.{number} not defined', number=number)


def extend(category: Union[TemplateCategory, int], number: int, values: Sequence[int] = None) -> TemplateInstance:
    '''Return the full octet map of the template 'category.number'.

    Some templates vary depending on the values given in an earlier part of the
    template itself: for them ``values`` must contain (at least) the entries the
    rule of the template depends on. For the others ``values`` is ignored.'''
    descriptor = lookup(category, number)

    if not descriptor.needs_extension:
        return TemplateInstance(descriptor)

    if values is None:
        raise ValueError(f'template {descriptor.name} needs its values to be extended')

    extension = descriptor.rule.extension(descriptor.static_widths, values)
    logger.debug('template %s extended with %d entries', descriptor.name, len(extension))

    return TemplateInstance(descriptor, extension)


def get_drs_template(number: int) -> TemplateDescriptor:
    return lookup(TemplateCategory.DRS, number)


def get_pds_template(number: int) -> TemplateDescriptor:
    return lookup(TemplateCategory.PDS, number)


def extend_drs_template(number: int, values: Sequence[int] = None) -> TemplateInstance:
    return extend(TemplateCategory.DRS, number, values)


def extend_pds_template(number: int, values: Sequence[int] = None) -> TemplateInstance:
    return extend(TemplateCategory.PDS, number, values)
