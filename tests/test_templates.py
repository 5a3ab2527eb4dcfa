import pytest

from gribpack import templates
from gribpack.core import ExtensionRule
from gribpack.enum import TemplateCategory
from gribpack.exceptions import TemplateNotFound


def test_drs_tables():
    assert templates.get_drs_template(0).static_widths == (4, -2, -2, 1, 1)
    assert templates.get_drs_template(40).static_widths == (4, -2, -2, 1, 1, 1, 1)
    assert templates.get_drs_template(41).static_widths == (4, -2, -2, 1, 1)
    assert templates.get_drs_template(50).static_widths == (4, -2, -2, 1, 4)
    assert len(templates.get_drs_template(3).static_widths) == 18
    assert templates.get_drs_template(40000).static_widths == templates.get_drs_template(40).static_widths
    assert templates.get_drs_template(40010).static_widths == templates.get_drs_template(41).static_widths


def test_pds_tables():
    analysis = templates.get_pds_template(0)

    assert analysis.static_widths == (1, 1, 1, 1, 1, 2, 1, 1, -4, 1, -1, -4, 1, -1, -4)
    assert not analysis.needs_extension
    assert analysis.name == '4.0'

    # 4.8 is 4.0 followed by the time range block
    time_range = templates.get_pds_template(8)
    assert time_range.static_widths[:15] == analysis.static_widths
    assert time_range.static_widths[15:] == (2, 1, 1, 1, 1, 1, 1, 4, 1, 1, 1, 4, 1, 4)
    assert time_range.needs_extension


def test_static_template_ignores_values():
    instance = templates.extend_drs_template(0)

    assert instance.widths == (4, -2, -2, 1, 1)
    assert instance.extension == ()
    assert instance.size == 10
    assert len(instance) == 5


def test_satellite_bands_extension():
    values = [0, 0, 0, 0, 3]
    instance = templates.extend_pds_template(30, values)

    assert len(instance.extension) == 15
    assert instance.extension == (2, 2, 1, 1, 4) * 3
    assert len(instance) == 20


def test_time_ranges_extension():
    values = [0] * 29

    for count, expected in ((0, ()), (1, ()), (2, (1, 1, 1, 4, 1, 4)), (3, (1, 1, 1, 4, 1, 4) * 2)):
        values[21] = count
        assert templates.extend_pds_template(8, values).extension == expected


def test_count_zero_and_one():
    assert templates.extend_pds_template(30, [0, 0, 0, 0, 0]).extension == ()
    assert templates.extend_pds_template(30, [0, 0, 0, 0, 1]).extension == (2, 2, 1, 1, 4)


def test_trailing_block():
    values = [0] * 31
    values[26] = 4

    assert templates.extend_pds_template(3, values).extension == (1, 1, 1, 1)


def test_time_ranges_and_trailing_block():
    values = [0] * 51
    values[26] = 2
    values[37] = 3

    instance = templates.extend_pds_template(13, values)

    assert instance.extension == (1, 1, 1, 4, 1, 4) * 2 + (1, 1)


def test_extension_is_deterministic():
    values = [0] * 29
    values[21] = 5

    first = templates.extend_pds_template(8, values)
    second = templates.extend_pds_template(8, list(values))

    assert first == second
    assert first is not second


def test_extension_needs_values():
    with pytest.raises(ValueError):
        templates.extend_pds_template(30)

    with pytest.raises(ValueError):
        templates.extend_pds_template(30, [0, 0])


def test_unknown_template():
    with pytest.raises(TemplateNotFound) as e:
        templates.get_pds_template(9999)

    assert e.value.number == 9999

    # 5.1 has never been validated
    with pytest.raises(TemplateNotFound):
        templates.extend(TemplateCategory.DRS, 1)

    with pytest.raises(TemplateNotFound):
        templates.lookup(5, 42)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        templates.REGISTRY[TemplateCategory.PDS][0] = None

    with pytest.raises(TypeError):
        templates.REGISTRY[TemplateCategory.DRS] = {}


def test_extension_rule():
    rule = ExtensionRule(count_index=0, record=(1, 2))

    assert rule.extension((1,), [2]) == (1, 2, 1, 2)
    assert rule.extension((1,), [-3]) == ()

    rule = ExtensionRule(count_index=0, map_offset=1, record_size=2, trailing_index=3)

    assert rule.extension((1, 2, 4, 1), [3, 0, 0, 2]) == (2, 4, 2, 4, 1, 1)
