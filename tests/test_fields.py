import pytest

from gribpack import templates
from gribpack.enum import TemplateCategory
from gribpack.exceptions import TemplateNotFound
from gribpack.fields import (
    TemplateField,
    pack_template_values,
    unpack_template,
    unpack_template_values,
)
from gribpack.streams import BitStream


def test_sign_magnitude():
    """Negative values have the leftmost bit set and the absolute value
    in the remaining ones (it's not two's complement)."""
    field = TemplateField(-2)

    assert field.signed
    assert field.size == 2
    assert field.encode(-5) == 0x8005
    assert field.raw(-1) == b'\x80\x01'
    assert field.raw(1) == b'\x00\x01'
    assert field.decode(0x8005) == -5
    assert field.decode(0x0005) == 5


def test_unsigned():
    field = TemplateField(4)

    assert not field.signed
    assert field.raw(0x3f800000) == b'\x3f\x80\x00\x00'
    assert field.decode(0x80000000) == 0x80000000

    with pytest.raises(ValueError):
        field.encode(-1)


def test_overflow():
    with pytest.raises(ValueError):
        TemplateField(1).encode(256)

    assert TemplateField(-1).encode(-127) == 0xff

    with pytest.raises(ValueError):
        TemplateField(-1).encode(128)


def test_zero_width():
    with pytest.raises(ValueError):
        TemplateField(0)


def test_template_values_through_stream():
    values = [0x3f800000, -3, 2, 12, 0]
    instance = templates.extend_drs_template(0)

    stream = BitStream(instance.size)
    pack_template_values(stream, instance, values)

    assert stream.getvalue() == b'\x3f\x80\x00\x00\x80\x03\x00\x02\x0c\x00'

    stream.seek(0)
    assert unpack_template_values(stream, instance) == values


def test_wrong_number_of_values():
    instance = templates.extend_drs_template(0)

    with pytest.raises(ValueError):
        pack_template_values(BitStream(instance.size), instance, [1, 2, 3])


def test_unpack_extended_template():
    values = [3, 7, 1, 2, 2] + [10, 20, 1, 0, 100] + [11, 21, 2, 0, 200]
    instance = templates.extend_pds_template(30, values)

    stream = BitStream(instance.size)
    pack_template_values(stream, instance, values)

    stream.seek(0)
    unpacked_instance, unpacked = unpack_template(stream, TemplateCategory.PDS, 30)

    assert unpacked == values
    assert unpacked_instance == instance
    assert stream.bits_remaining() == 0


def test_unpack_unknown_template():
    with pytest.raises(TemplateNotFound):
        unpack_template(BitStream(16), TemplateCategory.DRS, 1)


def test_error_names_the_entry():
    instance = templates.extend_drs_template(0)

    with pytest.raises(ValueError, match='entry 3 of 1 octets'):
        pack_template_values(BitStream(instance.size), instance, [0, 0, 0, 300, 0])

    with pytest.raises(ValueError, match='unsigned entry 0 of 4 octets'):
        pack_template_values(BitStream(instance.size), instance, [-1, 0, 0, 8, 0])


def test_negative_forecast_time():
    """Analyses can refer to a time before the reference time of the message."""
    values = [0, 2, 2, 0, 96, 0, 0, 1, -6, 1, 0, 0, 255, 0, 0]
    instance = templates.extend_pds_template(0, values)

    stream = BitStream(instance.size)
    pack_template_values(stream, instance, values)

    assert stream.getvalue()[9:13] == b'\x80\x00\x00\x06'

    stream.seek(0)
    assert unpack_template(stream, TemplateCategory.PDS, 0)[1] == values
