from enum import IntEnum, IntFlag

import pytest

from h5struct.core import Chunk
from h5struct.enum import Compliant
from h5struct.exceptions import DecodeError, MagicException, UnexpectedEndOfData
from h5struct.fields import StructField, UIntField, StringField, ReservedField, SelectField
from h5struct.meta import Endianess
from h5struct.properties import Dependency
from h5struct.streams import ByteSource


class DummyEnum(IntEnum):
    NONE = 0
    FIRST = 1
    SECOND = 2


def test_structfield_endianess():
    source = ByteSource(b'\x00\x08')

    big = StructField('H', endianess=Endianess.BIG_ENDIAN)
    little = StructField('H')

    assert big.size == 2
    assert big.unpack(source, 0) == 2
    assert big.value == 8
    assert big.offset == 0

    little.unpack(source, 0)
    assert little.value == 0x0800


def test_structfield_unsigned():
    field = StructField('H', endianess=Endianess.BIG_ENDIAN)
    field.unpack(ByteSource(b'\xff\xff'), 0)

    assert field.value == 0xffff


def test_structfield_enum():
    field = StructField('I', enum=DummyEnum, compliant=Compliant.ENUM)

    assert field.value == DummyEnum.NONE

    field.unpack(ByteSource(b'\x02\x00\x00\x00'), 0)
    assert field.value == DummyEnum.SECOND

    with pytest.raises(DecodeError):
        field.unpack(ByteSource(b'\x04\x00\x00\x00'), 0)


def test_structfield_enum_not_compliant():
    field = StructField('I', enum=DummyEnum, compliant=Compliant.NONE)

    field.unpack(ByteSource(b'\x04\x00\x00\x00'), 0)

    assert field.value == 4


def test_structfield_short_read():
    field = StructField('I')

    with pytest.raises(UnexpectedEndOfData):
        field.unpack(ByteSource(b'\x01\x02\x03'), 0)


@pytest.mark.parametrize('raw,endianess,expected', [
    (b'\xfe', Endianess.LITTLE_ENDIAN, 0xfe),
    (b'\xff\xfe', Endianess.BIG_ENDIAN, 0xfffe),
    (b'\xff\xfe', Endianess.LITTLE_ENDIAN, 0xfeff),
    (b'\x01\x00\x00', Endianess.LITTLE_ENDIAN, 1),
    (b'\x80' + b'\x00' * 15, Endianess.BIG_ENDIAN, 1 << 127),
])
def test_uintfield_zero_extends(raw, endianess, expected):
    field = UIntField(len(raw), endianess=endianess)

    assert field.unpack(ByteSource(raw), 0) == len(raw)
    assert field.value == expected
    assert field.value >= 0


def test_uintfield_invalid_width():
    field = UIntField(0)

    with pytest.raises(DecodeError):
        field.unpack(ByteSource(b'\x00'), 0)

    with pytest.raises(ValueError):
        UIntField('8')


def test_uintfield_dependency():
    class Dummy(Chunk):
        width = StructField('B')
        address = UIntField(Dependency('.width'))
        trailer = StructField('B')

    dummy = Dummy(b'\x03\x01\x02\x03\xaa')

    assert dummy.address.size == 3
    assert dummy.address.value == 0x030201
    assert dummy.trailer.value == 0xaa
    assert dummy.trailer.offset == 4


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field) == 0x10
    assert field.value == b'\x00' * 0x10

    data = bytes(range(0x10))
    field.unpack(ByteSource(data), 0)

    assert field.value == data

    with pytest.raises(ValueError):
        StringField()


def test_stringfield_magic():
    field = StringField(default=b'MAGIC', is_magic=True, compliant=Compliant.MAGIC)

    field.unpack(ByteSource(b'MAGIC'), 0)

    with pytest.raises(MagicException):
        field.unpack(ByteSource(b'MAGIX'), 0)


def test_stringfield_magic_not_compliant():
    field = StringField(default=b'MAGIC', is_magic=True, compliant=Compliant.NONE)

    field.unpack(ByteSource(b'MAGIX'), 0)

    assert field.value == b'MAGIX'


def test_reservedfield():
    assert ReservedField(4).is_reserved
    assert not StringField(4).is_reserved


def test_selectfield():
    class Dummy(Chunk):
        type = StructField('B', enum=DummyEnum)
        data = SelectField('type', {
            DummyEnum.FIRST: StructField('I', default=0xcafebabe),
            DummyEnum.SECOND: StringField(0x4),
            SelectField.Type.DEFAULT: StructField('H'),
        }, length=4)
        trailer = StructField('B')

    first = Dummy(b'\x01\xef\xbe\xad\xde\x99')
    assert first.data.value == 0xdeadbeef
    assert first.trailer.value == 0x99

    second = Dummy(b'\x02AUAU\x99')
    assert second.data.value == b'AUAU'

    default = Dummy(b'\x00\x01\x00\xff\xff\x99')
    assert default.data.value == 1
    assert default.data.size == 4
    assert default.trailer.value == 0x99


def test_selectfield_too_large():
    class Dummy(Chunk):
        type = StructField('B')
        data = SelectField('type', {
            SelectField.Type.DEFAULT: StructField('Q'),
        }, length=4)

    with pytest.raises(DecodeError) as excinfo:
        Dummy(b'\x00' * 9)

    assert excinfo.value.chain == ['data']


class DummyFlags(IntFlag):
    NONE = 0
    READ = 0x01
    WRITE = 0x04


def test_structfield_flag_undefined_bits():
    field = StructField('B', enum=DummyFlags, compliant=Compliant.ENUM)

    field.unpack(ByteSource(b'\x05'), 0)
    assert field.value == DummyFlags.READ | DummyFlags.WRITE

    with pytest.raises(DecodeError):
        field.unpack(ByteSource(b'\x02'), 0)


def test_structfield_flag_undefined_bits_not_compliant():
    field = StructField('B', enum=DummyFlags, compliant=Compliant.NONE)

    field.unpack(ByteSource(b'\x03'), 0)

    assert field.value == 3


def test_uintfield_dependency_not_unpacked_yet():
    class Dummy(Chunk):
        address = UIntField(Dependency('.width'))
        width = StructField('B')

    with pytest.raises(DecodeError) as excinfo:
        Dummy(b'\x02\x01\x00')

    assert 'not been unpacked' in str(excinfo.value)
    assert excinfo.value.chain == ['address']
