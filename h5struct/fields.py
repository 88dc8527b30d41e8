"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a ByteSource given its absolute offset.
"""
import logging
import struct
from enum import Enum, Flag, auto

from bitstring import Bits

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency, ChunkPhase
from .exceptions import DecodeError, MagicException


class Field(FieldBase):
    """Base class to subclass from"""

    is_reserved = False

    def __init__(self, name=None, father=None, default=None, offset=None, \
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.relative_offset = offset  # with respect to the father, None means "after the previous field"
        self.offset = None             # absolute, known only after unpacking
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def __str__(self):
        return str(self.value)

    def is_compliant(self, level):
        '''Returns True if this field or, following INHERIT, one of its fathers asks for "level"'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _unpack(self, raw):
        raise NotImplementedError(f"method {self.__class__.__name__}._unpack() not implemented")

    def _check_magic(self, value):
        if self.is_magic and value != self.default:
            self.logger.warning('the magic for field \'%s\' doesn\'t correspond: %r', self.name, value)
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(message=f'wrong magic {value!r}')

    def unpack(self, source, offset):
        '''Read the field at the absolute offset and return the number of bytes consumed.'''
        self._phase = ChunkPhase.UNPACKING
        self.offset = offset

        size = self.size
        raw = source.read_at(offset, size)
        self.value = self._unpack(raw)
        self._check_magic(self.value)

        self._phase = ChunkPhase.DONE

        return size

    def freeze(self):
        return self.value


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __str__(self):
        width = self.size * 2
        formatter = '0x%%0%dx' % width
        return formatter % (self.value if not isinstance(self.value, Enum) else self.value.value,)

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        try:
            return self.enum(self.default)
        except ValueError:
            # not every enum has a member for zero
            return self.default

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _enum_lookup(self, value):
        # a Flag accepts any combination of bits, also the undefined ones
        if issubclass(self.enum, Flag):
            mask = 0
            for member in self.enum:
                mask |= member.value
            if value & ~mask:
                raise ValueError(f'0x{value:x} has bits outside 0x{mask:x}')

        return self.enum(value)

    def _unpack_enum(self, value):
        try:
            return self._enum_lookup(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise DecodeError(f'{self.enum.__name__} doesn\'t have element with value 0x{value:x}')

            self.logger.warning('enum %r doesn\'t have element with value 0x%x in it', self.enum, value)

        return value

    def _unpack(self, raw):
        value = struct.unpack(self.get_format(), raw)[0]
        if self.enum:
            value = self._unpack_enum(value)

        return value


class UIntField(Field):
    """Unsigned integer of arbitrary width in bytes, possibly known only at unpack time
    via a Dependency.

    The bytes are interpreted as an unsigned quantity and the missing high-order
    bytes of the resulting python integer are zero, whatever the width."""

    def __init__(self, width, default=0, **kw):
        if not isinstance(width, (int, Dependency)):
            raise ValueError('width \'%s\' must be of the right type' % width.__class__.__name__)

        self.width = width
        super().__init__(default=default, **kw)

    def _get_size(self):
        width = self.width.resolve(self) if isinstance(self.width, Dependency) else self.width

        if width < 1:
            raise DecodeError(f'invalid width {width} for an unsigned integer')

        return width

    def _unpack(self, raw):
        if self.endianess == Endianess.LITTLE_ENDIAN:
            raw = raw[::-1]

        return Bits(raw).uint


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __len__(self):
        return self.length

    def value_from_default(self):
        return b'\x00' * self.length if not self.default else self.default

    def _get_size(self):
        return self.length

    def _unpack(self, raw):
        return raw


class ReservedField(StringField):
    """Bytes that occupy space in the layout but carry no information."""

    is_reserved = True


class SelectField(Field):
    """Allow to select the kind of final field based on the value of a sibling field.
    You need to pass the name of the field to use as key and a dictionary with the mapping
    between value and field. You can use Type.DEFAULT as a default.

    Like in the following example we have a format the use the first 4 bytes to indicate what
    follows: for value one you have another 4 bytes, otherwise you have a 16 bytes string

        class DummyChunk(Chunk):
            type = fields.StructField('I')
            data = fields.SelectField('type', {
                1: fields.StructField('I'),
                fields.SelectField.Type.DEFAULT: fields.StringField(0x10),
            })

    If "length" is given the field occupies always that amount of bytes, whatever
    the selected field is.
    """
    class Type(Flag):
        DEFAULT = auto()

    def __init__(self, key, mapping, length=None, **kw):
        self._key = key
        self._mapping = mapping
        self._length = length
        self._field = None

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}{self._field!r}>'

    def init(self):
        pass

    @property
    def value(self):
        return self._field.value if self._field else None

    def _get_size(self):
        if self._length is not None:
            return self._length

        return self._field.size

    def select(self):
        field_key = getattr(self.father, self._key)
        self.logger.debug('resolving key \'%s\' with value %r', self._key, field_key.value)

        key = field_key.value if field_key.value in self._mapping else SelectField.Type.DEFAULT

        if key not in self._mapping:
            raise DecodeError(f'no field available for {self._key}={field_key.value!r}')

        self._field = self._mapping[key].create(father=self.father)
        self._field.name = self.name

        return self._field

    def unpack(self, source, offset):
        self._phase = ChunkPhase.UNPACKING
        self.offset = offset

        field = self.select()
        size = field.unpack(source, offset)

        if self._length is not None and size > self._length:
            raise DecodeError(f'{field.__class__.__name__} needs {size} bytes but only {self._length} are available')

        self._phase = ChunkPhase.DONE

        return self.size

    def freeze(self):
        return self._field.freeze()
