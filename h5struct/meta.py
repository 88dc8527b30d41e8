import copy
import logging
from collections import namedtuple
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Gives every chunk instance its own copy of the field declared in the class."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.field

        data = instance.__dict__

        if self.field.name not in data:
            logger.debug("create new field for field named '%s'", self.field.name)
            data[self.field.name] = self.field.create(father=instance)

        return data[self.field.name]

    def __set__(self, instance, value):
        if not isinstance(value, self.field.__class__):
            raise AttributeError(f"field '{self.field.name}' can only be replaced by a {self.field.__class__.__name__}")

        value.father = instance
        value.name = self.field.name
        instance.__dict__[self.field.name] = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Class containing metadata about the abstraction"""

    def __init__(self, name):
        self.name = name
        self.fields = []
        self._record = None

    def get_record(self, names):
        '''Immutable type used to freeze the chunk, built the first time it's needed.'''
        if self._record is None:
            self._record = namedtuple(f'{self.name}Record', names)

        return self._record


class MetaChunk(type):

    def __new__(cls, name, bases, attrs):
        '''Like Django models: the attributes able to contribute to the chunk
        become fields, everything else is left as it is.'''
        prototypes = {_k: _v for _k, _v in attrs.items() if isinstance(_v, FieldBase)}
        plain_attrs = {_k: _v for _k, _v in attrs.items() if _k not in prototypes}

        new_cls = super().__new__(cls, name, bases, plain_attrs)
        new_cls._meta = Meta(name)

        # handle inheritance: the descriptors are found via the MRO
        for parent in bases:
            if isinstance(parent, MetaChunk):
                new_cls._meta.fields.extend(parent._meta.fields)

        for field_name, prototype in prototypes.items():
            new_cls.add_to_class(field_name, prototype)

        return new_cls

    def add_to_class(cls, name, value):
        logger.debug('contribute_to_chunk() found for field \'%s\'', name)
        value.contribute_to_chunk(cls, name)
        cls._meta.fields.append(name)
