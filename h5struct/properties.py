import logging
from enum import Enum, auto

from .exceptions import DecodeError


class ChunkPhase(Enum):
    '''Enum to state the actual phase of a chunk'''
    INIT      = 0
    UNPACKING = auto()
    DONE      = auto()


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            width = fields.StructField('B')
            address = fields.UIntField(Dependency('.width'))

    and have the width of "address" read from the field named "width"
    at the moment "address" is unpacked.

    The expression follows the module resolution syntax:

     - '.' as first char indicates a field at the same level (i.e. a sibling)
     - otherwise the path is resolved starting from the root chunk
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path = self.expression.split('.')
        # '.miao'.split(".") -> ['', 'miao']
        # 'miao'.split(".") -> ['miao']

        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        if field is None:
            raise DecodeError(f'cannot resolve \'{self.expression}\' for a field without father')

        self.logger.debug('resolving \'%s\' starting from \'%s\'', self.expression, field.__class__.__name__)

        for component_name in fields_path:
            field = getattr(field, component_name)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        field = self.resolve_field(instance)

        if field._phase != ChunkPhase.DONE:
            raise DecodeError(f'\'{self.expression}\' has not been unpacked yet')

        self.logger.debug(' resolved \'%s\' with value %s', self.expression, field.value)

        return int(field.value)
