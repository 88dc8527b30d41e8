"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import ByteSource
from .exceptions import H5StructException
from .properties import (
    get_root_from_chunk,
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks.

    The fields are unpacked in the order of declaration: a field with an explicit
    offset is read there (relative to the start of the chunk), the others follow the
    previous one. The bytes not covered by any field are simply skipped.
    """

    record = None

    def __init__(self, source=None, **kwargs):
        super().__init__(**kwargs)

        if source is not None:
            if not isinstance(source, ByteSource):
                source = ByteSource(source)
            self.logger.debug('unpacking \'%s\' from %s', self.__class__.__name__, source)
            self.unpack(source)

    def init(self):
        pass

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        '''The field table: name -> (offset relative to the chunk, size)'''
        result = {}
        end = 0
        for name, field in self.get_fields():
            start = end if field.relative_offset is None else field.relative_offset
            result[name] = (start, field.size)
            end = start + field.size

        return result

    def _get_size(self):
        size = 0
        for offset, field_size in self.layout.values():
            size = offset + field_size

        return size

    def unpack(self, source, offset=0):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The source is accessed only via absolute offsets: the chunk keeps its own
        cursor to place the fields without explicit offset one after the other.

        Any exception coming from a field is re-raised as it is, with the name
        of the field appended to its chain.
        '''
        self._phase = ChunkPhase.UNPACKING
        self.offset = offset

        cursor = offset
        for field_name, field in self.get_fields():
            start = cursor if field.relative_offset is None else offset + field.relative_offset
            self.logger.debug('unpacking %s.%s at offset 0x%08x', self.__class__.__name__, field_name, start)

            try:
                size = field.unpack(source, start)
            except H5StructException as e:
                e.chain.append(field_name)
                raise

            cursor = start + size

        self._phase = ChunkPhase.DONE

        return cursor - offset

    def freeze(self):
        '''Build the immutable counterpart of this chunk; reserved fields are left out.'''
        values = {name: field.freeze() for name, field in self.get_fields() if not field.is_reserved}
        record = self.record or self._meta.get_record(list(values.keys()))

        return record(**values)
