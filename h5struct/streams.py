import io
import logging
import os

from .exceptions import SourceUnavailable, UnexpectedEndOfData


logger = logging.getLogger(__name__)


class ByteSource(object):
    '''This is a simple wrapper around bytes/file objects to uniform
    their access: the only way to get data out of it is read_at(), an
    absolute-offset read of an exact number of bytes.

    There is no cursor visible from outside so a field can never depend
    on where the previous one stopped reading.'''

    def __init__(self, obj, label=None):
        '''Here we normalize the object looking at its type'''
        self._type = type(obj)
        self._owned = False
        self.obj = obj
        self.label = label

        if isinstance(obj, os.PathLike):
            self.obj = os.fspath(obj)

        init_method_name = 'init_%s' % self.obj.__class__.__name__
        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to read from' % self._type.__name__)

        init_method()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.label!r}, size={self.size})>'

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'', self.obj)
        if self.label is None:
            self.label = self.obj

        try:
            handle = open(self.obj, 'rb')
        except OSError as e:
            raise SourceUnavailable(self.obj, e.strerror or str(e)) from e

        self._owned = True
        self.obj = handle
        self.init_BufferedReader()

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = memoryview(bytes(self.obj))
        self.size = len(self.obj)
        self._read = self._read_memory

        if self.label is None:
            self.label = '<memory>'

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_BufferedReader(self):
        '''A random access binary file'''
        self.size = self.obj.seek(0, io.SEEK_END)
        self._read = self._read_handle

        if self.label is None:
            self.label = getattr(self.obj, 'name', '<handle>')

    init_BytesIO = init_BufferedReader
    init_FileIO = init_BufferedReader

    def _read_memory(self, offset, length):
        return bytes(self.obj[offset:offset + length])

    def _read_handle(self, offset, length):
        self.obj.seek(offset)
        return self.obj.read(length)

    def read_at(self, offset, length):
        if offset < 0 or length < 0:
            raise ValueError(f'offset and length must be non-negative (got offset={offset}, length={length})')

        logger.debug('reading %d bytes at offset 0x%08x from %s', length, offset, self.label)

        if offset + length > self.size:
            raise UnexpectedEndOfData(offset, length, self.size)

        data = self._read(offset, length)

        # a file can shrink under our feet
        if len(data) != length:
            raise UnexpectedEndOfData(offset, length, offset + len(data))

        return data

    def close(self):
        if self._owned:
            self.obj.close()
            self._owned = False


def load(path):
    '''Read the whole file in memory.'''
    logger.debug('loading \'%s\'', path)
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise SourceUnavailable(path, e.strerror or str(e)) from e

    return ByteSource(data, label=os.fspath(path))
