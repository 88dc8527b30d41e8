class H5StructException(Exception):
    '''Base class to extend in order to throw exception in h5struct.

    The attribute "chain" lists the names of the layers that caused the
    exception, innermost first: every chunk the exception passes through
    appends the name of the field that was unpacking.
    '''

    def __init__(self, chain=None, message=''):
        self.chain = [] if chain is None else chain
        self.message = message
        super().__init__(message)

    @property
    def path(self):
        return '.'.join(reversed(self.chain))

    def __str__(self):
        if not self.chain:
            return self.message

        return f'{self.message} (at field \'{self.path}\')'


class SourceUnavailable(H5StructException):
    '''The bytes could not be obtained at all (missing or unreadable file).'''

    def __init__(self, path, reason, chain=None):
        self.path_source = path
        self.reason = reason
        super().__init__(chain=chain, message=f'cannot read \'{path}\': {reason}')


class UnpackException(H5StructException):
    pass


class UnexpectedEndOfData(UnpackException):
    '''A read asked for more bytes than the source contains.'''

    def __init__(self, offset, length, available, chain=None):
        self.offset = offset
        self.length = length
        self.available = available
        super().__init__(
            chain=chain,
            message=f'requested {length} bytes at offset {offset} but the source has only {available} bytes')


class DecodeError(UnpackException):
    '''The bytes are there but they don't make sense for the layout.'''

    def __init__(self, message, chain=None):
        super().__init__(chain=chain, message=message)


class MagicException(H5StructException):
    pass


class NotFormatMatch(MagicException):

    def __init__(self, label, chain=None):
        self.label = label
        super().__init__(chain=chain, message=f'Input file is not HDF5 format: {label}')
