'''
Data types specific to the HDF5 superblock.
'''
from ... import fields
from ...properties import Dependency


SIGNATURE = bytes([137, 72, 68, 70, 13, 10, 26, 10])


class SignatureField(fields.StringField):
    '''The eight bytes "\\211HDF\\r\\n\\032\\n" that start every file.'''

    def __init__(self, **kwargs):
        super().__init__(default=SIGNATURE, is_magic=True, **kwargs)


class AddressField(fields.UIntField):
    '''Address into the file, its width is the "size of offsets" of the superblock.

    The address with all the bits set is the "undefined address" and
    is represented as None.'''

    def __init__(self, **kwargs):
        super().__init__(Dependency('size_of_offsets'), **kwargs)

    def _unpack(self, raw):
        if raw == b'\xff' * len(raw):
            return None

        return super()._unpack(raw)
