'''
We are implementing fields to handle checksum verification.
'''
import struct

from .. import fields
from ..enum import Compliant
from ..exceptions import DecodeError
from ..properties import get_root_from_chunk


MASK = 0xffffffff


def _rot(x, k):
    return ((x << k) | (x >> (32 - k))) & MASK


def _mix(a, b, c):
    a = (a - c) & MASK; a ^= _rot(c, 4);  c = (c + b) & MASK
    b = (b - a) & MASK; b ^= _rot(a, 6);  a = (a + c) & MASK
    c = (c - b) & MASK; c ^= _rot(b, 8);  b = (b + a) & MASK
    a = (a - c) & MASK; a ^= _rot(c, 16); c = (c + b) & MASK
    b = (b - a) & MASK; b ^= _rot(a, 19); a = (a + c) & MASK
    c = (c - b) & MASK; c ^= _rot(b, 4);  b = (b + a) & MASK

    return a, b, c


def _final(a, b, c):
    c ^= b; c = (c - _rot(b, 14)) & MASK
    a ^= c; a = (a - _rot(c, 11)) & MASK
    b ^= a; b = (b - _rot(a, 25)) & MASK
    c ^= b; c = (c - _rot(b, 16)) & MASK
    a ^= c; a = (a - _rot(c, 4)) & MASK
    b ^= a; b = (b - _rot(a, 14)) & MASK
    c ^= b; c = (c - _rot(b, 24)) & MASK

    return a, b, c


def lookup3(data: bytes, initval: int = 0) -> int:
    '''Bob Jenkins' lookup3 hash (hashlittle()), see <http://burtleburtle.net/bob/c/lookup3.c>.

    The data is consumed in blocks of 12 bytes read as three little-endian words;
    the last block (from 1 to 12 bytes) is zero padded and goes through the final
    mixing, an empty input returns the initial state.'''
    length = len(data)
    a = b = c = (0xdeadbeef + length + initval) & MASK

    offset = 0
    while length - offset > 12:
        k0, k1, k2 = struct.unpack_from('<3I', data, offset)
        a = (a + k0) & MASK
        b = (b + k1) & MASK
        c = (c + k2) & MASK
        a, b, c = _mix(a, b, c)
        offset += 12

    if length == offset:
        return c

    tail = data[offset:] + b'\x00' * (12 - (length - offset))
    k0, k1, k2 = struct.unpack('<3I', tail)
    a = (a + k0) & MASK
    b = (b + k1) & MASK
    c = (c + k2) & MASK
    a, b, c = _final(a, b, c)

    return c


class ChecksumField(fields.StructField):
    """Checksum stored as a little-endian 32 bit word and computed with lookup3 over
    all the bytes from the start of the root chunk up to the field itself.
    """

    def __init__(self, *args, **kwargs):
        super().__init__('I', *args, **kwargs)
        self.expected = None

    def calculate(self, source, offset):
        start = get_root_from_chunk(self).offset or 0

        return lookup3(source.read_at(start, offset - start))

    def unpack(self, source, offset):
        size = super().unpack(source, offset)

        self.expected = self.calculate(source, offset)
        if self.value != self.expected:
            self.logger.warning('checksum mismatch: stored 0x%08x, calculated 0x%08x', self.value, self.expected)
            if self.is_compliant(Compliant.CHECKSUM):
                raise DecodeError(f'checksum mismatch: stored 0x{self.value:08x}, calculated 0x{self.expected:08x}')

        return size
