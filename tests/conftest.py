import logging
import os
import struct

import pytest

from h5struct.common.checksum import lookup3
from h5struct.scientific.hdf5 import SIGNATURE


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


def _address(value, size):
    if value is None:
        return b'\xff' * size

    return value.to_bytes(size, 'little')


@pytest.fixture
def base_header():
    '''Signature followed by the six big-endian words of the base field table.'''
    def _build(values=(0, 0, 0, 0, 8, 8), signature=SIGNATURE):
        data = bytearray(22)
        data[:8] = signature
        for offset, value in zip((8, 10, 12, 16, 18, 20), values):
            struct.pack_into('>H', data, offset, value)

        return bytes(data)

    return _build


@pytest.fixture
def superblock_v0():
    '''A version 0 (or 1) superblock like the ones written by the HDF5 library.'''
    def _build(version=0, size_of_offsets=8, size_of_lengths=8, cache_type=1, end_of_file=800):
        data = SIGNATURE + bytes([version, 0, 0, 0, 0, size_of_offsets, size_of_lengths, 0])
        data += struct.pack('<HHI', 4, 16, 0)
        if version == 1:
            data += struct.pack('<HH', 32, 0)

        data += _address(0, size_of_offsets)
        data += _address(None, size_of_offsets)
        data += _address(end_of_file, size_of_offsets)
        data += _address(None, size_of_offsets)

        # root group symbol table entry
        data += _address(0, size_of_offsets)
        data += _address(96, size_of_offsets)
        data += struct.pack('<II', cache_type, 0)
        if cache_type == 1:
            scratch = _address(136, size_of_offsets) + _address(680, size_of_offsets)
        elif cache_type == 2:
            scratch = struct.pack('<I', 0x20)
        else:
            scratch = b'\xab' * 16
        data += scratch.ljust(16, b'\x00')

        return data

    return _build


@pytest.fixture
def superblock_v2():
    def _build(version=2, size_of_offsets=8, flags=0, end_of_file=2048, checksum=None):
        data = SIGNATURE + bytes([version, size_of_offsets, 8, flags])
        data += _address(0, size_of_offsets)
        data += _address(None, size_of_offsets)
        data += _address(end_of_file, size_of_offsets)
        data += _address(48, size_of_offsets)

        return data + struct.pack('<I', lookup3(data) if checksum is None else checksum)

    return _build


@pytest.fixture
def h5_path(tmp_path, base_header):
    path = tmp_path / 'e300.h5'
    path.write_bytes(base_header() + b'\x00' * 64)

    return path
