'''
# Hierarchical Data Format 5

Container format for scientific data: a file starts with an eight bytes
signature followed by the superblock, that describes the versions of the
structures and the widths of the addresses and lengths used in the rest
of the file.

The specification is at <https://support.hdfgroup.org/HDF5/doc/H5.format.html>.

Two readings of the header are available:

 1. parse_superblock(): the base field table, six big-endian 16 bit words
    at fixed offsets
 2. decode_superblock(): the real layout chosen by the version byte, with
    addresses as wide as the "size of offsets"
'''
import logging
from typing import NamedTuple

from ...fields import StructField
from ...core import Chunk
from ...enum import Compliant
from ...meta import Endianess
from ...streams import load
from ...exceptions import DecodeError, MagicException, NotFormatMatch
from .fields import SIGNATURE, SignatureField
from .superblock import VersionProbe, version2layout


logger = logging.getLogger(__name__)


class Signature(Chunk):
    magic = SignatureField()


def validate_signature(source, label):
    '''Raise NotFormatMatch if the first eight bytes are not the HDF5 signature;
    a source too short is reported as UnexpectedEndOfData.'''
    signature = Signature(compliant=Compliant.MAGIC)

    try:
        signature.unpack(source)
    except MagicException as e:
        raise NotFormatMatch(label, chain=e.chain) from e

    logger.debug('signature of \'%s\' is fine', label)


class Superblock(NamedTuple):
    superblock_version: int
    free_space_storage_version: int
    root_group_symbol_table_version: int
    shared_header_message_version: int
    size_of_offsets: int
    size_of_lengths: int


class BaseSuperblock(Chunk):
    '''Version 0 field table, the bytes 14 and 15 are skipped.'''
    superblock_version              = StructField('H', offset=8, endianess=Endianess.BIG_ENDIAN)
    free_space_storage_version      = StructField('H', offset=10, endianess=Endianess.BIG_ENDIAN)
    root_group_symbol_table_version = StructField('H', offset=12, endianess=Endianess.BIG_ENDIAN)
    shared_header_message_version   = StructField('H', offset=16, endianess=Endianess.BIG_ENDIAN)
    size_of_offsets                 = StructField('H', offset=18, endianess=Endianess.BIG_ENDIAN)
    size_of_lengths                 = StructField('H', offset=20, endianess=Endianess.BIG_ENDIAN)

    record = Superblock


def parse_superblock(source) -> Superblock:
    '''The fields are unpacked into a private chunk and frozen only when
    all of them succeeded.'''
    staging = BaseSuperblock()
    staging.unpack(source)

    return staging.freeze()


def decode_superblock(source, compliant=Compliant.STRICT):
    '''Choose the layout looking at the version byte and return its frozen record.'''
    validate_signature(source, source.label)

    probe = VersionProbe()
    probe.unpack(source)
    version = probe.superblock_version.value

    if version not in version2layout:
        raise DecodeError(f'superblock version {version} is not supported', chain=['superblock_version'])

    layout = version2layout[version](compliant=compliant)
    logger.debug('using layout %s for \'%s\'', layout.__class__.__name__, source.label)
    layout.unpack(source)

    return layout.freeze()


def read_superblock(path) -> Superblock:
    with load(path) as source:
        validate_signature(source, source.label)
        return parse_superblock(source)


def read_versioned_superblock(path, compliant=Compliant.STRICT):
    with load(path) as source:
        return decode_superblock(source, compliant=compliant)
