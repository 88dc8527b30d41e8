from enum import IntEnum, IntFlag


class SuperblockVersion(IntEnum):
    V0 = 0
    V1 = 1  # adds the indexed storage internal node K
    V2 = 2  # compact layout with checksum
    V3 = 3  # same layout of V2, allows SWMR


class FreeSpaceVersion(IntEnum):
    V0 = 0


class RootGroupSymbolTableVersion(IntEnum):
    V0 = 0


class SharedHeaderMessageVersion(IntEnum):
    V0 = 0


class AddressSize(IntEnum):
    '''Allowed values for "size of offsets" and "size of lengths".'''
    SIZE_2  = 2
    SIZE_4  = 4
    SIZE_8  = 8
    SIZE_16 = 16
    SIZE_32 = 32


class CacheType(IntEnum):
    '''What is cached into the scratch-pad of a symbol table entry'''
    NOTHING       = 0
    SYMBOL_TABLE  = 1
    SYMBOLIC_LINK = 2


class FileConsistencyFlags(IntFlag):
    NONE              = 0
    WRITE_ACCESS      = 0x01
    SWMR_WRITE_ACCESS = 0x04
