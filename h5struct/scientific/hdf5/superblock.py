'''
# Superblock layouts

The superblock may begin at certain predefined offsets within the file, here
only the one at offset zero is handled. The layout depends on the version
stored right after the signature, each version has its own chunk: the common
fields are repeated on purpose so that every layout can be read top to bottom.

Reference <https://support.hdfgroup.org/HDF5/doc/H5.format.html#Superblock>.
'''
from ... import fields
from ...core import Chunk
from ...common.checksum import ChecksumField
from .fields import SignatureField, AddressField
from .enum import (
    SuperblockVersion,
    FreeSpaceVersion,
    RootGroupSymbolTableVersion,
    SharedHeaderMessageVersion,
    AddressSize,
    CacheType,
    FileConsistencyFlags,
)


class VersionProbe(Chunk):
    '''Just enough to know which layout to use.'''
    superblock_version = fields.StructField('B', offset=8)


class SymbolTableScratch(Chunk):
    btree_address      = AddressField()
    local_heap_address = AddressField()


class SymbolicLinkScratch(Chunk):
    link_value_offset = fields.StructField('I')


cache2scratch = {
    CacheType.SYMBOL_TABLE: SymbolTableScratch(),
    CacheType.SYMBOLIC_LINK: SymbolicLinkScratch(),
    fields.SelectField.Type.DEFAULT: fields.StringField(16),
}


class SymbolTableEntry(Chunk):
    '''Each entry of a symbol table, the root group entry lives into the superblock.'''
    link_name_offset      = AddressField()
    object_header_address = AddressField()
    cache_type            = fields.StructField('I', enum=CacheType)
    reserved              = fields.ReservedField(4)
    scratch_pad           = fields.SelectField('cache_type', cache2scratch, length=16)


class SuperblockV0(Chunk):
    signature                       = SignatureField()
    superblock_version              = fields.StructField('B', enum=SuperblockVersion)
    free_space_version              = fields.StructField('B', enum=FreeSpaceVersion)
    root_group_symbol_table_version = fields.StructField('B', enum=RootGroupSymbolTableVersion)
    reserved_0                      = fields.ReservedField(1)
    shared_header_message_version   = fields.StructField('B', enum=SharedHeaderMessageVersion)
    size_of_offsets                 = fields.StructField('B', enum=AddressSize)
    size_of_lengths                 = fields.StructField('B', enum=AddressSize)
    reserved_1                      = fields.ReservedField(1)
    group_leaf_node_k               = fields.StructField('H')
    group_internal_node_k           = fields.StructField('H')
    file_consistency_flags          = fields.StructField('I')  # unused up to version 1
    base_address                    = AddressField()
    free_space_address              = AddressField()
    end_of_file_address             = AddressField()
    driver_information_address      = AddressField()
    root_group_symbol_table_entry   = SymbolTableEntry()


class SuperblockV1(Chunk):
    signature                       = SignatureField()
    superblock_version              = fields.StructField('B', enum=SuperblockVersion)
    free_space_version              = fields.StructField('B', enum=FreeSpaceVersion)
    root_group_symbol_table_version = fields.StructField('B', enum=RootGroupSymbolTableVersion)
    reserved_0                      = fields.ReservedField(1)
    shared_header_message_version   = fields.StructField('B', enum=SharedHeaderMessageVersion)
    size_of_offsets                 = fields.StructField('B', enum=AddressSize)
    size_of_lengths                 = fields.StructField('B', enum=AddressSize)
    reserved_1                      = fields.ReservedField(1)
    group_leaf_node_k               = fields.StructField('H')
    group_internal_node_k           = fields.StructField('H')
    file_consistency_flags          = fields.StructField('I')
    indexed_storage_internal_node_k = fields.StructField('H')
    reserved_2                      = fields.ReservedField(2)
    base_address                    = AddressField()
    free_space_address              = AddressField()
    end_of_file_address             = AddressField()
    driver_information_address      = AddressField()
    root_group_symbol_table_entry   = SymbolTableEntry()


class SuperblockV2(Chunk):
    signature                        = SignatureField()
    superblock_version               = fields.StructField('B', enum=SuperblockVersion)
    size_of_offsets                  = fields.StructField('B', enum=AddressSize)
    size_of_lengths                  = fields.StructField('B', enum=AddressSize)
    file_consistency_flags           = fields.StructField('B', enum=FileConsistencyFlags)
    base_address                     = AddressField()
    superblock_extension_address     = AddressField()
    end_of_file_address              = AddressField()
    root_group_object_header_address = AddressField()
    checksum                         = ChecksumField()


class SuperblockV3(SuperblockV2):
    pass


version2layout = {
    SuperblockVersion.V0: SuperblockV0,
    SuperblockVersion.V1: SuperblockV1,
    SuperblockVersion.V2: SuperblockV2,
    SuperblockVersion.V3: SuperblockV3,
}
