"""
# h5struct: binary headers as declarative layouts.

A file format is described by chunks, classes whose attributes are fields:
each field knows its width (maybe depending on another field) and, optionally,
its offset inside the chunk. Unpacking a chunk means reading each field from a
ByteSource, an object that gives out exact-length reads at absolute offsets
and nothing else.

Once unpacked a chunk is frozen into an immutable record: the record exists
only when every field was read correctly, otherwise the exception raised
tells which field failed via its "chain".

The unpacking can be more or less strict, see h5struct.enum.Compliant:

 1. MAGIC: a magic field with the wrong value is an error
 2. ENUM: a value outside its enumeration is an error
 3. CHECKSUM: a checksum that doesn't match is an error

when a level is not requested the problem is only logged as a warning.
"""
