"""
# Fwstruct firmware format ORM.

We can define a firmware file format as a way of describing a binary representation of
the images to flash on a device, where each subcomponent of the file format aims to
represent a specific aspect of the update, but it's not constrained to.

Two basic main operations are defined for the fixed layout records (Chunk) and their
sub components:

 1. unpack(): the more straightforward, i.e., reading the binary data
    and build a high-level representation of that.
    You use as offset the actual offset of the stream and the chunk itself
    knows how many bytes needs to read to finalize the representation;
    reading past the data available is an error and never a short read.

 2. pack(): encode the high-level representation into binary data, the fields
    not set explicitly are encoded with their default.

to these we add one more

 3. relayout(): recompute the offset of each field from the order of declaration.

The firmware containers (see fwstruct.firmware) walk the blob using these records
and keep the images found inside.
"""
