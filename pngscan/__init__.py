"""
# pngscan: a reader for the chunk stream of PNG files.

A PNG file is an 8 bytes signature followed by a sequence of length-prefixed chunks;
this package walks that sequence and extracts structured metadata from it, without
ever decompressing the image data.

The building blocks, from the bottom:

 1. ByteCursor: bounds-checked big-endian reads over a seekable source
 2. validate_signature(): checks the magic at the start of the file
 3. iter_chunks(): lazily yields a ChunkHeader for each chunk up to IEND
 4. decode_ihdr(): reads and validates the mandatory first chunk as an ImageHeader
 5. find_all()/find_first(): locate chunks of a given type

Every operation documents where it leaves the cursor. Errors are raised as
subclasses of PNGException; nothing in here terminates the process.

PNGFile glues everything together for the common case

    with PNGFile('image.png') as png:
        print(png.header)
        for chunk in png.find_all('IDAT'):
            ...
"""
from .enum import (
    ColorType,
    CompressionMethod,
    FilterMethod,
    InterlaceMethod,
    Whence,
)
from .exceptions import *  # noqa: F401,F403
from .png import (
    BIT_DEPTHS,
    SIGNATURE,
    ChunkHeader,
    ImageHeader,
    check_chunk_crc,
    decode_ihdr,
    iter_chunks,
    read_chunk_header,
    validate_signature,
)
from .pngfile import PNGFile
from .streams import ByteCursor
from .utils import (
    find_all,
    find_first,
    idat_data,
    read_payload,
)
