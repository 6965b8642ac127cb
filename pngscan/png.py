'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

The file is the 8 bytes signature followed by a sequence of chunks, each laid out as

    [4-byte length][4-byte type][length bytes of data][4-byte CRC]

and terminated by the IEND chunk. Here we only walk the headers of the chunks,
the data is never decompressed.
'''
import logging

from bitstring import BitArray

from .core import Record
from . import fields
from .common.crc import chunk_crc
from .enum import (
    ColorType,
    CompressionMethod,
    FilterMethod,
    InterlaceMethod,
)
from .exceptions import (
    CRCMismatch,
    IncompatibleBitDepth,
    InvalidColorType,
    InvalidDimensions,
    InvalidInterlace,
    InvalidSignature,
    MalformedIhdr,
    MissingIhdr,
    TruncatedChunk,
    UnexpectedEof,
    UnsupportedCompression,
    UnsupportedFilter,
)


logger = logging.getLogger(__name__)

SIGNATURE = bytes((137, 80, 78, 71, 13, 10, 26, 10))
SIGNATURE_SIZE = len(SIGNATURE)
CRC_SIZE = 4

IHDR = b'IHDR'
PLTE = b'PLTE'
IDAT = b'IDAT'
IEND = b'IEND'

CRITICAL_CHUNKS = (IHDR, PLTE, IDAT, IEND)

# allowed bit depths for each color type
BIT_DEPTHS = {
    ColorType.GRAYSCALE:       (1, 2, 4, 8, 16),
    ColorType.TRUECOLOR:       (8, 16),
    ColorType.INDEXED:         (1, 2, 4, 8),
    ColorType.GRAYSCALE_ALPHA: (8, 16),
    ColorType.TRUECOLOR_ALPHA: (8, 16),
}

CHANNELS = {
    ColorType.GRAYSCALE:       1,
    ColorType.TRUECOLOR:       3,
    ColorType.INDEXED:         1,
    ColorType.GRAYSCALE_ALPHA: 2,
    ColorType.TRUECOLOR_ALPHA: 4,
}


class ChunkHeader(Record):
    '''This is the main data structure of the format: the length and the type
    of a chunk, both big-endian. The offset of the record is where the chunk starts.

    The type is made of 4 bytes and bit 5 of each of them is a property of the chunk:

     1. ancillary bit: 0 (uppercase) means critical
     2. private bit: 0 (uppercase) means public
     3. reserved bit: must be 0 (uppercase)
     4. safe-to-copy bit: 1 (lowercase) means that editors can copy it blindly

    The crc is available only if it has been checked during the scan.
    '''
    length = fields.StructField('I')
    type   = fields.StringField(4)

    def __init__(self, offset=None, crc=None, **values):
        super().__init__(offset=offset, **values)
        self.crc = crc

    def __eq__(self, other):
        if not isinstance(other, ChunkHeader):
            return NotImplemented

        return super().__eq__(other) and self.offset == other.offset

    def __hash__(self):
        return hash((super().__hash__(), self.offset))

    def __repr__(self):
        return f'<{self.__class__.__name__}(type={self.type!r},length={self.length},data_offset={self.data_offset})>'

    @property
    def name(self):
        return self.type.decode('latin-1')

    @property
    def data_offset(self):
        return self.offset + CHUNK_HEADER_SIZE

    @property
    def end(self):
        '''Offset of the header of the following chunk'''
        return self.data_offset + self.length + CRC_SIZE

    def _property_bit(self, idx):
        return BitArray(self.type)[idx * 8 + 2]

    @property
    def is_ancillary(self):
        return self._property_bit(0)

    @property
    def is_critical(self):
        return not self.is_ancillary

    @property
    def is_public(self):
        return not self._property_bit(1)

    @property
    def is_reserved_valid(self):
        return not self._property_bit(2)

    @property
    def is_safe_to_copy(self):
        return self._property_bit(3)


class ImageHeader(Record):
    '''
    Width and height give the image dimensions in pixels.
    Bit depth is a single-byte integer giving the number of bits per sample or per palette index (not per pixel).
    Color type is a single-byte integer that describes the interpretation of the image data.
    '''
    width              = fields.StructField('I', check=lambda _: _ > 0, error=InvalidDimensions,
                                            message='width must be positive')
    height             = fields.StructField('I', check=lambda _: _ > 0, error=InvalidDimensions,
                                            message='height must be positive')
    bit_depth          = fields.StructField('B')
    color_type         = fields.StructField('B', enum=ColorType, error=InvalidColorType,
                                            message='unknown color type {value}')
    compression_method = fields.StructField('B', enum=CompressionMethod, error=UnsupportedCompression,
                                            message='unsupported compression method {value}')
    filter_method      = fields.StructField('B', enum=FilterMethod, error=UnsupportedFilter,
                                            message='unsupported filter method {value}')
    interlace_method   = fields.StructField('B', enum=InterlaceMethod, error=InvalidInterlace,
                                            message='invalid interlace method {value}')

    def __str__(self):
        return '%dx%dx%d' % (
            self.width,
            self.height,
            self.bit_depth,
        )

    def validate(self):
        if self.bit_depth not in BIT_DEPTHS[self.color_type]:
            offset = self.layout['bit_depth'][0]
            raise IncompatibleBitDepth(
                f'bit depth {self.bit_depth} not allowed for color type {self.color_type.name}',
                offset=offset,
                chain=['bit_depth'])

    @property
    def channels(self):
        return CHANNELS[self.color_type]

    @property
    def bits_per_pixel(self):
        return self.channels * self.bit_depth

    @property
    def is_interlaced(self):
        return self.interlace_method == InterlaceMethod.ADAM7


CHUNK_HEADER_SIZE = ChunkHeader.get_size()
IHDR_SIZE = ImageHeader.get_size()


def validate_signature(cursor):
    '''Check the first 8 bytes of the stream: the cursor must be at the start
    of it and is left at offset 8 also on failure.'''
    if cursor.position() != 0:
        raise ValueError(f'the signature must be read at offset 0, cursor is at {cursor.position()}')

    data = cursor.read_available(SIGNATURE_SIZE)
    cursor.seek(SIGNATURE_SIZE)

    for idx, expected in enumerate(SIGNATURE):
        if idx >= len(data):
            raise InvalidSignature(f'the stream is too short ({len(data)} bytes) for the signature', offset=idx)

        if data[idx] != expected:
            raise InvalidSignature(
                f'found byte 0x{data[idx]:02x} instead of 0x{expected:02x}',
                offset=idx,
                observed=data[idx])

    logger.debug('signature is fine')


def read_chunk_header(cursor):
    '''Read length and type of the chunk starting at the cursor position.

    The cursor is left at the start of the chunk's data.'''
    chunk = ChunkHeader.unpack(cursor)

    if chunk.data_offset + chunk.length > cursor.size:
        raise TruncatedChunk(
            f'chunk {chunk.type!r} declares {chunk.length} bytes but only {cursor.size - chunk.data_offset} remain',
            offset=chunk.offset,
            chain=['length'])

    logger.debug('found chunk %r at offset 0x%08x with length %d', chunk.type, chunk.offset, chunk.length)

    return chunk


def check_chunk_crc(cursor, chunk):
    '''Read data and CRC of the chunk and compare with the calculated one;
    it returns a copy of the chunk with the crc attribute set.

    The position of the cursor is preserved.'''
    with cursor.saved():
        cursor.seek(chunk.data_offset)
        data = cursor.read_bytes(chunk.length)
        crc = cursor.read_u32_be()

    expected = chunk_crc(chunk.type, data)
    if crc != expected:
        logger.warning('CRC for chunk %r at offset 0x%08x is 0x%08x instead of 0x%08x',
                       chunk.type, chunk.offset, crc, expected)
        raise CRCMismatch(
            f'chunk {chunk.type!r} has CRC 0x{crc:08x} but 0x{expected:08x} was calculated',
            offset=chunk.data_offset + chunk.length,
            expected=expected,
            actual=crc)

    return ChunkHeader(offset=chunk.offset, crc=crc, **chunk.values)


def iter_chunks(cursor, offset=SIGNATURE_SIZE, check_crc=False):
    '''Lazily walk the chunks starting from the given absolute offset,
    yielding a ChunkHeader for each of them.

    Each step starts from where the previous chunk ends, so the consumer is free
    to move the cursor between steps (for example to read the data of a chunk).

    The iteration stops after the IEND chunk; reaching the end of the stream
    before it raises UnexpectedEof.
    '''
    next_offset = offset

    while True:
        cursor.seek(next_offset)

        if cursor.remaining == 0:
            raise UnexpectedEof('the stream ended without an IEND chunk', offset=next_offset)

        chunk = read_chunk_header(cursor)

        if check_crc:
            chunk = check_chunk_crc(cursor, chunk)

        if chunk.is_critical and chunk.type not in CRITICAL_CHUNKS:
            logger.warning('unknown critical chunk %r at offset 0x%08x', chunk.type, chunk.offset)

        # skip data and CRC
        next_offset = chunk.end
        cursor.seek(next_offset)

        yield chunk

        if chunk.type == IEND:
            logger.debug('IEND reached at offset 0x%08x', chunk.offset)
            return


def decode_ihdr(cursor):
    '''Decode the IHDR chunk: the cursor must be at the start of the first chunk
    (i.e. offset 8) and is left just after the 13 bytes of data, the CRC is not skipped.

    If you need to preserve the position of the cursor, save it yourself.
    '''
    chunk = read_chunk_header(cursor)

    if chunk.type != IHDR:
        raise MissingIhdr(f'first chunk is {chunk.type!r} instead of {IHDR!r}', offset=chunk.offset, chain=['type'])

    if chunk.length != IHDR_SIZE:
        raise MalformedIhdr(
            f'IHDR has length {chunk.length} instead of {IHDR_SIZE}',
            offset=chunk.offset,
            chain=['length'])

    header = ImageHeader.unpack(cursor)

    logger.debug('decoded header %r', header)

    return header
