import logging

from .png import (
    IDAT,
    SIGNATURE_SIZE,
    iter_chunks,
)


logger = logging.getLogger(__name__)


def normalize_chunk_type(chunk_type):
    if isinstance(chunk_type, str):
        chunk_type = chunk_type.encode('latin-1')
    elif isinstance(chunk_type, (bytes, bytearray, memoryview)):
        chunk_type = bytes(chunk_type)
    else:
        raise TypeError(f'a chunk type must be str or bytes, not {chunk_type.__class__.__name__}')

    if len(chunk_type) != 4:
        raise ValueError(f'a chunk type is made of 4 bytes, {chunk_type!r} is not')

    return chunk_type


def find_all(cursor, chunk_type, offset=SIGNATURE_SIZE, check_crc=False):
    '''Lazily yield all the chunks of the given type, in the order they are in the file.

    PNG permits multiple chunks of the same type (e.g. the IDATs) so the scan
    is not interrupted at the first match.'''
    chunk_type = normalize_chunk_type(chunk_type)

    def _iter():
        for chunk in iter_chunks(cursor, offset=offset, check_crc=check_crc):
            if chunk.type == chunk_type:
                yield chunk

    return _iter()


def find_first(cursor, chunk_type, offset=SIGNATURE_SIZE, check_crc=False):
    '''Returns the first chunk of the given type or None if IEND is reached before.'''
    return next(find_all(cursor, chunk_type, offset=offset, check_crc=check_crc), None)


def read_payload(cursor, chunk):
    '''Returns the data of the chunk leaving the position of the cursor untouched.'''
    with cursor.saved():
        cursor.seek(chunk.data_offset)
        return cursor.read_bytes(chunk.length)


def idat_data(cursor, offset=SIGNATURE_SIZE, check_crc=False):
    '''In a PNG file, the concatenation of the contents of all the IDAT chunks makes up a zlib datastream,
    the boundaries between IDAT chunks are arbitrary and can fall anywhere in the zlib datastream.

    The data is returned still compressed.
    '''
    chunks = find_all(cursor, IDAT, offset=offset, check_crc=check_crc)
    data = b''.join(read_payload(cursor, _) for _ in chunks)

    logger.debug('collected %d bytes of image data', len(data))

    return data
