'''
We are implementing the helpers to handle CRC calculation.
'''
from zlib import crc32


def chunk_crc(type, data):
    """standard CRC methods with pre and post conditioning, as defined by ISO 3309 [ISO-3309]
    or ITU-T V.42 [ITU-V42]. The CRC polynomial employed is

      x^32+x^26+x^23+x^22+x^16+x^12+x^11+x^10+x^8+x^7+x^5+x^4+x^2+x+1

    It is computed over the chunk type and chunk data, but not the length.

    See <https://www.w3.org/TR/PNG-Structure.html#CRC-algorithm>.
    """
    return crc32(data, crc32(type)) & 0xffffffff
