import logging

from .exceptions import PNGException
from .png import (
    CRC_SIZE,
    validate_signature,
    decode_ihdr,
    iter_chunks,
)
from .streams import ByteCursor, Whence
from . import utils


logger = logging.getLogger(__name__)


class PNGFile(object):
    '''A parse session over a single source: it owns its cursor, checks the signature
    and decodes the header when it's created.

    The source can be a path, raw bytes, a seekable binary file object or a ByteCursor.'''

    def __init__(self, source, check_crc=False):
        # a cursor given by the caller is not ours to close
        self._owned = not isinstance(source, ByteCursor)
        self.cursor = ByteCursor(source) if self._owned else source
        self.check_crc = check_crc

        try:
            self.cursor.seek(0)
            validate_signature(self.cursor)
            self.header = decode_ihdr(self.cursor)
            # the CRC of the IHDR
            self.cursor.seek(CRC_SIZE, Whence.CURRENT)
        except PNGException:
            self.close()
            raise

        logger.debug('opened %r with header %s', self.cursor, self.header)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.header!r})>'

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        if self._owned:
            self.cursor.close()

    def chunks(self):
        return iter_chunks(self.cursor, check_crc=self.check_crc)

    def find_all(self, chunk_type):
        return utils.find_all(self.cursor, chunk_type, check_crc=self.check_crc)

    def find_first(self, chunk_type):
        return utils.find_first(self.cursor, chunk_type, check_crc=self.check_crc)

    def read_payload(self, chunk):
        return utils.read_payload(self.cursor, chunk)

    def idat_data(self):
        return utils.idat_data(self.cursor, check_crc=self.check_crc)
