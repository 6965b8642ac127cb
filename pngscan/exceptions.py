class PNGException(Exception):
    '''Base class to extend in order to throw exception in pngscan.

    It carries the absolute offset where the problem was detected and the
    chain of the fields that caused the exception (innermost first).
    '''

    def __init__(self, message='', offset=None, chain=None):
        self.message = message
        self.offset = offset
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        msg = self.message
        if self.offset is not None:
            msg = f'{msg} (at offset 0x{self.offset:08x})'
        if self.chain:
            msg = f'{msg} [{".".join(reversed(self.chain))}]'
        return msg


class StreamException(PNGException):
    pass


class UnexpectedEof(StreamException):
    '''Fewer bytes available than a read demands.'''
    pass


class InvalidSeek(StreamException):
    pass


class InvalidSignature(PNGException):
    '''The first 8 bytes are not the PNG magic.

    "observed" is the first byte that differs, None if the input ended before.'''

    def __init__(self, message='', offset=None, observed=None, chain=None):
        self.observed = observed
        super().__init__(message, offset=offset, chain=chain)


class ChunkException(PNGException):
    pass


class TruncatedChunk(ChunkException):
    pass


class CRCMismatch(ChunkException):

    def __init__(self, message='', offset=None, expected=None, actual=None, chain=None):
        self.expected = expected
        self.actual = actual
        super().__init__(message, offset=offset, chain=chain)


class HeaderException(PNGException):
    '''Something is wrong with the IHDR chunk.'''
    pass


class MissingIhdr(HeaderException):
    pass


class MalformedIhdr(HeaderException):
    pass


class InvalidDimensions(HeaderException):
    pass


class InvalidColorType(HeaderException):
    pass


class UnsupportedCompression(HeaderException):
    pass


class UnsupportedFilter(HeaderException):
    pass


class InvalidInterlace(HeaderException):
    pass


class IncompatibleBitDepth(HeaderException):
    pass
