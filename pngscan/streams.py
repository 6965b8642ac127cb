import io
import logging
import struct
from contextlib import contextmanager

from .enum import Whence
from .exceptions import UnexpectedEof, InvalidSeek


logger = logging.getLogger(__name__)

U32 = struct.Struct('>I')


class ByteCursor(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: it keeps the position and the total size of the
    underlying data so that every read can be bounds-checked before it happens.

    All the integers are read big-endian, as the PNG format mandates.

    A cursor is owned by a single parse session: if you need to parse the same
    file concurrently, create another cursor.'''

    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._owned = False
        self.obj = obj
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

        self._position = self.obj.tell()
        self.obj.seek(0, io.SEEK_END)
        self.size = self.obj.tell()
        self.obj.seek(self._position)

    def __repr__(self):
        return f'<{self.__class__.__name__}(position=0x{self._position:x}, size=0x{self.size:x})>'

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')
        self._owned = True

    def init_PosixPath(self):
        self.obj = str(self.obj)
        self.init_str()

    init_WindowsPath = init_PosixPath

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_file(self):
        '''Anything else must be a seekable binary file object'''
        for method in ('read', 'seek', 'tell'):
            if not hasattr(self.obj, method):
                raise TypeError('\'%s\' is the wrong kind of source to use' % self.obj.__class__.__name__)

    def close(self):
        '''Close the underlying object only if we opened it'''
        if self._owned:
            self.obj.close()
            self._owned = False

    def position(self):
        return self._position

    tell = position

    @property
    def remaining(self):
        return max(0, self.size - self._position)

    def seek(self, offset, whence=Whence.START):
        if whence == Whence.START:
            real_offset = offset
        elif whence == Whence.CURRENT:
            real_offset = self._position + offset
        else:
            raise ValueError('\'%s\' is the wrong kind of origin to use' % whence)

        if real_offset < 0:
            raise InvalidSeek(f'seeking to negative offset {real_offset}', offset=self._position)

        self.obj.seek(real_offset)
        self._position = real_offset

        return self._position

    def read_bytes(self, n):
        if n < 0:
            raise ValueError(f'cannot read a negative amount of bytes ({n})')

        if n > self.remaining:
            raise UnexpectedEof(
                f'requested {n} bytes but only {self.remaining} are available',
                offset=self._position)

        data = self.obj.read(n)
        # the source could have been shrunk under our feet
        if len(data) != n:
            self.obj.seek(self._position)
            raise UnexpectedEof(f'requested {n} bytes but read {len(data)}', offset=self._position)

        self._position += n

        return data

    def read_available(self, n):
        '''Read up to n bytes, never failing for lack of data.'''
        return self.read_bytes(min(n, self.remaining))

    def read_u8(self):
        return self.read_bytes(1)[0]

    def read_u32_be(self):
        return U32.unpack(self.read_bytes(U32.size))[0]

    def save(self):
        self.history.append(self._position)

    def restore(self):
        self.seek(self.history.pop())

    @contextmanager
    def saved(self):
        '''Restore the position at the exit of the block, whatever happens inside.'''
        self.save()
        try:
            yield self
        finally:
            self.restore()
