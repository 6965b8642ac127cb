"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from the cursor without knowing anything about the other fields.

Every field of a PNG structure is big-endian, so there is no endianess to choose.
"""
import logging
import struct

from .meta import FieldBase
from .exceptions import PNGException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, check=None, error=PNGException, message=None):
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.check = check
        self.error = error
        self.message = message

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.name})>'

    @property
    def size(self):
        raise NotImplementedError(f"property {self.__class__.__name__}.size not implemented")

    def _unpack(self, raw: bytes, offset: int):
        raise NotImplementedError(f"method {self.__class__.__name__}._unpack() not implemented")

    def fail(self, value, offset):
        if self.message:
            message = self.message.format(value=value)
        else:
            message = f'invalid value {value!r} for field \'{self.name}\''
        raise self.error(message, offset=offset, chain=[self.name])

    def unpack(self, cursor):
        '''Read the field at the actual position of the cursor and return its value'''
        offset = cursor.position()
        raw = cursor.read_bytes(self.size)
        value = self._unpack(raw, offset)

        if self.check is not None and not self.check(value):
            self.fail(value, offset)

        self.logger.debug('unpacked %s=%r at offset %d', self.name, value, offset)

        return value


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself;
    a value not in the enum is an error of the kind indicated by "error".
    """

    def __init__(self, format, enum=None, **kw):
        self.format = format
        self.enum = enum
        self._struct = struct.Struct(self.get_format())
        super().__init__(**kw)

    def get_format(self):
        return '>%s' % self.format

    @property
    def size(self):
        return self._struct.size

    def _unpack(self, raw, offset):
        value = self._struct.unpack(raw)[0]

        if not self.enum:
            return value

        try:
            return self.enum(value)
        except ValueError:
            self.fail(value, offset)


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n, **kw):
        self.length = n
        super().__init__(**kw)

    def __len__(self):
        return self.length

    @property
    def size(self):
        return self.length

    def _unpack(self, raw, offset):
        return raw
