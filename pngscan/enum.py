from enum import Enum, IntEnum


class Whence(Enum):
    '''Origin for ByteCursor.seek()'''
    START   = 0
    CURRENT = 1


class ColorType(IntEnum):
    '''The color type definition of the PNG is a little tricky and doesn't seem
    to follow a bit-mask. We are going to list all the valid cases.'''
    GRAYSCALE       = 0x00
    TRUECOLOR       = 0x02
    INDEXED         = 0x03
    GRAYSCALE_ALPHA = 0x04
    TRUECOLOR_ALPHA = 0x06


class CompressionMethod(IntEnum):
    '''There is only one method of compression'''
    DEFLATE = 0x00


class FilterMethod(IntEnum):
    '''This indicates the preprocessing method applied to the image data before compression.
    At present, only filter method 0 is defined'''
    ADAPTIVE = 0x00


class InterlaceMethod(IntEnum):
    NONE  = 0x00
    ADAM7 = 0x01
