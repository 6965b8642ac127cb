import logging
import os
import struct
import zlib

import pytest


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

SIGNATURE = b'\x89PNG\r\n\x1a\n'


def _chunk(type, data=b'', length=None, crc=None):
    '''Build a chunk, length and crc can be forced to wrong values.'''
    length = len(data) if length is None else length
    crc = zlib.crc32(type + data) & 0xffffffff if crc is None else crc

    return struct.pack('>I', length) + type + data + struct.pack('>I', crc)


def _ihdr(width=1, height=1, bit_depth=8, color_type=2, compression=0, filter=0, interlace=0):
    return struct.pack('>IIBBBBB', width, height, bit_depth, color_type, compression, filter, interlace)


def _png(*chunks, signature=SIGNATURE):
    return signature + b''.join(chunks)


@pytest.fixture
def build_chunk():
    return _chunk


@pytest.fixture
def build_ihdr():
    return _ihdr


@pytest.fixture
def build_png():
    return _png


@pytest.fixture
def minimal_png():
    '''1x1 red pixel, truecolor with 8 bits per sample'''
    return _png(
        _chunk(b'IHDR', _ihdr()),
        _chunk(b'IDAT', zlib.compress(b'\x00\xff\x00\x00')),
        _chunk(b'IEND'),
    )
