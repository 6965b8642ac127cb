import io

import pytest

from pngscan.enum import Whence
from pngscan.exceptions import UnexpectedEof, InvalidSeek
from pngscan.streams import ByteCursor


def test_read_u32_is_big_endian():
    cursor = ByteCursor(b'\x00\x00\x01\x02\xca\xfe\xba\xbe')

    assert cursor.size == 8
    assert cursor.read_u32_be() == 0x0102
    assert cursor.position() == 4
    assert cursor.read_u32_be() == 0xcafebabe
    assert cursor.position() == 8
    assert cursor.remaining == 0


def test_read_past_the_end():
    cursor = ByteCursor(b'\x01\x02\x03')

    with pytest.raises(UnexpectedEof) as excinfo:
        cursor.read_u32_be()

    assert excinfo.value.offset == 0
    # nothing has been consumed
    assert cursor.position() == 0
    assert cursor.read_bytes(3) == b'\x01\x02\x03'

    with pytest.raises(UnexpectedEof):
        cursor.read_u8()


def test_read_bytes():
    cursor = ByteCursor(b'kebab')

    assert cursor.read_bytes(0) == b''
    assert cursor.read_bytes(2) == b'ke'
    assert cursor.read_u8() == ord('b')
    assert cursor.read_available(10) == b'ab'
    assert cursor.position() == 5

    with pytest.raises(ValueError):
        cursor.read_bytes(-1)


def test_seek():
    cursor = ByteCursor(b'\x00' * 0x10)

    assert cursor.seek(4) == 4
    assert cursor.seek(2, Whence.CURRENT) == 6
    assert cursor.seek(-6, Whence.CURRENT) == 0

    # seeking past the end is fine, reading not
    cursor.seek(0x20)
    assert cursor.position() == 0x20
    assert cursor.remaining == 0
    with pytest.raises(UnexpectedEof):
        cursor.read_u8()


def test_seek_negative():
    cursor = ByteCursor(b'\x00' * 0x10)
    cursor.seek(3)

    with pytest.raises(InvalidSeek):
        cursor.seek(-4, Whence.CURRENT)

    with pytest.raises(InvalidSeek):
        cursor.seek(-1)

    assert cursor.position() == 3


def test_saved_restores_position():
    cursor = ByteCursor(b'\x01\x02\x03\x04\x05')
    cursor.seek(1)

    with cursor.saved():
        cursor.seek(3)
        assert cursor.read_u8() == 4

    assert cursor.position() == 1

    with pytest.raises(UnexpectedEof):
        with cursor.saved():
            cursor.read_bytes(2)
            cursor.read_u32_be()

    assert cursor.position() == 1


def test_file_sources(tmp_path):
    path = tmp_path / 'data.bin'
    path.write_bytes(b'\x00\x00\x00\x2a')

    with ByteCursor(str(path)) as cursor:
        assert cursor.size == 4
        assert cursor.read_u32_be() == 42
    assert cursor.obj.closed

    with ByteCursor(path) as cursor:
        assert cursor.read_u32_be() == 42

    # a file object passed by the caller is not ours to close
    with open(path, 'rb') as f:
        with ByteCursor(f) as cursor:
            assert cursor.read_u32_be() == 42
        assert not f.closed


def test_file_object_keeps_its_position():
    stream = io.BytesIO(b'\x00\x01\x02\x03\x04')
    stream.seek(2)

    cursor = ByteCursor(stream)

    assert cursor.position() == 2
    assert cursor.size == 5
    assert cursor.read_u8() == 2


def test_wrong_source():
    with pytest.raises(TypeError):
        ByteCursor(42)
