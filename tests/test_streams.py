import pytest

from fwstruct.exceptions import OutOfBoundsException
from fwstruct.streams import Stream


def test_bytes_stream_read_all():
    data = b'\x01\x02\x03\x04\x05'

    stream = Stream(data)

    assert stream.read(1) == b'\x01'
    assert stream.read(1) == b'\x02'
    assert stream.read_all() == b'\x03\x04\x05'
    assert stream.tell() == 5


def test_stream_never_short_read():
    stream = Stream(b'\x01\x02\x03')

    stream.seek(2)

    with pytest.raises(OutOfBoundsException):
        stream.read(2)


def test_stream_limit():
    stream = Stream(b'\x01\x02\x03\x04\x05', limit=3)

    assert stream.size == 5
    assert stream.limit == 3
    assert stream.read(3) == b'\x01\x02\x03'

    with pytest.raises(OutOfBoundsException):
        stream.read(1)

    stream.seek(1)
    assert stream.read_all() == b'\x02\x03'


def test_stream_limit_larger_than_data():
    stream = Stream(b'\x01\x02', limit=0x100)

    assert stream.limit == 2


def test_stream_from_bytearray():
    stream = Stream(bytearray(b'\xaa\xbb'))

    assert stream.read(2) == b'\xaa\xbb'


@pytest.mark.parametrize('obj', [
    42,
    None,
    '/path/to/blob.bin',
])
def test_stream_wrong_object(obj):
    """Only bytes-like objects are accepted, a str is not taken for a path."""
    with pytest.raises(ValueError):
        Stream(obj)


def test_stream_wrong_offset():
    stream = Stream(b'\x00')

    with pytest.raises(ValueError):
        stream.seek('0')

    with pytest.raises(OutOfBoundsException):
        stream.seek(-1)
