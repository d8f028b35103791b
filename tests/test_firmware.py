import pytest

from fwstruct.exceptions import DuplicateImageException, FirmwareException
from fwstruct.firmware import Firmware, FirmwareImage
from fwstruct.firmware.descriptor import MappingDescriptor


def test_add_image():
    firmware = Firmware()

    firmware.add_image(FirmwareImage(b'\x01\x02', idx=0x10, id='first', offset=6))
    firmware.add_image(FirmwareImage(b'\x03', idx=0x05))

    assert list(firmware.images.keys()) == [0x10, 0x05]
    assert firmware.get_image_by_idx(0x10).bytes == b'\x01\x02'
    assert firmware.get_image_by_idx(0x10).offset == 6
    assert firmware.get_image_by_id('first').idx == 0x10
    assert firmware.get_image_by_idx(0x06) is None
    assert firmware.get_image_by_id('missing') is None


def test_add_image_duplicate():
    firmware = Firmware()
    firmware.add_image(FirmwareImage(b'\x01', idx=0x10))

    with pytest.raises(DuplicateImageException):
        firmware.add_image(FirmwareImage(b'\x02', idx=0x10))

    assert firmware.get_image_by_idx(0x10).bytes == b'\x01'


def test_image_owns_its_bytes():
    data = bytearray(b'\x01\x02')
    image = FirmwareImage(data, idx=1)

    data[0] = 0xff

    assert image.bytes == b'\x01\x02'
    assert len(image) == 2


def test_bytes_with_patches():
    firmware = Firmware()
    firmware.bytes = b'\x00' * 8

    firmware.add_patch(0, b'\xaa')
    firmware.add_patch(6, b'\xbb\xcc')
    firmware.add_patch(0, b'\xdd')

    assert firmware.get_bytes_with_patches() == b'\xdd' + b'\x00' * 5 + b'\xbb\xcc'
    # the original payload is untouched
    assert firmware.bytes == b'\x00' * 8


def test_bytes_with_patches_errors():
    firmware = Firmware()

    with pytest.raises(FirmwareException):
        firmware.get_bytes_with_patches()

    firmware.bytes = b'\x00' * 4
    firmware.add_patch(3, b'\xaa\xbb')

    with pytest.raises(FirmwareException):
        firmware.get_bytes_with_patches()


def test_build_generic_properties():
    firmware = Firmware()

    firmware.build(MappingDescriptor({'version': '1.2', 'data': 'cafe'}))

    assert firmware.version == '1.2'
    assert firmware.bytes == b'\xca\xfe'


def test_build_invalid_data():
    firmware = Firmware()

    with pytest.raises(FirmwareException):
        firmware.build(MappingDescriptor({'data': 'kebab'}))


def test_not_implemented():
    with pytest.raises(NotImplementedError):
        Firmware(b'\x00')

    with pytest.raises(NotImplementedError):
        Firmware().write()


def test_export():
    firmware = Firmware()
    firmware.version = '1.2'
    firmware.add_image(FirmwareImage(b'\x01\x02', idx=0x10, id='first', offset=6))

    assert firmware.export() == {
        'version': '1.2',
        'images': [
            {'idx': '0x0010', 'id': 'first', 'offset': '0x6', 'size': '0x2'},
        ],
    }
