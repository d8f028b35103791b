'''
# Firmware containers

A firmware container is a blob that carries one or more images (the firmware
payload, some configuration, their headers...), each one identified by an
index and optionally by a human readable id.

The concrete formats subclass Firmware and implement

 1. parse(): from the raw blob populate the images and the metadata
 2. write(): from the metadata and the payload create the raw blob
 3. build(): set the metadata from a structured description (see descriptor.py)
 4. export(): dump the metadata as a tree for inspection
'''
import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

from ..exceptions import (
    DuplicateImageException,
    FirmwareException,
)


class FirmwareImage(object):
    '''One image contained in a firmware: once added to a Firmware it's not
    supposed to change.'''

    def __init__(self, data: bytes, idx: int = 0, id: Optional[str] = None, offset: int = 0):
        self.bytes = bytes(data)
        self.idx = idx
        self.id = id
        self.offset = offset

    def __repr__(self):
        return '<%s(idx=0x%04x, id=%s, offset=0x%x, size=0x%x)>' % (
            self.__class__.__name__, self.idx, self.id, self.offset, len(self.bytes))

    def __len__(self):
        return len(self.bytes)


class Firmware(object):
    '''Generic container of images with a version and a payload.'''

    def __init__(self, data: Optional[bytes] = None):
        self.logger = logging.getLogger(__name__)
        self.images: Dict[int, FirmwareImage] = OrderedDict()
        self.version: Optional[str] = None
        self.bytes: Optional[bytes] = None
        self._patches: List[Tuple[int, bytes]] = []

        if data is not None:
            self.parse(data)

    def __repr__(self):
        return '<%s(version=%s, images=%r)>' % (
            self.__class__.__name__, self.version, list(self.images.values()))

    def add_image(self, image: FirmwareImage) -> None:
        if image.idx in self.images:
            raise DuplicateImageException('image with idx 0x%04x already present' % image.idx)

        self.logger.debug('adding image %r', image)
        self.images[image.idx] = image

    def get_image_by_idx(self, idx: int) -> Optional[FirmwareImage]:
        return self.images.get(idx)

    def get_image_by_id(self, id: str) -> Optional[FirmwareImage]:
        for image in self.images.values():
            if image.id == id:
                return image

        return None

    def add_patch(self, offset: int, data: bytes) -> None:
        '''Schedule data to be written over the payload at offset when it's
        retrieved with get_bytes_with_patches().'''
        self._patches.append((offset, bytes(data)))

    def get_bytes_with_patches(self) -> bytes:
        if self.bytes is None:
            raise FirmwareException('no payload set for %s' % self.__class__.__name__)

        data = bytearray(self.bytes)
        for offset, patch in self._patches:
            if offset < 0 or offset + len(patch) > len(data):
                raise FirmwareException('patch of 0x%x bytes at offset 0x%x exceeds payload of 0x%x bytes' % (
                    len(patch), offset, len(data)))
            self.logger.debug('applying patch of 0x%x bytes at offset 0x%x', len(patch), offset)
            data[offset:offset + len(patch)] = patch

        return bytes(data)

    def parse(self, buf: bytes, offset: int = 0) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}.parse() not implemented")

    def write(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}.write() not implemented")

    def build(self, descriptor) -> None:
        '''Set the generic properties from the descriptor, the subclasses
        extend this with their own.'''
        version = descriptor.get_str('version')
        if version is not None:
            self.version = version

        data = descriptor.get_str('data')
        if data is not None:
            try:
                self.bytes = bytes.fromhex(data)
            except ValueError as e:
                raise FirmwareException('data is not a valid hex string: %s' % e)

    def export(self) -> Dict:
        tree = OrderedDict()
        if self.version is not None:
            tree['version'] = self.version
        tree['images'] = [
            OrderedDict([
                ('idx', '0x%04x' % image.idx),
                ('id', image.id),
                ('offset', '0x%x' % image.offset),
                ('size', '0x%x' % len(image)),
            ]) for image in self.images.values()
        ]

        return tree
