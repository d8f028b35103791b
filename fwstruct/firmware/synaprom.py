'''
# Synaptics Prometheus fingerprint sensor firmware

The update file is a sequence of chunks followed by a signature

  .--------------------------------.
  | tag (u16) | bufsz (u32) | body |  mfw-update-header
  | tag (u16) | bufsz (u32) | body |  mfw-update-payload
    ...
  | 256 bytes of signature         |
  '--------------------------------'

All the integers are little endian. The body of the mfw-update-header chunk
is a SynapromMfwHeader and it's where product id and version live.

The signature is not verified nor interpreted, when writing it's filled with 0xff.
'''
from .. import fields
from ..core import Chunk
from ..streams import Stream
from ..exceptions import (
    DuplicateImageException,
    EmptyChunkException,
    FirmwareException,
    OutOfBoundsException,
    PayloadUnavailableException,
    TagTooLargeException,
    TooManyChunksException,
    TooSmallException,
)
from . import Firmware, FirmwareImage


SYNAPROM_TAG_MFW_HEADER  = 0x0001
SYNAPROM_TAG_MFW_PAYLOAD = 0x0002
SYNAPROM_TAG_CFG_HEADER  = 0x0003
SYNAPROM_TAG_CFG_PAYLOAD = 0x0004

# use only first 12 bit of 16 bits as tag value
SYNAPROM_TAG_MAX = 0xfff0
SYNAPROM_SIGSIZE = 0x0100

SYNAPROM_COUNT_MAX = 64

SYNAPROM_TAG_NAMES = {
    SYNAPROM_TAG_MFW_HEADER:  'mfw-update-header',
    SYNAPROM_TAG_MFW_PAYLOAD: 'mfw-update-payload',
    SYNAPROM_TAG_CFG_HEADER:  'cfg-update-header',
    SYNAPROM_TAG_CFG_PAYLOAD: 'cfg-update-payload',
}


def synaprom_tag_to_string(tag):
    return SYNAPROM_TAG_NAMES.get(tag)


class SynapromChunkHeader(Chunk):
    tag   = fields.StructField('H')
    bufsz = fields.StructField('I')


class SynapromMfwHeader(Chunk):
    product   = fields.StructField('I')
    id        = fields.StructField('I', default=0xff)  # MFW unique id used for compat verification
    buildtime = fields.StructField('I', default=0xff)  # unix-style
    buildnum  = fields.StructField('I', default=0xff)
    vmajor    = fields.StructField('B', default=10)
    vminor    = fields.StructField('B', default=1)
    unused    = fields.StringField(6)

    @property
    def version(self):
        return '%u.%u' % (self.vmajor.value, self.vminor.value)


class SynapromFirmware(Firmware):
    '''Firmware for the Synaptics Prometheus sensors.

    Parsing keeps every chunk as an image indexed by its tag, writing instead
    emits only the mfw-update-header built from product_id and the payload
    (with patches applied) followed by the signature placeholder.
    '''

    def __init__(self, data=None):
        self.product_id = 0x0
        super().__init__(data=data)

    def __repr__(self):
        return '<%s(product_id=0x%08x, version=%s, images=%r)>' % (
            self.__class__.__name__, self.product_id, self.version, list(self.images.values()))

    def parse(self, buf, offset=0):
        '''Nothing is changed on self unless the whole blob is valid.'''
        st_hdr = SynapromChunkHeader()
        st_mfw = None
        images = {}

        # 256 byte signature as footer
        if len(buf) < SYNAPROM_SIGSIZE + st_hdr.size:
            raise TooSmallException('blob is too small to be firmware')
        bufsz = len(buf) - SYNAPROM_SIGSIZE

        # chunk headers never overlap the signature, bodies are checked against the whole blob
        stream = Stream(buf, limit=bufsz)

        # parse each chunk
        while offset < bufsz:
            # verify item header
            st_hdr.unpack(stream.seek(offset))
            tag = st_hdr.tag.value
            if tag >= SYNAPROM_TAG_MAX:
                raise TagTooLargeException('tag 0x%04x is too large' % tag)

            # sanity check
            if self.get_image_by_idx(tag) is not None or tag in images:
                raise DuplicateImageException('tag 0x%04x already present in image' % tag)

            hdrsz = st_hdr.bufsz.value
            if hdrsz == 0:
                raise EmptyChunkException('empty header for tag 0x%04x' % tag)
            offset += st_hdr.size

            data = buf[offset:offset + hdrsz]
            if len(data) != hdrsz:
                raise OutOfBoundsException('chunk 0x%04x of 0x%x bytes at offset 0x%x exceeds blob of 0x%x bytes' % (
                    tag, hdrsz, offset, len(buf)))
            self.logger.debug('adding 0x%04x (%s) with size 0x%04x', tag, synaprom_tag_to_string(tag), hdrsz)
            images[tag] = FirmwareImage(data, idx=tag, id=synaprom_tag_to_string(tag), offset=offset)

            # metadata
            if tag == SYNAPROM_TAG_MFW_HEADER:
                st_mfw = SynapromMfwHeader().unpack(stream.seek(offset))

            # sanity check
            if len(images) > SYNAPROM_COUNT_MAX:
                raise TooManyChunksException(
                    'maximum number of images exceeded, maximum is 0x%02x' % SYNAPROM_COUNT_MAX)

            # next item
            offset += hdrsz

        for image in images.values():
            self.add_image(image)
        if st_mfw is not None:
            self.product_id = st_mfw.product.value
            self.version = st_mfw.version

    def write(self):
        st_hdr = SynapromChunkHeader()
        st_mfw = SynapromMfwHeader()
        buf = bytearray()

        if not 0 <= self.product_id <= 0xffffffff:
            raise FirmwareException('product id 0x%x does not fit 32 bits' % self.product_id)
        if not self.product_id:
            self.logger.warning('writing firmware without a product id')

        # add header
        st_hdr.tag.value = SYNAPROM_TAG_MFW_HEADER
        st_hdr.bufsz.value = st_mfw.size
        st_hdr.pack_into(buf)
        st_mfw.product.value = self.product_id
        st_mfw.pack_into(buf)

        # add payload
        try:
            payload = self.get_bytes_with_patches()
        except FirmwareException as e:
            raise PayloadUnavailableException('cannot get payload: %s' % e.msg) from e
        st_hdr.tag.value = SYNAPROM_TAG_MFW_PAYLOAD
        st_hdr.bufsz.value = len(payload)
        st_hdr.pack_into(buf)
        buf += payload

        # add signature
        buf += b'\xff' * SYNAPROM_SIGSIZE

        return bytes(buf)

    def build(self, descriptor):
        super().build(descriptor)

        # simple properties
        tmp = descriptor.get_uint('product_id')
        if tmp is not None and tmp <= 0xffffffff:
            self.product_id = tmp

    def export(self):
        tree = super().export()
        tree['product_id'] = '0x%x' % self.product_id

        return tree
