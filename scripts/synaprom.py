#!/usr/bin/env python3
'''
Inspect or create the update files for the Synaptics Prometheus sensors.

 $ synaprom.py dump <firmware file>
 $ synaprom.py build <descriptor xml> <payload file> <output file>
'''
import logging
import os
import sys

from defusedxml import DefusedXmlException

from fwstruct.exceptions import FwstructException
from fwstruct.firmware.descriptor import XMLDescriptor
from fwstruct.firmware.synaprom import SynapromFirmware


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logger.setLevel(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)
if 'DEBUG' in os.environ:
    logging.getLogger('fwstruct').setLevel(logging.DEBUG)


def usage(progname):
    print(f'usage: {progname} dump <firmware file>')
    print(f'       {progname} build <descriptor xml> <payload file> <output file>')
    sys.exit(1)


def dump(path):
    with open(path, 'rb') as f:
        firmware = SynapromFirmware(f.read())

    print(f'Product ID: 0x{firmware.product_id:08x}')
    print(f'Version:    {firmware.version}')
    for idx, image in enumerate(firmware.images.values()):
        print(f'[{idx:02d}] 0x{image.idx:04x} {image.id or "":<20} offset=0x{image.offset:08x} size=0x{len(image):08x}')


def build(descriptor_path, payload_path, output_path):
    firmware = SynapromFirmware()
    firmware.build(XMLDescriptor.from_path(descriptor_path))

    with open(payload_path, 'rb') as f:
        firmware.bytes = f.read()

    blob = firmware.write()

    with open(output_path, 'wb') as f:
        f.write(blob)

    logger.info(f'written {len(blob)} bytes to {output_path} for product 0x{firmware.product_id:08x}')


if __name__ == '__main__':
    if len(sys.argv) < 3:
        usage(sys.argv[0])

    command = sys.argv[1]

    try:
        if command == 'dump':
            dump(sys.argv[2])
        elif command == 'build' and len(sys.argv) == 5:
            build(*sys.argv[2:5])
        else:
            usage(sys.argv[0])
    except (FwstructException, DefusedXmlException) as e:
        logger.error(f'{command} failed: {e}')
        sys.exit(2)
