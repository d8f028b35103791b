import struct

import pytest


SIGNATURE = b'\xff' * 0x100


def make_chunk(tag, body):
    return struct.pack('<HI', tag, len(body)) + body


def make_mfw_header(product, vmajor=10, vminor=1, id=0xff, buildtime=0xff, buildnum=0xff):
    return struct.pack('<IIIIBB', product, id, buildtime, buildnum, vmajor, vminor) + b'\x00' * 6


@pytest.fixture
def chunk():
    return make_chunk


@pytest.fixture
def mfw_header():
    return make_mfw_header


@pytest.fixture
def signature():
    return SIGNATURE


@pytest.fixture
def firmware_blob():
    '''An update file like the ones shipped for the sensors, with also the configuration.'''
    return b''.join([
        make_chunk(0x0001, make_mfw_header(0x41, vmajor=10, vminor=1)),
        make_chunk(0x0002, b'\xde\xad\xbe\xef' * 4),
        make_chunk(0x0003, b'\x01\x02\x03\x04'),
        make_chunk(0x0004, b'\xca\xfe'),
        SIGNATURE,
    ])
