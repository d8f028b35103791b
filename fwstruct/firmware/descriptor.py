'''
Structured descriptions used to build a firmware without starting from a blob.

The same firmware can be described with a plain mapping

    MappingDescriptor({'product_id': 0x41})

or with an XML document like

    <firmware gtype="SynapromFirmware">
      <product_id>0x41</product_id>
    </firmware>
'''
import logging
from xml.etree.ElementTree import Element
from typing import Mapping, Optional

import defusedxml.ElementTree


logger = logging.getLogger(__name__)

G_MAXUINT64 = 0xffffffffffffffff


def parse_uint(value) -> Optional[int]:
    '''Convert a decimal or 0x-prefixed hexadecimal value to an unsigned
    64 bit integer, None if it's not possible.'''
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        result = value
    else:
        text = str(value).strip()
        try:
            result = int(text, 16) if text.lower().startswith('0x') else int(text, 10)
        except ValueError:
            logger.debug('cannot convert %r to integer', value)
            return None

    if result < 0 or result > G_MAXUINT64:
        logger.debug('value %r is not an unsigned 64 bit integer', value)
        return None

    return result


class Descriptor(object):
    '''Read-only access to a structured description by key.'''

    def get_str(self, key: str) -> Optional[str]:
        raise NotImplementedError()

    def get_uint(self, key: str) -> Optional[int]:
        value = self.get_str(key)
        if value is None:
            return None

        return parse_uint(value)


class MappingDescriptor(Descriptor):

    def __init__(self, mapping: Mapping):
        self.mapping = mapping

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, dict(self.mapping))

    def get_str(self, key):
        value = self.mapping.get(key)
        if value is None:
            return None
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).hex()

        return str(value)

    def get_uint(self, key):
        value = self.mapping.get(key)
        if value is None:
            return None

        return parse_uint(value)


class XMLDescriptor(Descriptor):
    '''The children of the root element are the keys.

    The document comes from the user so it's parsed refusing entity
    declarations and external references.'''

    def __init__(self, root: Element):
        self.root = root

    @classmethod
    def from_string(cls, text):
        return cls(defusedxml.ElementTree.fromstring(text))

    @classmethod
    def from_path(cls, path):
        return cls(defusedxml.ElementTree.parse(path).getroot())

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.root.tag)

    def get_str(self, key):
        node = self.root.find(key)
        if node is None or node.text is None:
            return None

        return node.text.strip()
