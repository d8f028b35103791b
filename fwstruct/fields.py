"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct

from .meta import FieldBase
from .streams import Stream


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    @property
    def raw(self) -> bytes:
        return self.pack()

    def relayout(self, offset=0):
        self.offset = offset

        return self.size

    def pack(self) -> bytes:
        raise NotImplementedError('you need to implement this in the subclass')

    def unpack(self, stream: Stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        width = self.size * 2  # we want to be as large as possible
        formatter = '0x%%0%dx' % width
        return formatter % (self.value,)

    def get_format(self):
        # all the records of the firmware containers are little endian
        return '<%s' % self.format

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _set_value(self, value) -> None:
        # fail early instead of at packing time
        try:
            struct.pack(self.get_format(), value)
        except struct.error as e:
            raise ValueError(f'value {value!r} does not fit field \'{self.name}\' ({self.format}): {e}')

        super()._set_value(value)

    def pack(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def unpack(self, stream: Stream):
        raw = stream.read(self.size)
        self.value = struct.unpack(self.get_format(), raw)[0]


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def value_from_default(self):
        return b'\x00' * self.length if not self.default else self.default

    def _get_size(self):
        return self.length

    def _set_value(self, value) -> None:
        if len(value) != self.length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        super()._set_value(bytes(value))

    def pack(self) -> bytes:
        return self.value

    def unpack(self, stream: Stream):
        self.value = stream.read(self.length)
