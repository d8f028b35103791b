"""
Core module for the abstraction of a fixed layout binary record

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import UnpackException


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    The fields are declared as class attributes and their order of declaration
    is the order on the wire, so that the offset of each field is implied

        class Header(Chunk):
            tag   = fields.StructField('H')
            bufsz = fields.StructField('I')

    A Chunk can contain sub-chunks.
    """

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if data is not None:
            self.unpack(data if isinstance(data, Stream) else Stream(data))
        else:
            self.relayout()

    def get_ordered_fields_name(self) -> List[str]:
        return self._fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, str(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_value(self):
        return {name: field.value for name, field in self.get_fields()}

    def _set_value(self, value):
        for name, field_value in value.items():
            getattr(self, name).value = field_value

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets.'''
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            size += field_instance.relayout(offset=offset + size)

        return size

    def pack(self) -> bytes:
        '''Create the raw data encoding of the instance: fields never
        set keep their default value.'''
        self.relayout(self.offset or 0)

        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.pack()
            self.logger.debug("field '%s' raw=%s" % (field_name, field_raw.hex()))
            value += field_raw

        return value

    def pack_into(self, buf: bytearray) -> bytearray:
        '''Append the encoding of the instance to buf.'''
        buf += self.pack()

        return buf

    def unpack(self, stream: Stream):
        '''Take a binary data and transform in the representation given by the class
        this method is implemented, reading from the actual offset of the stream.

        A failure is re-raised as it is, only the chain is extended
        with the name of the field that caused it.
        '''
        offset = stream.tell()
        self.relayout(offset)

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset 0x%x' % (self.__class__.__name__, field_name, stream.tell()))

            try:
                field.unpack(stream)
            except UnpackException as e:
                e.chain.append(field_name)
                raise

        return self

    def unpack_from(self, buf, offset=0, limit=None):
        '''Unpack from buf starting at offset without reading at or past limit
        (by default the end of buf).'''
        stream = Stream(buf, limit=limit)
        stream.seek(offset)

        return self.unpack(stream)
