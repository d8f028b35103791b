import io

from .exceptions import OutOfBoundsException


class Stream(object):
    '''This is a simple wrapper around bytes-like objects to
    uniform its properties: mainly we need a seek() and a read()
    that never go past the "limit" of the data we are allowed to look at.

    Reading beyond the limit raises OutOfBoundsException instead of
    returning a short read.'''
    def __init__(self, obj, limit=None):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to stream' % self._type.__name__)

        init_method()

        self.limit = self.size if limit is None else min(limit, self.size)

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%s, offset=0x%x, limit=0x%x)>' % (
            self.__class__.__name__, self._type.__name__, self.tell(), self.limit)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    @property
    def size(self):
        return len(self.obj.getbuffer())

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        if offset < 0:
            raise OutOfBoundsException('negative offset %d' % offset)

        self.obj.seek(offset)

        return self

    def tell(self):
        return self.obj.tell()

    def read(self, n):
        '''Read exactly n bytes or fail.'''
        offset = self.tell()
        if n < 0 or offset + n > self.limit:
            raise OutOfBoundsException(
                'reading 0x%x bytes at offset 0x%x exceeds limit 0x%x' % (n, offset, self.limit))

        return self.obj.read(n)

    def read_all(self):
        '''Returns all the data up to the limit.'''
        return self.read(max(self.limit - self.tell(), 0))

    def write(self, data):
        return self.obj.write(data)

    def getvalue(self):
        return self.obj.getvalue()
