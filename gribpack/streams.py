from . import bits
from .exceptions import BitStreamError


class BitStream(object):
    '''This is a simple wrapper around a byte buffer to uniform its access
    as a stream of bits: it keeps the cursor (in bits) that every read()
    and write() advances by the number of bits involved.

    A stream must not be shared between concurrent operations: writing is a
    read-modify-write of the boundary bytes.'''
    def __init__(self, obj=b'', offset=0):
        '''Here we normalize the object in order to be accessed as a mutable buffer'''
        self._type = type(obj)
        self.history = []

        init_method_name = 'init_%s' % obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to build a stream from' % obj.__class__.__name__)

        self.buffer = init_method(obj)
        self.position = 0
        self.seek(offset)

    def __repr__(self):
        return '<%s(position=%d, size=%d)>' % (self.__class__.__name__, self.position, len(self.buffer))

    def __len__(self):
        '''Size in bits of the underlying buffer'''
        return len(self.buffer) * 8

    def init_bytes(self, obj):
        '''We think these are raw bytes, we need a copy to be able to write'''
        return bytearray(obj)

    def init_bytearray(self, obj):
        '''The buffer is shared with the caller'''
        return obj

    def init_memoryview(self, obj):
        return bytearray(obj)

    def init_int(self, obj):
        '''We think this is the size in bytes of a new zero filled buffer'''
        if obj < 0:
            raise ValueError('a stream can\'t have negative size')
        return bytearray(obj)

    def seek(self, position):
        if not isinstance(position, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % position.__class__.__name__)

        if not 0 <= position <= len(self):
            raise ValueError('bit position %d outside of the stream (%d bits)' % (position, len(self)))

        self.position = position

    def skip(self, nbits):
        self.seek(self.position + nbits)

    def tell(self):
        return self.position

    def bits_remaining(self):
        return len(self) - self.position

    def read(self, nbits):
        value = bits.extract_field(self.buffer, self.position, nbits)
        self.position += nbits

        return value

    def read_many(self, nbits, count, stride=0):
        values = bits.extract_fields(self.buffer, self.position, nbits, stride, count)
        self.position += (nbits + stride) * count

        return values

    def read_bytes(self, n):
        '''Read n whole bytes, the stream must be byte aligned'''
        if self.position % 8:
            raise ValueError('reading bytes from a stream not aligned (position %d)' % self.position)

        start = self.position // 8
        if start + n > len(self.buffer):
            raise BitStreamError('reading %d bytes past the end of the stream' % n)

        self.position += n * 8

        return bytes(self.buffer[start:start + n])

    def write(self, value, nbits):
        bits.insert_field(self.buffer, value, self.position, nbits)
        self.position += nbits

    def write_many(self, values, nbits, stride=0):
        values = list(values)
        bits.insert_fields(self.buffer, values, self.position, nbits, stride)
        self.position += (nbits + stride) * len(values)

    def getvalue(self):
        return bytes(self.buffer)

    def save(self):
        self.history.append(self.position)

    def restore(self):
        old_position = self.history.pop()
        self.seek(old_position)

    def discard(self):
        '''Forget the last saved position without moving'''
        self.history.pop()
