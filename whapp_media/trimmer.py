from . import config
from .errors import TrailerUnderflow

MAC_SIZE = 10


class TrailerTrimmer:
    """Drops the last ``n`` bytes of a stream of unknown length.

    Works like a cipher context: ``update`` takes a chunk and returns whatever
    is safe to release, ``finalize`` returns the rest minus the trailer.
    At most ``capacity`` bytes are held between calls and the final ``n``
    bytes seen so far are always among them.
    """

    def __init__(self, n=MAC_SIZE, capacity=None):
        capacity = config.BUFFER_SIZE if capacity is None else capacity
        if capacity <= n:
            raise ValueError(f"capacity ({capacity}) must be larger than the trailer size ({n})")

        self.n = n
        self.capacity = capacity
        self._buffer = bytearray()
        self._seen = 0

    def update(self, chunk):
        self._seen += len(chunk)

        if len(self._buffer) + len(chunk) <= self.capacity:
            self._buffer += chunk
            return b""

        self._buffer += chunk
        out = bytes(self._buffer[:-self.n])
        del self._buffer[:-self.n]
        return out

    def finalize(self):
        if self._seen <= self.n:
            raise TrailerUnderflow(f"File too small to remove MAC ({self._seen} bytes)")

        out = bytes(self._buffer[:-self.n])
        self._buffer.clear()
        return out
