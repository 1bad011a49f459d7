"""
Bit-level input and output streams backed by bitarray.

Bits are read and written most-significant first. Reads that run past the
end of the data return END instead of raising.
"""

from bitarray import bitarray
from bitarray.util import ba2int, int2ba

END = -1


class BitInputStream:
    """
    Reads fixed-width unsigned values from a byte buffer.

    The whole input is held in memory so that it can be rewound with reset()
    and read a second time.
    """

    def __init__(self, data: bytes = b""):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("Input data must be bytes-like.")
        self._bits = bitarray(endian="big")
        self._bits.frombytes(bytes(data))
        self._pos = 0
        self.bits_read = 0

    @classmethod
    def from_file(cls, path) -> "BitInputStream":
        with open(path, "rb") as f:
            return cls(f.read())

    def read_bits(self, n: int) -> int:
        """
        Reads the next n bits as an unsigned integer.

        Parameters:
        n (int): Number of bits to read, at least 1.

        Returns:
        int: The value read, or END if fewer than n bits remain.
        """
        if n < 1:
            raise ValueError(f"Cannot read {n} bits")
        end = self._pos + n
        if end > len(self._bits):
            return END
        value = ba2int(self._bits[self._pos:end])
        self._pos = end
        self.bits_read += n
        return value

    def read_bit(self) -> int:
        if self._pos >= len(self._bits):
            return END
        bit = self._bits[self._pos]
        self._pos += 1
        self.bits_read += 1
        return bit

    def read_byte(self) -> int:
        return self.read_bits(8)

    def reset(self) -> None:
        """Rewinds to the first bit; bits_read keeps counting."""
        self._pos = 0

    def close(self) -> None:
        self._bits = bitarray(endian="big")
        self._pos = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class BitOutputStream:
    """
    Collects bits and hands them to a binary sink when closed.

    close() pads the final byte with zero bits. Without a sink the packed
    bytes stay available from getvalue().
    """

    def __init__(self, sink=None):
        self._bits = bitarray(endian="big")
        self._sink = sink
        self._data = None
        self.bits_written = 0

    @property
    def closed(self) -> bool:
        return self._data is not None

    def write_bits(self, width: int, value: int) -> None:
        """
        Writes the low `width` bits of value, most significant bit first.

        Parameters:
        width (int): Number of bits to write, at least 1.
        value (int): Non-negative value; higher bits are discarded.
        """
        if self.closed:
            raise ValueError("Write to a closed BitOutputStream")
        if width < 1:
            raise ValueError(f"Cannot write {width} bits")
        self._bits.extend(int2ba(value & ((1 << width) - 1), length=width, endian="big"))
        self.bits_written += width

    def close(self) -> None:
        if self.closed:
            return
        self._bits.fill()
        self._data = self._bits.tobytes()
        if self._sink is not None:
            self._sink.write(self._data)
            self._sink.flush()

    def getvalue(self) -> bytes:
        """Returns the packed bytes, padding the last byte if still open."""
        if self.closed:
            return self._data
        return self._bits.tobytes()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
